"""A page ready to be rendered: template plus prepared fragments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.url_path import UrlPath


@dataclass(frozen=True)
class PageOutput:
    """Everything a page task needs; built on the scheduling thread."""

    url: UrlPath
    template: str  # content template id
    title: str
    description: str
    fragments: dict[str, str] = field(default_factory=dict)
