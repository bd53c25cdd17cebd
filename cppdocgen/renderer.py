"""Template substitution producing final page bytes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cppdocgen.errors import ConfigError, RenderError
from cppdocgen.templates import DEFAULT_TEMPLATES

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)


class Renderer:
    """Fills `{name}` placeholders of the configured templates."""

    def __init__(self, templates: Mapping[str, str] | None = None) -> None:
        self.templates = {**DEFAULT_TEMPLATES, **(templates or {})}

    @classmethod
    def from_config(cls, overrides: Mapping[str, Path]) -> Renderer:
        """Load template overrides from disk; unreadable files are fatal."""
        templates: dict[str, str] = {}
        for name, path in overrides.items():
            if name not in DEFAULT_TEMPLATES:
                logger.warning("Ignoring override for unknown template %r", name)
                continue
            try:
                templates[name] = path.read_text(encoding="utf-8")
            except OSError as e:
                msg = f"Unable to read template {name!r} from {path}: {e}"
                raise ConfigError(msg) from e
        return cls(templates)

    def render_text(self, template_id: str, fragments: Mapping[str, str]) -> str:
        """Substitute fragments into a template."""
        template = self.templates.get(template_id)
        if template is None:
            msg = f"Unknown template {template_id!r}"
            raise RenderError(msg)
        try:
            return template.format_map(fragments)
        except KeyError as e:
            msg = f"Template {template_id!r} references unknown fragment {e}"
            raise RenderError(msg) from e
        except (ValueError, IndexError) as e:
            msg = f"Malformed template {template_id!r}: {e}"
            raise RenderError(msg) from e

    def render(self, template_id: str, fragments: Mapping[str, str]) -> bytes:
        """Substitute fragments and encode the result."""
        return self.render_text(template_id, fragments).encode("utf-8")
