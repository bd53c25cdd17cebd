"""Shared, read-only state handed to every build component."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.build_config import BuildConfig
    from cppdocgen.linker import Linker
    from cppdocgen.renderer import Renderer
    from cppdocgen.symbol_graph import SymbolGraph


@dataclass(frozen=True)
class BuildContext:
    """Configuration, symbol graph, linker and renderer for one run."""

    config: BuildConfig
    graph: SymbolGraph
    linker: Linker
    renderer: Renderer

    def default_fragments(self) -> dict[str, str]:
        """Fragments every template may reference."""
        project = self.config.project
        return {
            "project_name": escape(project.name),
            "project_version": escape(project.version),
            "project_repository": escape(project.repository or ""),
            "project_icon": escape(project.icon or ""),
            "output_url": str(self.config.output_url),
        }
