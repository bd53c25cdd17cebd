"""Pages for the physical source tree: one per header, grouped by directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING

from cppdocgen.entries import page_title
from cppdocgen.html_fragments import fmt_listing
from cppdocgen.linker import file_page_url
from cppdocgen.nav_item import NavDir, NavLink
from cppdocgen.page_output import PageOutput
from cppdocgen.symbol import SymbolKind
from cppdocgen.url_path import UrlPath

if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

    from cppdocgen.build_config import BuildConfig, Source
    from cppdocgen.build_context import BuildContext
    from cppdocgen.builder import Builder
    from cppdocgen.nav_item import NavItem

logger = logging.getLogger(__name__)

FILE_LISTED_KINDS = (SymbolKind.FUNCTION, SymbolKind.CLASS, SymbolKind.STRUCT)


@dataclass(frozen=True)
class FileEntry:
    """A header file and the symbols defined in it."""

    source: Source
    rel: UrlPath  # path inside the source root

    def name(self) -> str:
        return self.rel.file_name() or self.source.name

    def url(self) -> UrlPath:
        return file_page_url(self.source, self.rel)

    def nav(self) -> NavItem:
        return NavLink(self.name(), self.url(), "file")

    def build(self, builder: Builder) -> list[Future[None]]:
        return builder.create_output_for(self)

    def output(self, context: BuildContext) -> PageOutput:
        linker = context.linker
        url = self.url()
        defined_here = context.graph.select(
            lambda s: s.kind in FILE_LISTED_KINDS
            and s.location is not None
            and not linker.is_external(s)
            and linker.file_url(s.location.file) == url
        )
        listing = fmt_listing(defined_here, context)
        project = context.config.project.name
        return PageOutput(
            url=url,
            template="file",
            title=page_title(self.name(), context),
            description=f"Documentation for {self.rel.to_raw_string()} in {project}",
            fragments={
                "name": escape(self.name()),
                "file_path": escape(self.source.dir.join(self.rel).to_raw_string()),
                "file_url": escape(linker.tree_url(self.source, self.rel) or ""),
                "functions": listing["functions"],
                "classes": listing["classes"],
                "structs": listing["structs"],
            },
        )


@dataclass(frozen=True)
class DirEntry:
    """A directory; no page of its own, only a nav folder."""

    source: Source
    rel: UrlPath
    children: tuple[DirEntry | FileEntry, ...] = ()

    def name(self) -> str:
        return self.rel.file_name() or self.source.name

    def url(self) -> UrlPath:
        return file_page_url(self.source, self.rel)

    def nav(self) -> NavItem:
        return NavDir(self.name(), tuple(c.nav() for c in self.children), "folder")

    def build(self, builder: Builder) -> list[Future[None]]:
        handles: list[Future[None]] = []
        for child in self.children:
            handles.extend(child.build(builder))
        return handles


@dataclass(frozen=True)
class FileRootEntry(DirEntry):
    """The top of one configured source root."""

    def nav(self) -> NavItem:
        return NavDir(
            self.name(), tuple(c.nav() for c in self.children), "folder", is_open=True
        )


def collect_files(config: BuildConfig, source: Source) -> list[Path]:
    """Files under the source root matching `include` and not `exclude`."""
    root = config.input_dir / source.dir.to_path()
    if not root.is_dir():
        logger.warning("Source directory does not exist: %s", root)
        return []
    included: set[Path] = set()
    for pattern in source.include:
        included.update(p for p in root.glob(pattern) if p.is_file())
    for pattern in source.exclude:
        included.difference_update(root.glob(pattern))
    return sorted(p.relative_to(root) for p in included)


def build_file_roots(config: BuildConfig) -> list[FileRootEntry]:
    """One file tree per configured source root."""
    roots = []
    for source in config.sources:
        rels = [UrlPath.from_path(p) for p in collect_files(config, source)]
        children = _children(source, UrlPath(), rels)
        roots.append(FileRootEntry(source, UrlPath(), children))
    return roots


def _children(
    source: Source, prefix: UrlPath, rels: list[UrlPath]
) -> tuple[DirEntry | FileEntry, ...]:
    depth = len(prefix.parts)
    files: list[FileEntry] = []
    dirs: dict[str, list[UrlPath]] = {}
    for rel in rels:
        if len(rel.parts) == depth + 1:
            files.append(FileEntry(source, rel))
        else:
            dirs.setdefault(rel.parts[depth], []).append(rel)

    subdirs: list[DirEntry] = []
    for name in sorted(dirs):
        sub = prefix.join(UrlPath.part(name))
        subdirs.append(DirEntry(source, sub, _children(source, sub, dirs[name])))
    return (*subdirs, *files)
