"""Pages for the hand-written tutorials directory."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING

from cppdocgen.entries import page_title
from cppdocgen.errors import ConfigError
from cppdocgen.html_fragments import fmt_section
from cppdocgen.markdown_text import extract_title, fmt_markdown, split_front_matter
from cppdocgen.nav_item import NavDir, NavLink, NavRoot
from cppdocgen.page_output import PageOutput
from cppdocgen.url_path import UrlPath

if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

    from cppdocgen.build_config import BuildConfig
    from cppdocgen.build_context import BuildContext
    from cppdocgen.builder import Builder
    from cppdocgen.nav_item import NavItem

TUTORIALS = UrlPath.part("tutorials")
SKIPPED_FILES = {"readme.md", "index.md"}
OPEN_DEPTH = 2


@dataclass(frozen=True)
class TutorialEntry:
    """One markdown tutorial."""

    rel: UrlPath  # path inside the tutorials directory, without `.md`
    title: str
    body: str
    description: str = ""
    icon: str | None = None

    def name(self) -> str:
        return self.title

    def url(self) -> UrlPath:
        return TUTORIALS.join(self.rel)

    def nav(self) -> NavItem:
        return NavLink(self.title, self.url(), self.icon or "bookmark")

    def build(self, builder: Builder) -> list[Future[None]]:
        return builder.create_output_for(self)

    def output(self, context: BuildContext) -> PageOutput:
        return PageOutput(
            url=self.url(),
            template="tutorial",
            title=page_title(self.title, context),
            description=self.description
            or f"{self.title} tutorial for {context.config.project.name}",
            fragments={"name": escape(self.title), "content": fmt_markdown(self.body)},
        )


@dataclass(frozen=True)
class TutorialFolderEntry:
    """A folder holding tutorials; its page renders `index.md` if present."""

    rel: UrlPath
    title: str
    tutorials: tuple[TutorialEntry, ...] = ()
    folders: tuple[TutorialFolderEntry, ...] = ()
    index: str | None = None
    depth: int = 0

    def name(self) -> str:
        return self.title

    def url(self) -> UrlPath:
        return TUTORIALS.join(self.rel)

    def nav(self) -> NavItem:
        items = tuple(e.nav() for e in [*self.tutorials, *self.folders])
        if self.depth == 0:
            return NavRoot(items)
        return NavDir(self.title, items, is_open=self.depth < OPEN_DEPTH)

    def build(self, builder: Builder) -> list[Future[None]]:
        handles = builder.create_output_for(self)
        for entry in [*self.folders, *self.tutorials]:
            handles.extend(entry.build(builder))
        return handles

    def output(self, context: BuildContext) -> PageOutput:
        base = context.config.output_url
        links = []
        for t in self.tutorials:
            href = escape(str(t.url().to_absolute(base)))
            links.append(f"<a href='{href}'>{escape(t.title)}</a>")
        return PageOutput(
            url=self.url(),
            template="tutorial_index",
            title=page_title(self.title, context),
            description=f"{self.title} in {context.config.project.name}",
            fragments={
                "name": escape(self.title),
                "content": fmt_markdown(self.index) if self.index else "",
                "tutorials": fmt_section("Pages", links),
            },
        )


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Unable to read tutorial {path}: {e}"
        raise ConfigError(msg) from e


def load_tutorial(root: Path, path: Path) -> TutorialEntry:
    """Read one tutorial; the title comes from front matter or the first heading."""
    meta, body = split_front_matter(_read(path))
    rel = UrlPath.from_path(path.relative_to(root)).remove_extension(".md")
    title = meta.get("title") or extract_title(body) or path.stem
    return TutorialEntry(
        rel=rel,
        title=str(title),
        body=body,
        description=str(meta.get("description") or ""),
        icon=meta.get("icon"),
    )


def _load_folder(root: Path, folder: Path, depth: int) -> TutorialFolderEntry | None:
    tutorials: list[TutorialEntry] = []
    folders: list[TutorialFolderEntry] = []
    for child in sorted(folder.iterdir()):
        if child.is_dir():
            sub = _load_folder(root, child, depth + 1)
            if sub is not None:
                folders.append(sub)
        elif child.suffix == ".md" and child.name.lower() not in SKIPPED_FILES:
            tutorials.append(load_tutorial(root, child))

    # folders without tutorials are dropped
    if not tutorials and not folders:
        return None

    index = None
    title = folder.name if depth else "Tutorials"
    index_file = folder / "index.md"
    if index_file.is_file():
        meta, index = split_front_matter(_read(index_file))
        title = str(meta.get("title") or extract_title(index) or title)

    return TutorialFolderEntry(
        rel=UrlPath.from_path(folder.relative_to(root)),
        title=title,
        tutorials=tuple(sorted(tutorials, key=lambda t: t.rel.to_raw_string())),
        folders=tuple(folders),
        index=index,
        depth=depth,
    )


def load_tutorials(config: BuildConfig) -> TutorialFolderEntry | None:
    """Tutorial tree of the configured directory, or None if there is none."""
    root = config.tutorials_dir
    if root is None:
        return None
    if not root.is_dir():
        msg = f"Tutorials directory does not exist: {root}"
        raise ConfigError(msg)
    return _load_folder(root, root, 0)
