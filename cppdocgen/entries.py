"""Schedulable pages for symbols: namespaces, classes, structs, functions.

Every entry exposes the same interface:

- `name()`: display name
- `url()`: site-relative page path
- `nav()`: sidebar item
- `build(builder)`: submit this page (and any children) and return the futures
- `output(context)`: prepared template fragments, for pages that have one
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING, ClassVar

from cppdocgen.html_fragments import (
    NO_DESCRIPTION,
    fmt_doc_comment,
    fmt_fun_signature,
    fmt_include,
    fmt_listing,
    fmt_members,
    fmt_prose,
)
from cppdocgen.member_anchor import member_anchor
from cppdocgen.nav_item import NavDir, NavLink, NavRoot, SubItem
from cppdocgen.page_output import PageOutput
from cppdocgen.symbol import SymbolKind, Visibility
from cppdocgen.url_path import UrlPath

if TYPE_CHECKING:
    from concurrent.futures import Future

    from cppdocgen.build_context import BuildContext
    from cppdocgen.builder import Builder
    from cppdocgen.file_entries import DirEntry, FileEntry, FileRootEntry
    from cppdocgen.linker import Linker
    from cppdocgen.nav_item import NavItem
    from cppdocgen.symbol import Symbol
    from cppdocgen.tutorial_entries import TutorialEntry, TutorialFolderEntry


def page_title(name: str, context: BuildContext) -> str:
    return f"{name} Docs in {context.config.project.name}"


@dataclass(frozen=True)
class _SymbolEntry:
    symbol: Symbol
    path: UrlPath

    category: ClassVar[str] = ""
    icon: ClassVar[str | None] = None

    def name(self) -> str:
        return self.symbol.name

    def url(self) -> UrlPath:
        return self.path

    def nav(self) -> NavItem:
        return NavLink(self.name(), self.path, self.icon)

    def build(self, builder: Builder) -> list[Future[None]]:
        return builder.create_output_for(self)

    def _page(self, context: BuildContext, fragments: dict[str, str]) -> PageOutput:
        project = context.config.project.name
        return PageOutput(
            url=self.path,
            template=self.category,
            title=page_title(self.name(), context),
            description=(
                f"Documentation for the {self.name()} {self.category} in {project}"
            ),
            fragments=fragments,
        )


@dataclass(frozen=True)
class ClassEntry(_SymbolEntry):
    """Page for a class (or class template)."""

    category: ClassVar[str] = "class"
    icon: ClassVar[str | None] = "box"

    def nav(self) -> NavItem:
        subitems: dict[str, SubItem] = {}
        for method in self.symbol.children_of_kind(SymbolKind.METHOD):
            if method.visibility is Visibility.PUBLIC and method.name not in subitems:
                subitems[method.name] = SubItem(method.name, member_anchor(method))
        return NavLink(self.name(), self.path, self.icon, tuple(subitems.values()))

    def output(self, context: BuildContext) -> PageOutput:
        fragments = {
            "name": escape(self.name()),
            "include": fmt_include(self.symbol, context),
            "description": fmt_prose(self.symbol.doc.description, context)
            or NO_DESCRIPTION,
            **fmt_members(self.symbol, context),
        }
        return self._page(context, fragments)


@dataclass(frozen=True)
class StructEntry(ClassEntry):
    """Page for a struct."""

    category: ClassVar[str] = "struct"
    icon: ClassVar[str | None] = "package"


@dataclass(frozen=True)
class FunctionEntry(_SymbolEntry):
    """Page for a free function and all of its overloads in one scope."""

    overloads: tuple[Symbol, ...] = ()

    category: ClassVar[str] = "function"
    icon: ClassVar[str | None] = "code"

    def output(self, context: BuildContext) -> PageOutput:
        overloads = self.overloads or (self.symbol,)
        signatures = [fmt_fun_signature(f, context.linker) for f in overloads]
        declaration = "\n".join(signatures)
        if len(overloads) == 1:
            description = fmt_doc_comment(self.symbol, context)
        else:
            description = "\n".join(
                f"<div class='overload'><p class='overload-signature'>{sig}</p>"
                f"{fmt_doc_comment(fun, context)}</div>"
                for fun, sig in zip(overloads, signatures)
            )
        fragments = {
            "name": escape(self.name()),
            "include": fmt_include(self.symbol, context),
            "declaration": f"<pre class='declaration'>{declaration}</pre>",
            "description": description,
        }
        return self._page(context, fragments)


@dataclass(frozen=True)
class NamespaceEntry(_SymbolEntry):
    """Namespace overview page plus every entry declared inside it.

    The global namespace has no page of its own; the index covers it.
    """

    children: tuple[Entry, ...] = ()

    category: ClassVar[str] = "namespace"

    def name(self) -> str:
        return self.symbol.name or "Global namespace"

    def nav(self) -> NavItem:
        namespaces = [c for c in self.children if isinstance(c, NamespaceEntry)]
        rest = sorted(
            (c for c in self.children if not isinstance(c, NamespaceEntry)),
            key=lambda c: c.name().lower(),
        )
        items = tuple(c.nav() for c in [*namespaces, *rest])
        if self.symbol.is_root:
            return NavRoot(items)
        return NavDir(self.name(), items, icon="hash")

    def build(self, builder: Builder) -> list[Future[None]]:
        handles = [] if self.symbol.is_root else builder.create_output_for(self)
        for child in self.children:
            handles.extend(child.build(builder))
        return handles

    def output(self, context: BuildContext) -> PageOutput:
        fragments = {
            "name": escape(self.symbol.display_name),
            "description": fmt_prose(self.symbol.doc.description, context),
            **fmt_listing(self.symbol.children, context),
        }
        return self._page(context, fragments)


@dataclass(frozen=True)
class IndexEntry:
    """Landing page at the site root."""

    root: Symbol

    def name(self) -> str:
        return "Home"

    def url(self) -> UrlPath:
        return UrlPath()

    def nav(self) -> NavItem:
        return NavLink(self.name(), self.url(), "home")

    def build(self, builder: Builder) -> list[Future[None]]:
        return builder.create_output_for(self)

    def output(self, context: BuildContext) -> PageOutput:
        project = context.config.project.name
        listing = fmt_listing(
            [
                c
                for c in self.root.children
                if not context.linker.is_external(c)
            ],
            context,
        )
        return PageOutput(
            url=self.url(),
            template="index",
            title=f"{project} Docs",
            description=f"Documentation for {project}",
            fragments={"listing": "\n".join(listing.values())},
        )


if TYPE_CHECKING:
    Entry = (
        NamespaceEntry
        | ClassEntry
        | StructEntry
        | FunctionEntry
        | IndexEntry
        | FileEntry
        | DirEntry
        | FileRootEntry
        | TutorialEntry
        | TutorialFolderEntry
    )


def build_symbol_entries(root: Symbol, linker: Linker) -> NamespaceEntry:
    """Entry tree mirroring the symbol graph (reserved namespaces excluded)."""
    return NamespaceEntry(root, linker.rel_url(root), tuple(_entries(root, linker)))


def _entries(scope: Symbol, linker: Linker) -> list[Entry]:
    entries: list[Entry] = []
    # overloads share a URL, so each name gets a single page
    functions: dict[str, list[Symbol]] = {}
    for child in scope.children:
        if linker.is_external(child):
            continue
        path = linker.rel_url(child)
        if child.kind is SymbolKind.NAMESPACE:
            entries.append(NamespaceEntry(child, path, tuple(_entries(child, linker))))
        elif child.kind in (SymbolKind.CLASS, SymbolKind.STRUCT):
            cls = ClassEntry if child.kind is SymbolKind.CLASS else StructEntry
            entries.append(cls(child, path))
            # nested classes get pages alongside their enclosing class
            entries.extend(_entries(child, linker))
        elif child.kind is SymbolKind.FUNCTION:
            functions.setdefault(child.name, []).append(child)
    for overloads in functions.values():
        first = overloads[0]
        entries.append(FunctionEntry(first, linker.rel_url(first), tuple(overloads)))
    return entries
