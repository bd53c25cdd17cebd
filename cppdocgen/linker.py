"""URL derivation and cross-reference resolution for symbols and files."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import TYPE_CHECKING

from cppdocgen.member_anchor import member_anchor
from cppdocgen.symbol import SymbolKind
from cppdocgen.url_path import UrlPath, page_segment

if TYPE_CHECKING:
    from cppdocgen.build_config import BuildConfig, Source
    from cppdocgen.entity import TypeRef
    from cppdocgen.symbol import Symbol
    from cppdocgen.symbol_graph import SymbolGraph

logger = logging.getLogger(__name__)

MEMBER_KINDS = (SymbolKind.METHOD, SymbolKind.FIELD)


class Linker:
    """Maps symbols and source files to page URLs.

    Every symbol gets a category-prefixed path built from its qualified
    name (`class/ns/Foo`). Methods and fields live on their owner's page
    and are addressed with an anchor. Symbols inside a reserved namespace
    (`std` by default) never get a page; they link to the external
    reference site instead.
    """

    def __init__(self, config: BuildConfig, graph: SymbolGraph) -> None:
        self.config = config
        self.graph = graph

    # -----------------------------
    # Symbols
    # -----------------------------

    def is_external(self, symbol: Symbol) -> bool:
        """Check whether the symbol lives in a reserved namespace."""
        return (
            bool(symbol.qualified_name)
            and symbol.qualified_name[0] in self.config.reserved_namespaces
        )

    def page_owner(self, symbol: Symbol) -> Symbol:
        """The symbol whose page documents `symbol`."""
        while symbol.kind in MEMBER_KINDS and symbol.parent is not None:
            symbol = symbol.parent
        return symbol

    def rel_url(self, symbol: Symbol) -> UrlPath:
        """Site-relative page path of the symbol (members map to their owner)."""
        owner = self.page_owner(symbol)
        if owner.is_root:
            return UrlPath()
        return UrlPath(
            (owner.kind.value, *(page_segment(p) for p in owner.qualified_name))
        )

    def abs_url(self, symbol: Symbol, base: UrlPath | None = None) -> UrlPath:
        """Absolute page URL under `base`, or the external reference URL."""
        if self.is_external(symbol):
            owner = self.page_owner(symbol)
            file = owner.location.file if owner.location else None
            return self._external(owner.name, file)
        return self.rel_url(symbol).to_absolute(
            self.config.output_url if base is None else base
        )

    def anchor(self, symbol: Symbol) -> str | None:
        """In-page anchor for members, None for symbols with their own page."""
        if symbol.kind not in MEMBER_KINDS:
            return None
        return member_anchor(symbol)

    def href(self, symbol: Symbol) -> str:
        """Link string for the symbol, including the member anchor if any."""
        url = str(self.abs_url(symbol))
        anchor = self.anchor(symbol)
        if anchor and not self.is_external(symbol):
            return f"{url}#{anchor}"
        return url

    def type_href(self, type_ref: TypeRef | None) -> str | None:
        """Resolve a type reference; None for builtins and unknown types."""
        if type_ref is None:
            return None
        symbol = None
        if type_ref.usr:
            symbol = self.graph.by_usr(type_ref.usr)
        if symbol is None and type_ref.qualified_name:
            symbol = self.graph.find(type_ref.qualified_name)
        if symbol is not None:
            return self.href(symbol)

        qualified = type_ref.qualified_name
        if qualified and qualified[0] in self.config.reserved_namespaces:
            return str(self._external(qualified[-1], type_ref.file))
        if type_ref.usr or qualified:
            logger.warning("Unresolved type reference: %s", type_ref.display)
        return None

    def resolve(self, name: str, scope: Symbol | None = None) -> str | None:
        """Resolve a (possibly partially qualified) name, searching outwards."""
        parts = tuple(p for p in name.strip().split("::") if p)
        if not parts:
            return None
        if parts[0] in self.config.reserved_namespaces:
            return str(self._external(parts[-1], None))

        current = scope
        while current is not None:
            symbol = self.graph.find((*current.qualified_name, *parts))
            if symbol is not None:
                return self.href(symbol)
            current = current.parent
        symbol = self.graph.find(parts)
        if symbol is not None:
            return self.href(symbol)

        logger.warning("Unresolved reference: %s", name)
        return None

    def _external(self, name: str, file: str | None) -> UrlPath:
        # en.cppreference.com/w/cpp/<header>/<name>
        url = self.config.external_reference
        if file:
            url = url.join(UrlPath.part(PurePath(file).stem))
        return url.join(UrlPath.part(name))

    # -----------------------------
    # Files
    # -----------------------------

    def source_root(self, source: Source) -> UrlPath:
        """Filesystem location of a source root, as a path."""
        return UrlPath.from_path(self.config.input_dir).join(source.dir)

    def relative_file(self, file: str) -> tuple[Source, UrlPath] | None:
        """Find the source root containing `file` and its path inside it."""
        path = UrlPath.from_path(file)
        for source in self.config.sources:
            for root in (self.source_root(source), source.dir):
                if root.parts and path.starts_with(root):
                    return source, path.strip_prefix(root)
        return None

    def file_url(self, file: str) -> UrlPath | None:
        """Site-relative page path of a source file."""
        found = self.relative_file(file)
        if found is None:
            return None
        return file_page_url(*found)

    def header_path(self, symbol: Symbol) -> UrlPath | None:
        """Installable include path, as shown in `#include <...>`."""
        location = self.page_owner(symbol).location
        if location is None:
            return None
        found = self.relative_file(location.file)
        if found is None:
            return None
        source, rel = found
        if source.strip_prefix is not None:
            rel = rel.strip_prefix(source.strip_prefix)
        return rel

    def source_url(self, symbol: Symbol) -> str | None:
        """Link to the symbol's header in the hosted source tree."""
        tree = self.config.project.tree
        location = self.page_owner(symbol).location
        if not tree or location is None:
            return None
        found = self.relative_file(location.file)
        if found is None:
            return None
        return self.tree_url(*found)

    def tree_url(self, source: Source, rel: UrlPath) -> str | None:
        """Hosted source tree link for a file; `{path}` in the template is optional."""
        tree = self.config.project.tree
        if not tree:
            return None
        path = source.dir.join(rel)
        if "{path}" in tree:
            return tree.replace("{path}", str(path).lstrip("/"))
        return str(UrlPath.parse(tree).join(path))


def file_page_url(source: Source, rel: UrlPath) -> UrlPath:
    """Page path of a file at `rel` inside `source`."""
    return UrlPath(("files", source.name, *rel.parts))
