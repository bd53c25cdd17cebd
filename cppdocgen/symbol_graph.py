"""Build the canonical, de-duplicated symbol tree from AST entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cppdocgen.entity import Entity
from cppdocgen.symbol import Signature, Symbol, SymbolKind, Visibility

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

CLASS_KINDS = {
    "ClassDecl": SymbolKind.CLASS,
    "ClassTemplate": SymbolKind.CLASS,
    "StructDecl": SymbolKind.STRUCT,
}
FUNCTION_KINDS = {"FunctionDecl", "FunctionTemplate"}
METHOD_KINDS = {
    "CXXMethod",
    "Constructor",
    "Destructor",
    "ConversionFunction",
    "FunctionTemplate",
}
FIELD_KINDS = {"FieldDecl"}
# Containers whose children belong to the enclosing scope (extern "C" etc.)
TRANSPARENT_KINDS = {"TranslationUnit", "LinkageSpec", "UnexposedDecl"}

CLASSLIKE = (SymbolKind.CLASS, SymbolKind.STRUCT)


def _function_key(entity: Entity) -> tuple[str, ...]:
    if entity.usr:
        return ("usr", entity.usr)
    return (
        "sig",
        entity.name or "",
        *(p.type.display if p.type else "" for p in entity.params),
    )


def _signature(entity: Entity) -> Signature:
    return Signature(
        return_type=entity.return_type,
        params=entity.params,
        is_static=entity.is_static,
        is_virtual=entity.is_virtual,
        is_const=entity.is_const,
        is_pure_virtual=entity.is_pure_virtual,
    )


def _visibility(entity: Entity, owner: Symbol) -> Visibility:
    if entity.access:
        try:
            return Visibility(entity.access.lower())
        except ValueError:
            pass
    return Visibility.PUBLIC if owner.kind is SymbolKind.STRUCT else Visibility.PRIVATE


class _GraphBuilder:
    """Adds entities into scopes, merging namespaces and dropping duplicates."""

    def __init__(self) -> None:
        # id(scope symbol) -> key -> symbol already in that scope
        self.scopes: dict[int, dict[tuple[str, ...], Symbol]] = {}

    def _scope(self, symbol: Symbol) -> dict[tuple[str, ...], Symbol]:
        return self.scopes.setdefault(id(symbol), {})

    def _add(
        self,
        parent: Symbol,
        kind: SymbolKind,
        entity: Entity,
        key: tuple[str, ...],
    ) -> Symbol:
        name = entity.name or ""
        symbol = Symbol(
            kind=kind,
            qualified_name=(*parent.qualified_name, name),
            location=entity.location,
            comment=entity.comment,
            usr=entity.usr,
            parent=parent,
        )
        if kind in (SymbolKind.METHOD, SymbolKind.FUNCTION):
            symbol.signature = _signature(entity)
        if kind in (SymbolKind.METHOD, SymbolKind.FIELD) or parent.kind in CLASSLIKE:
            symbol.visibility = _visibility(entity, parent)
        if kind is SymbolKind.FIELD:
            symbol.field_type = entity.type
        parent.children.append(symbol)
        self._scope(parent)[key] = symbol
        return symbol

    def add_children(self, parent: Symbol, entity: Entity) -> None:
        in_class = parent.kind in CLASSLIKE
        scope = self._scope(parent)
        for child in entity.children:
            if child.in_system_header:
                continue
            if child.kind in TRANSPARENT_KINDS:
                self.add_children(parent, child)
                continue
            if not child.name:
                continue

            if child.kind == "Namespace" and not in_class:
                key = ("namespace", child.name)
                namespace = scope.get(key)
                if namespace is None:
                    namespace = self._add(parent, SymbolKind.NAMESPACE, child, key)
                elif namespace.comment is None and child.comment:
                    namespace.comment = child.comment
                self.add_children(namespace, child)

            elif child.kind in CLASS_KINDS:
                key = ("type", child.name)
                # Forward declarations are skipped; the first definition wins
                if not child.is_definition or key in scope:
                    continue
                classlike = self._add(parent, CLASS_KINDS[child.kind], child, key)
                self.add_children(classlike, child)

            elif in_class and child.kind in METHOD_KINDS:
                key = ("method", *_function_key(child))
                if key not in scope:
                    self._add(parent, SymbolKind.METHOD, child, key)

            elif in_class and child.kind in FIELD_KINDS:
                key = ("field", child.name)
                if key not in scope:
                    self._add(parent, SymbolKind.FIELD, child, key)

            elif not in_class and child.kind in FUNCTION_KINDS:
                key = ("function", *_function_key(child))
                if key not in scope:
                    self._add(parent, SymbolKind.FUNCTION, child, key)


class SymbolGraph:
    """Rooted symbol tree; read-only once built."""

    def __init__(self, root: Symbol) -> None:
        """Wrap an already built tree and index it by USR."""
        self.root = root
        self._by_usr: dict[str, Symbol] = {}
        for symbol in self.walk():
            if symbol.usr:
                self._by_usr.setdefault(symbol.usr, symbol)

    @classmethod
    def build(cls, units: Iterable[Entity]) -> SymbolGraph:
        """Merge the given translation units into one graph."""
        root = Symbol(kind=SymbolKind.NAMESPACE, qualified_name=())
        builder = _GraphBuilder()
        for unit in units:
            if unit.kind not in TRANSPARENT_KINDS:
                unit = Entity(kind="TranslationUnit", children=(unit,))
            builder.add_children(root, unit)
        return cls(root)

    def walk(self) -> Iterator[Symbol]:
        """Depth-first, pre-order traversal of every symbol except the root."""
        stack = list(reversed(self.root.children))
        while stack:
            symbol = stack.pop()
            yield symbol
            stack.extend(reversed(symbol.children))

    def select(self, predicate: Callable[[Symbol], bool]) -> list[Symbol]:
        """Flattened list of the symbols matching `predicate`."""
        return [s for s in self.walk() if predicate(s)]

    def by_usr(self, usr: str) -> Symbol | None:
        """Look a symbol up by its USR."""
        return self._by_usr.get(usr)

    def find(self, qualified_name: str | tuple[str, ...]) -> Symbol | None:
        """Look a symbol up by qualified name (`a::b::C` or a tuple)."""
        if isinstance(qualified_name, str):
            parts = tuple(p for p in qualified_name.strip().split("::") if p)
        else:
            parts = tuple(qualified_name)
        if not parts:
            return None
        current = self.root
        for part in parts:
            match = next((c for c in current.children if c.name == part), None)
            if match is None:
                return None
            current = match
        return current
