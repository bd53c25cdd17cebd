"""Canonical symbols documented by the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING

from cppdocgen.parse_doc_comment import parse_doc_comment

if TYPE_CHECKING:
    from cppdocgen.doc_comment import DocComment
    from cppdocgen.entity import Location, Param, TypeRef


class SymbolKind(Enum):
    """Kinds of documented C++ constructs."""

    NAMESPACE = "namespace"
    CLASS = "class"
    STRUCT = "struct"
    FUNCTION = "function"
    FIELD = "field"
    METHOD = "method"


class Visibility(Enum):
    """Member access level."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class Signature:
    """Declaration details of a function or method."""

    return_type: TypeRef | None = None
    params: tuple[Param, ...] = ()
    is_static: bool = False
    is_virtual: bool = False
    is_const: bool = False
    is_pure_virtual: bool = False


@dataclass(eq=False)
class Symbol:
    """A node of the symbol graph; owned by its parent, the root by the graph."""

    kind: SymbolKind
    qualified_name: tuple[str, ...]
    location: Location | None = None
    comment: str | None = None
    usr: str | None = None
    visibility: Visibility | None = None
    signature: Signature | None = None
    field_type: TypeRef | None = None
    parent: Symbol | None = field(default=None, repr=False)
    children: list[Symbol] = field(default_factory=list, repr=False)

    @property
    def name(self) -> str:
        """Unqualified name."""
        return self.qualified_name[-1] if self.qualified_name else ""

    @property
    def is_root(self) -> bool:
        """Check whether this is the graph root (the global scope)."""
        return not self.qualified_name

    @property
    def display_name(self) -> str:
        """Qualified name joined with `::`."""
        return "::".join(self.qualified_name)

    @cached_property
    def doc(self) -> DocComment:
        """Parsed doc comment, built on first access."""
        return parse_doc_comment(self.comment)

    def children_of_kind(self, *kinds: SymbolKind) -> list[Symbol]:
        """Direct children of the given kinds, in declaration order."""
        return [c for c in self.children if c.kind in kinds]
