"""Data model for entities read from an external C++ AST dump."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Location:
    """Where an entity is declared: file plus offset range."""

    file: str
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class TypeRef:
    """A reference to a type as spelled in a declaration."""

    display: str
    usr: str | None = None  # USR of the referenced declaration, if any
    qualified_name: tuple[str, ...] = ()
    file: str | None = None  # file of the referenced declaration


@dataclass(frozen=True)
class Param:
    """A function parameter."""

    name: str | None
    type: TypeRef | None = None


@dataclass(frozen=True)
class Entity:
    """One node of the parsed AST (TranslationUnit, Namespace, ClassDecl, ...)."""

    kind: str
    name: str | None = None
    location: Location | None = None
    comment: str | None = None
    usr: str | None = None
    access: str | None = None  # public/protected/private for members
    is_definition: bool = True
    in_system_header: bool = False
    type: TypeRef | None = None  # field type
    return_type: TypeRef | None = None
    params: tuple[Param, ...] = ()
    is_static: bool = False
    is_virtual: bool = False
    is_const: bool = False
    is_pure_virtual: bool = False
    children: tuple[Entity, ...] = field(default=(), repr=False)
