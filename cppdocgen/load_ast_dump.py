"""Load AST dumps written by the external C++ parser front-end.

A dump is a YAML (or JSON) document holding either a single
`TranslationUnit` entity or a mapping with a `units` list of them. Each entity
is a mapping with at least a `kind`; see `cppdocgen.entity` for the fields.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from cppdocgen.entity import Entity, Location, Param, TypeRef
from cppdocgen.errors import ConfigError

logger = logging.getLogger(__name__)


def load_ast_dump(path: Path) -> list[Entity]:
    """Read a dump file and return its translation units."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        msg = f"Unable to read AST dump {path}: {e}"
        raise ConfigError(msg) from e

    if doc is None:
        return []
    if isinstance(doc, dict) and "units" in doc:
        raw_units = doc.get("units") or []
    elif isinstance(doc, list):
        raw_units = doc
    else:
        raw_units = [doc]

    units = []
    for raw in raw_units:
        try:
            entity = parse_entity(raw)
        except (TypeError, ValueError) as e:
            msg = f"Malformed AST dump {path}: {e}"
            raise ConfigError(msg) from e
        if entity is not None:
            units.append(entity)
    return units


def parse_entity(raw: Any) -> Entity | None:
    """Convert one raw mapping (and its children) into an Entity."""
    if not isinstance(raw, dict) or not raw.get("kind"):
        logger.warning("Skipping malformed AST entity: %r", raw)
        return None

    children = tuple(
        child
        for child in (parse_entity(c) for c in raw.get("children") or [])
        if child is not None
    )
    name = raw.get("name")
    return Entity(
        kind=str(raw["kind"]),
        name=str(name) if name else None,
        location=_parse_location(raw.get("location")),
        comment=raw.get("comment") or None,
        usr=raw.get("usr") or None,
        access=raw.get("access") or None,
        is_definition=bool(raw.get("definition", True)),
        in_system_header=bool(raw.get("system_header", False)),
        type=_parse_type(raw.get("type")),
        return_type=_parse_type(raw.get("return_type")),
        params=tuple(_parse_param(p) for p in raw.get("params") or []),
        is_static=bool(raw.get("static", False)),
        is_virtual=bool(raw.get("virtual", False)),
        is_const=bool(raw.get("const", False)),
        is_pure_virtual=bool(raw.get("pure_virtual", False)),
        children=children,
    )


def _parse_location(raw: Any) -> Location | None:
    if isinstance(raw, str):
        return Location(file=raw)
    if not isinstance(raw, dict) or not raw.get("file"):
        return None
    return Location(
        file=str(raw["file"]),
        start=int(raw.get("start") or 0),
        end=int(raw.get("end") or 0),
    )


def _parse_type(raw: Any) -> TypeRef | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return TypeRef(display=raw)
    if not isinstance(raw, dict):
        return None
    qualified = raw.get("qualified_name") or ()
    if isinstance(qualified, str):
        qualified = qualified.split("::")
    return TypeRef(
        display=str(raw.get("display") or "::".join(qualified) or "?"),
        usr=raw.get("usr") or None,
        qualified_name=tuple(str(q) for q in qualified),
        file=raw.get("file") or None,
    )


def _parse_param(raw: Any) -> Param:
    if not isinstance(raw, dict):
        return Param(name=str(raw) if raw else None)
    return Param(name=raw.get("name") or None, type=_parse_type(raw.get("type")))
