"""Shared fixtures: small AST trees, configs and build contexts."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from cppdocgen.build_config import BuildConfig, ProjectInfo, Source
from cppdocgen.build_context import BuildContext
from cppdocgen.entity import Entity, Location
from cppdocgen.linker import Linker
from cppdocgen.renderer import Renderer
from cppdocgen.symbol_graph import SymbolGraph
from cppdocgen.url_path import UrlPath


def ent(kind: str, name: str | None = None, *children: Entity, **kw: Any) -> Entity:
    """Shorthand for building AST entities in tests."""
    return Entity(kind=kind, name=name, children=tuple(children), **kw)


def unit(*children: Entity) -> Entity:
    """A translation unit holding `children`."""
    return ent("TranslationUnit", None, *children)


def at(file: str) -> Location:
    """Location in `file`."""
    return Location(file=file)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., BuildConfig]:
    """Factory for a BuildConfig rooted in a temporary directory."""

    def make(**overrides: Any) -> BuildConfig:
        values: dict[str, Any] = {
            "project": ProjectInfo(name="Demo", version="1.0"),
            "input_dir": tmp_path,
            "output_dir": tmp_path / "out",
            "sources": (Source(name="demo", dir=UrlPath.parse("include")),),
            "external_reference": UrlPath.parse("https://en.cppreference.com/w/cpp"),
            "jobs": 2,
        }
        values.update(overrides)
        return BuildConfig(**values)

    return make


@pytest.fixture
def make_context(
    make_config: Callable[..., BuildConfig],
) -> Callable[..., BuildContext]:
    """Factory for a BuildContext over the given translation units."""

    def make(
        *units: Entity, renderer: Renderer | None = None, **overrides: Any
    ) -> BuildContext:
        config = make_config(**overrides)
        graph = SymbolGraph.build(units)
        return BuildContext(
            config=config,
            graph=graph,
            linker=Linker(config, graph),
            renderer=renderer or Renderer(),
        )

    return make
