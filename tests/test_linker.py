"""Tests for URL derivation and reference resolution."""

import logging

import pytest
from conftest import at, ent, unit

from cppdocgen.build_config import ProjectInfo, Source
from cppdocgen.entity import TypeRef
from cppdocgen.url_path import UrlPath

CPPREF = "https://en.cppreference.com/w/cpp"


def _lib(tmp_path):
    return unit(
        ent(
            "Namespace",
            "ns",
            ent(
                "ClassDecl",
                "Foo",
                ent("CXXMethod", "size", access="public"),
                ent("FieldDecl", "count", access="public"),
                usr="c:@N@ns@S@Foo",
                location=at(str(tmp_path / "include" / "mylib" / "foo.hpp")),
            ),
            ent("StructDecl", "Bar", location=at("include/mylib/bar.hpp")),
            ent("FunctionDecl", "make"),
        ),
        ent(
            "Namespace",
            "std",
            ent(
                "ClassDecl",
                "vector",
                ent("CXXMethod", "push_back", access="public"),
                location=at("/usr/include/c++/13/vector"),
            ),
        ),
        ent("ClassDecl", "Loose", location=at("/elsewhere/loose.hpp")),
    )


def test_rel_url_uses_category_and_qualified_name(make_context, tmp_path) -> None:
    """Verify page paths are `<kind>/<qualified name>`."""
    context = make_context(_lib(tmp_path))
    graph, linker = context.graph, context.linker
    assert linker.rel_url(graph.find("ns::Foo")) == UrlPath(("class", "ns", "Foo"))
    assert linker.rel_url(graph.find("ns::Bar")) == UrlPath(("struct", "ns", "Bar"))
    assert linker.rel_url(graph.find("ns::make")) == UrlPath(
        ("function", "ns", "make")
    )
    assert linker.rel_url(graph.find("ns")) == UrlPath(("namespace", "ns"))
    assert linker.rel_url(graph.root) == UrlPath()


def test_abs_url_is_placed_under_output_url(make_context, tmp_path) -> None:
    """Verify the configured site base and an explicit base both apply."""
    context = make_context(_lib(tmp_path), output_url=UrlPath.parse("/docs"))
    foo = context.graph.find("ns::Foo")
    assert str(context.linker.abs_url(foo)) == "/docs/class/ns/Foo"
    assert str(context.linker.abs_url(foo, UrlPath())) == "/class/ns/Foo"


def test_members_link_to_owner_with_anchor(make_context, tmp_path) -> None:
    """Verify methods and fields resolve to an anchor on their class page."""
    context = make_context(_lib(tmp_path))
    graph, linker = context.graph, context.linker
    assert linker.href(graph.find("ns::Foo::size")) == "/class/ns/Foo#method-size"
    assert linker.href(graph.find("ns::Foo::count")) == "/class/ns/Foo#field-count"
    assert linker.anchor(graph.find("ns::Foo")) is None
    assert linker.href(graph.find("ns::Foo")) == "/class/ns/Foo"


def test_reserved_namespace_links_to_external_reference(
    make_context, tmp_path
) -> None:
    """Verify `std` symbols point at the reference site by header and name."""
    context = make_context(_lib(tmp_path))
    graph, linker = context.graph, context.linker
    vector = graph.find("std::vector")
    assert linker.is_external(vector)
    assert not linker.is_external(graph.find("ns::Foo"))
    assert linker.href(vector) == f"{CPPREF}/vector/vector"
    assert linker.href(graph.find("std::vector::push_back")) == (
        f"{CPPREF}/vector/vector"
    )


def test_type_href_resolution_order(make_context, tmp_path, caplog) -> None:
    """Verify USR, then qualified name, then reserved fallback, else None."""
    context = make_context(_lib(tmp_path))
    linker = context.linker
    assert linker.type_href(TypeRef("Foo", usr="c:@N@ns@S@Foo")) == "/class/ns/Foo"
    assert (
        linker.type_href(TypeRef("ns::Bar", qualified_name=("ns", "Bar")))
        == "/struct/ns/Bar"
    )
    assert (
        linker.type_href(
            TypeRef(
                "std::string",
                qualified_name=("std", "string"),
                file="/usr/include/c++/13/string",
            )
        )
        == f"{CPPREF}/string/string"
    )
    assert linker.type_href(TypeRef("int")) is None
    assert linker.type_href(None) is None
    assert "Unresolved" not in caplog.text

    with caplog.at_level(logging.WARNING):
        assert linker.type_href(TypeRef("Gone", qualified_name=("Gone",))) is None
    assert "Unresolved type reference: Gone" in caplog.text


def test_resolve_searches_enclosing_scopes(make_context, tmp_path, caplog) -> None:
    """Verify names resolve from the innermost scope outwards."""
    context = make_context(_lib(tmp_path))
    graph, linker = context.graph, context.linker
    foo = graph.find("ns::Foo")
    assert linker.resolve("Bar", foo) == "/struct/ns/Bar"
    assert linker.resolve("size", foo) == "/class/ns/Foo#method-size"
    assert linker.resolve("ns::make") == "/function/ns/make"
    assert linker.resolve("std::vector") == f"{CPPREF}/vector"
    assert linker.resolve("  ") is None

    with caplog.at_level(logging.WARNING):
        assert linker.resolve("Nowhere", foo) is None
    assert "Unresolved reference: Nowhere" in caplog.text


def test_header_path_for_absolute_and_relative_locations(
    make_context, tmp_path
) -> None:
    """Verify include paths are relative to the source root."""
    context = make_context(_lib(tmp_path))
    graph, linker = context.graph, context.linker
    assert linker.header_path(graph.find("ns::Foo")) == UrlPath(("mylib", "foo.hpp"))
    assert linker.header_path(graph.find("ns::Bar")) == UrlPath(("mylib", "bar.hpp"))
    assert linker.header_path(graph.find("ns::Foo::size")) == UrlPath(
        ("mylib", "foo.hpp")
    )
    assert linker.header_path(graph.find("Loose")) is None
    assert linker.header_path(graph.find("ns::make")) is None


def test_header_path_applies_strip_prefix(make_context, tmp_path) -> None:
    """Verify a source's strip_prefix is removed from include paths."""
    source = Source(
        name="demo",
        dir=UrlPath.parse("include"),
        strip_prefix=UrlPath.parse("mylib"),
    )
    context = make_context(_lib(tmp_path), sources=(source,))
    assert context.linker.header_path(context.graph.find("ns::Bar")) == UrlPath(
        ("bar.hpp",)
    )


def test_file_url(make_context, tmp_path) -> None:
    """Verify file pages live under `files/<source name>/`."""
    context = make_context(_lib(tmp_path))
    linker = context.linker
    assert linker.file_url(str(tmp_path / "include" / "mylib" / "foo.hpp")) == (
        UrlPath(("files", "demo", "mylib", "foo.hpp"))
    )
    assert linker.file_url("/elsewhere/loose.hpp") is None


@pytest.mark.parametrize(
    ("tree", "expected"),
    [
        (
            "https://github.com/acme/demo/blob/main",
            "https://github.com/acme/demo/blob/main/include/mylib/foo.hpp",
        ),
        (
            "https://git.example.com/view?file={path}",
            "https://git.example.com/view?file=include/mylib/foo.hpp",
        ),
    ],
)
def test_source_url(make_context, tmp_path, tree, expected) -> None:
    """Verify the tree URL is joined with, or substituted by, the file path."""
    context = make_context(
        _lib(tmp_path), project=ProjectInfo(name="Demo", tree=tree)
    )
    assert context.linker.source_url(context.graph.find("ns::Foo")) == expected


def test_source_url_without_tree(make_context, tmp_path) -> None:
    """Verify no link is produced when no tree is configured."""
    context = make_context(_lib(tmp_path))
    assert context.linker.source_url(context.graph.find("ns::Foo")) is None
