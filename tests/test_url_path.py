"""Tests for UrlPath normalization and rendering."""

from pathlib import Path

from cppdocgen.url_path import UrlPath, page_segment


def test_dot_segments_are_dropped() -> None:
    """Verify that `.` and empty segments disappear at construction."""
    assert UrlPath(("a", ".", "b")) == UrlPath(("a", "b"))
    assert UrlPath(("", "a", "", "b", "")) == UrlPath(("a", "b"))


def test_dotdot_pops_and_clamps_at_root() -> None:
    """Verify that `..` pops a segment but never underflows."""
    assert UrlPath(("a", "b", "..")) == UrlPath(("a",))
    assert UrlPath(("..",)) == UrlPath(())
    assert UrlPath(("..", "..", "a")) == UrlPath(("a",))


def test_parse_roundtrips_encoded_string() -> None:
    """Verify that parse() inverts str() for awkward segment contents."""
    for segments in [
        ("class", "ns", "Foo"),
        ("files", "my lib", "a b.hpp"),
        ("odd", "100%", "x#y", "q?z"),
        ("unicode", "héllo"),
        (),
    ]:
        path = UrlPath(segments)
        assert UrlPath.parse(str(path)) == path


def test_raw_and_encoded_forms() -> None:
    """Verify the display form is unencoded and the URL form is encoded."""
    path = UrlPath(("files", "my lib", "a.hpp"))
    assert path.to_raw_string() == "files/my lib/a.hpp"
    assert str(path) == "/files/my%20lib/a.hpp"
    assert str(UrlPath()) == "/"


def test_join_and_parent_segments() -> None:
    """Verify that join appends and resolves `..` against our segments."""
    base = UrlPath(("a", "b"))
    assert base.join("c/d") == UrlPath(("a", "b", "c", "d"))
    assert base.join(UrlPath.part("c")) == UrlPath(("a", "b", "c"))
    assert base.join("../../../x") == UrlPath(("x",))


def test_strip_prefix_removes_longest_shared_run() -> None:
    """Verify that strip_prefix never fails and strips what matches."""
    path = UrlPath(("include", "mylib", "foo.hpp"))
    assert path.strip_prefix(UrlPath(("include",))) == UrlPath(("mylib", "foo.hpp"))
    assert path.strip_prefix(UrlPath(("include", "other"))) == UrlPath(
        ("mylib", "foo.hpp")
    )
    assert path.strip_prefix(UrlPath(("src",))) == path
    assert path.starts_with(UrlPath(("include", "mylib")))
    assert not path.starts_with(UrlPath(("mylib",)))


def test_remove_extension_and_file_name() -> None:
    """Verify extension stripping only touches a matching last segment."""
    path = UrlPath(("guide", "intro.md"))
    assert path.remove_extension(".md") == UrlPath(("guide", "intro"))
    assert path.remove_extension(".txt") == path
    assert path.file_name() == "intro.md"
    assert UrlPath().file_name() is None


def test_external_origin() -> None:
    """Verify that origins survive parsing and are left alone by to_absolute."""
    ext = UrlPath.parse("https://en.cppreference.com/w/cpp")
    assert ext.origin == "https://en.cppreference.com"
    assert ext.parts == ("w", "cpp")
    assert str(ext.join("vector/vector")) == (
        "https://en.cppreference.com/w/cpp/vector/vector"
    )
    assert ext.to_absolute(UrlPath(("docs",))) == ext


def test_to_absolute_places_under_base() -> None:
    """Verify that internal paths are joined under the site base."""
    assert UrlPath(("class", "Foo")).to_absolute(UrlPath(("docs",))) == UrlPath(
        ("docs", "class", "Foo")
    )


def test_filesystem_conversions() -> None:
    """Verify conversion from and to filesystem paths."""
    assert UrlPath.from_path(Path("include") / "a.hpp") == UrlPath(("include", "a.hpp"))
    assert UrlPath.from_path("/abs/dir").parts == ("abs", "dir")
    assert UrlPath(("class", "Foo")).to_path() == Path("class") / "Foo"
    assert UrlPath().to_path() == Path()


def test_page_segment_round_trips_through_the_href() -> None:
    """Verify an escaped segment decodes back to the directory written to disk."""
    assert page_segment("Foo") == "Foo"
    assert page_segment("operator/") == "operator%2F"
    assert page_segment("operator%") == "operator%25"
    path = UrlPath(("function", page_segment("operator/")))
    assert str(path) == "/function/operator%252F"
    assert UrlPath.parse(str(path)).to_path() == Path("function") / "operator%2F"
