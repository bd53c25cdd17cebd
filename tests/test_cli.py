"""End-to-end tests for the command line entry point."""

from pathlib import Path

import pytest

from cppdocgen.cli import main

CONFIG = """\
project:
  name: Demo
  version: "1.0"
sources:
  - include
tutorials:
  dir: docs
jobs: 2
"""

DUMP = """\
kind: TranslationUnit
children:
  - kind: Namespace
    name: demo
    children:
      - kind: ClassDecl
        name: Engine
        comment: /** Drives the Wheel. */
        location: include/demo.hpp
        children:
          - kind: CXXMethod
            name: start
            access: public
      - kind: StructDecl
        name: Wheel
        location: include/demo.hpp
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal project with a config, one header, one tutorial and a dump."""
    root = tmp_path / "proj"
    (root / "include").mkdir(parents=True)
    (root / "include" / "demo.hpp").write_text("// demo\n", encoding="utf-8")
    (root / "docs").mkdir()
    (root / "docs" / "start.md").write_text("# Getting Started\n", encoding="utf-8")
    (root / "cppdocgen.yml").write_text(CONFIG, encoding="utf-8")
    (root / "ast.yml").write_text(DUMP, encoding="utf-8")
    return root


def _args(project: Path, out: Path, *extra: str) -> list[str]:
    return [str(project / "ast.yml"), "-i", str(project), "-o", str(out), *extra]


def test_main_generates_site(
    project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify a full run writes every kind of page."""
    out = tmp_path / "site"

    assert main(_args(project, out)) == 0

    for page in [
        "",
        "namespace/demo",
        "class/demo/Engine",
        "struct/demo/Wheel",
        "files/include/demo.hpp",
        "tutorials",
        "tutorials/start",
    ]:
        assert (out / page / "index.html").is_file(), page

    engine = (out / "class/demo/Engine/index.html").read_text(encoding="utf-8")
    assert 'href="/struct/demo/Wheel"' in engine
    assert "#include &lt;demo.hpp&gt;" in engine
    assert "Generated 7 pages" in capsys.readouterr().out


def test_main_refuses_non_empty_output(project: Path, tmp_path: Path) -> None:
    """Verify an existing site is only replaced with --overwrite."""
    out = tmp_path / "site"
    out.mkdir()
    (out / "stale.txt").write_text("old", encoding="utf-8")

    assert main(_args(project, out)) == 1
    assert (out / "stale.txt").exists()

    assert main(_args(project, out, "--overwrite", "--jobs", "1")) == 0
    assert not (out / "stale.txt").exists()
    assert (out / "index.html").is_file()


def test_main_reports_missing_dump(tmp_path: Path) -> None:
    """Verify an unreadable dump fails the run with exit code 1."""
    code = main([str(tmp_path / "nope.yml"), "-o", str(tmp_path / "site")])
    assert code == 1


def test_main_reports_bad_config(project: Path, tmp_path: Path) -> None:
    """Verify an explicit config that is not a mapping fails the run."""
    bad = tmp_path / "bad.yml"
    bad.write_text("- not\n- a mapping\n", encoding="utf-8")
    out = tmp_path / "site"
    assert main(_args(project, out, "--config", str(bad))) == 1
    assert not out.exists()
