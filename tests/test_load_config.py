"""Tests for configuration loading, merging and validation."""

from pathlib import Path

import pytest
import yaml

from cppdocgen.build_config import BuildConfig
from cppdocgen.deep_merge import deep_merge
from cppdocgen.errors import ConfigError
from cppdocgen.load_config import DEFAULT_CONFIG, load_config
from cppdocgen.url_path import UrlPath


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"sources": ["include"]}
    update = {"sources": ["src"]}
    merged = deep_merge(base, update)
    assert merged == {"sources": ["src"]}


def test_deep_merge_reserved_namespaces_additive() -> None:
    """Verify that reserved namespaces accumulate instead of replacing."""
    base = {"reserved_namespaces": ["std", "boost"]}
    update = {"reserved_namespaces": ["boost", "absl"]}
    merged = deep_merge(base, update)
    assert merged["reserved_namespaces"] == ["absl", "boost", "std"]


def test_deep_merge_leaves_inputs_alone() -> None:
    """Verify the base mapping is not mutated."""
    base = {"project": {"name": "A"}}
    deep_merge(base, {"project": {"name": "B"}})
    assert base == {"project": {"name": "A"}}


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config["reserved_namespaces"] == ["std"]


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "cppdocgen.yml"
    config_data = {
        "project": {"name": "Widgets", "version": "2.0"},
        "reserved_namespaces": ["boost"],
        "jobs": 3,
    }
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(config_file)
    assert loaded["project"]["name"] == "Widgets"
    assert loaded["project"]["repository"] is None  # Default
    assert loaded["reserved_namespaces"] == ["boost", "std"]
    assert loaded["jobs"] == 3


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Verify that a missing config file is a configuration error."""
    with pytest.raises(ConfigError, match="Unable to load config"):
        load_config(tmp_path / "nope.yml")


@pytest.mark.parametrize("content", ["- a\n- b\n", "just a string\n", "a: [\n"])
def test_load_config_rejects_bad_documents(tmp_path: Path, content: str) -> None:
    """Verify non-mapping and unparsable files are rejected."""
    config_file = tmp_path / "bad.yml"
    config_file.write_text(content)
    with pytest.raises(ConfigError):
        load_config(config_file)


def test_build_config_from_defaults(tmp_path: Path) -> None:
    """Verify the defaults convert into a usable BuildConfig."""
    config = BuildConfig.from_dict(load_config(None), tmp_path, tmp_path / "out")
    assert config.project.name == "Project"
    assert config.sources == ()
    assert config.output_url == UrlPath()
    assert str(config.external_reference) == "https://en.cppreference.com/w/cpp"
    assert config.reserved_namespaces == frozenset({"std"})
    assert config.tutorials_dir is None
    assert config.templates == {}
    assert config.jobs == 8


def test_build_config_from_full_dict(tmp_path: Path) -> None:
    """Verify sources, paths and templates are converted and resolved."""
    raw = deep_merge(
        DEFAULT_CONFIG,
        {
            "project": {
                "name": "Widgets",
                "version": 1.5,
                "tree": "https://github.com/acme/widgets/blob/main",
            },
            "sources": [
                "include",
                {
                    "name": "core",
                    "dir": "src/core",
                    "include": ["*.hh"],
                    "exclude": ["detail/**"],
                    "strip_prefix": "core",
                },
            ],
            "output_url": "/docs",
            "tutorials": {"dir": "guides"},
            "templates": {"class": "tpl/class.html"},
        },
    )
    config = BuildConfig.from_dict(raw, tmp_path, tmp_path / "out")

    assert config.project.version == "1.5"
    include, core = config.sources
    assert include.name == "include"
    assert include.include == ("**/*.hpp", "**/*.h")
    assert core.name == "core"
    assert core.dir == UrlPath(("src", "core"))
    assert core.include == ("*.hh",)
    assert core.exclude == ("detail/**",)
    assert core.strip_prefix == UrlPath(("core",))
    assert str(config.output_url) == "/docs"
    assert config.tutorials_dir == tmp_path / "guides"
    assert config.templates == {"class": tmp_path / "tpl" / "class.html"}


@pytest.mark.parametrize(
    ("override", "message"),
    [
        ({"project": ["x"]}, "'project' must be a mapping"),
        ({"templates": ["x"]}, "'templates' must map"),
        ({"jobs": "many"}, "'jobs' must be an integer"),
        ({"sources": [{"name": "nodir"}]}, "need a 'dir'"),
    ],
)
def test_build_config_rejects_invalid_values(
    tmp_path: Path, override: dict, message: str
) -> None:
    """Verify invalid settings raise ConfigError with a useful message."""
    raw = {**DEFAULT_CONFIG, **override}
    with pytest.raises(ConfigError, match=message):
        BuildConfig.from_dict(raw, tmp_path, tmp_path / "out")
