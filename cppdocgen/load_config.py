"""Logic for loading and merging configuration files."""

from pathlib import Path
from typing import Any

import yaml

from cppdocgen.deep_merge import deep_merge
from cppdocgen.errors import ConfigError

DEFAULT_CONFIG_NAME = "cppdocgen.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "project": {
        "name": "Project",
        "version": "",
        "repository": None,
        "tree": None,
        "icon": None,
    },
    "sources": [],
    "output_url": "",
    "external_reference": "https://en.cppreference.com/w/cpp",
    "reserved_namespaces": ["std"],
    "tutorials": {
        "dir": None,
    },
    "templates": {},
    "jobs": 8,
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        try:
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            msg = f"Unable to load config {p}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(user_config, dict):
            msg = f"Config {p} must be a mapping"
            raise ConfigError(msg)
        config = deep_merge(config, user_config)
    return config
