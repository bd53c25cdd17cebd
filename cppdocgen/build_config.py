"""Typed, immutable view of the merged configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cppdocgen.errors import ConfigError
from cppdocgen.url_path import UrlPath


@dataclass(frozen=True)
class ProjectInfo:
    """Project metadata shown on every page."""

    name: str
    version: str = ""
    repository: str | None = None
    tree: str | None = None  # source tree URL, `{path}` placeholder optional
    icon: str | None = None


@dataclass(frozen=True)
class Source:
    """A source root: a directory plus include/exclude globs."""

    name: str
    dir: UrlPath
    include: tuple[str, ...] = ("**/*.hpp", "**/*.h")
    exclude: tuple[str, ...] = ()
    strip_prefix: UrlPath | None = None  # removed from displayed include paths


@dataclass(frozen=True)
class BuildConfig:
    """Everything the build needs to know, fixed before the build starts."""

    project: ProjectInfo
    input_dir: Path
    output_dir: Path
    sources: tuple[Source, ...] = ()
    output_url: UrlPath = field(default_factory=UrlPath)
    external_reference: UrlPath = field(default_factory=UrlPath)
    reserved_namespaces: frozenset[str] = frozenset({"std"})
    tutorials_dir: Path | None = None
    templates: dict[str, Path] = field(default_factory=dict)
    jobs: int = 8

    @classmethod
    def from_dict(
        cls, config: dict[str, Any], input_dir: Path, output_dir: Path
    ) -> BuildConfig:
        """Validate a merged config dict and convert it."""
        project = config.get("project") or {}
        if not isinstance(project, dict):
            msg = "'project' must be a mapping"
            raise ConfigError(msg)

        tutorials = config.get("tutorials") or {}
        tutorials_dir = tutorials.get("dir") if isinstance(tutorials, dict) else None

        templates = config.get("templates") or {}
        if not isinstance(templates, dict):
            msg = "'templates' must map template names to files"
            raise ConfigError(msg)

        try:
            jobs = int(config.get("jobs") or 1)
        except (TypeError, ValueError) as e:
            msg = f"'jobs' must be an integer: {e}"
            raise ConfigError(msg) from e

        return cls(
            project=ProjectInfo(
                name=str(project.get("name") or "Project"),
                version=str(project.get("version") or ""),
                repository=project.get("repository") or None,
                tree=project.get("tree") or None,
                icon=project.get("icon") or None,
            ),
            input_dir=input_dir,
            output_dir=output_dir,
            sources=tuple(_parse_source(s) for s in config.get("sources") or []),
            output_url=UrlPath.parse(str(config.get("output_url") or "")),
            external_reference=UrlPath.parse(
                str(config.get("external_reference") or "")
            ),
            reserved_namespaces=frozenset(config.get("reserved_namespaces") or ()),
            tutorials_dir=input_dir / tutorials_dir if tutorials_dir else None,
            templates={str(k): input_dir / str(v) for k, v in templates.items()},
            jobs=max(jobs, 1),
        )


def _parse_source(raw: Any) -> Source:
    if isinstance(raw, str):
        raw = {"dir": raw}
    if not isinstance(raw, dict) or not raw.get("dir"):
        msg = f"Source entries need a 'dir': {raw!r}"
        raise ConfigError(msg)

    directory = UrlPath.parse(str(raw["dir"]))
    include = raw.get("include") or Source.include
    exclude = raw.get("exclude") or ()
    strip_prefix = raw.get("strip_prefix")
    return Source(
        name=str(raw.get("name") or directory.file_name() or "src"),
        dir=directory,
        include=tuple(str(g) for g in include),
        exclude=tuple(str(g) for g in exclude),
        strip_prefix=UrlPath.parse(str(strip_prefix)) if strip_prefix else None,
    )
