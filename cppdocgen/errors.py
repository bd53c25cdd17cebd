"""Exceptions raised by the documentation build."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.url_path import UrlPath


class ConfigError(Exception):
    """Configuration, AST dump, template or tutorial input could not be used."""


class RenderError(Exception):
    """A template could not be formatted with the supplied fragments."""


class BuildError(Exception):
    """A page task failed; the build as a whole is reported as failed."""

    def __init__(self, url: UrlPath | str, cause: BaseException) -> None:
        """Record the failing page URL and the underlying exception."""
        super().__init__(f"Unable to build {url}: {cause}")
        self.url = url
        self.cause = cause
