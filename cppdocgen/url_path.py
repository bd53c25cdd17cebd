"""Normalized URL paths used for page locations and links."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePath
from urllib.parse import quote, unquote

ORIGIN_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*://[^/]+)(.*)$")


def _clean(parts: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """Drop empty and `.` segments and resolve `..` without going above root."""
    cleaned: list[str] = []
    for part in parts:
        if part in {"", "."}:
            continue
        if part == "..":
            if cleaned:
                cleaned.pop()
            continue
        cleaned.append(part)
    return tuple(cleaned)


def page_segment(name: str) -> str:
    """Escape `name` so it is one path segment and one directory name.

    Only `%` and path separators are escaped: a server decoding the link
    arrives at exactly the directory written to disk.
    """
    return name.replace("%", "%25").replace("/", "%2F").replace("\\", "%5C")


@dataclass(frozen=True)
class UrlPath:
    """An ordered list of path segments, optionally on an external origin.

    Segments are kept raw; `str()` percent-encodes each of them so any
    segment survives a round trip through `parse`.
    """

    parts: tuple[str, ...] = ()
    origin: str | None = None  # e.g. https://en.cppreference.com

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", _clean(tuple(self.parts)))

    @classmethod
    def parse(cls, url: str) -> UrlPath:
        """Parse an encoded URL or path string (the inverse of `str()`)."""
        origin = None
        match = ORIGIN_RE.match(url)
        if match:
            origin, url = match.group(1), match.group(2)
        return cls(tuple(unquote(p) for p in url.split("/")), origin)

    @classmethod
    def from_path(cls, path: PurePath | str) -> UrlPath:
        """Build from a filesystem path, one segment per component."""
        return cls(tuple(p for p in PurePath(path).parts if p not in {"/", "\\"}))

    @classmethod
    def part(cls, segment: str) -> UrlPath:
        """Build a single-segment path."""
        return cls((segment,))

    def join(self, other: UrlPath | str) -> UrlPath:
        """Append `other`'s segments; `..` in `other` may pop our segments."""
        if isinstance(other, str):
            other = UrlPath.parse(other)
        return UrlPath(self.parts + other.parts, self.origin)

    def starts_with(self, prefix: UrlPath) -> bool:
        """Check whether `prefix`'s segments lead this path."""
        return self.parts[: len(prefix.parts)] == prefix.parts

    def strip_prefix(self, prefix: UrlPath) -> UrlPath:
        """Remove the longest leading run of segments shared with `prefix`."""
        shared = 0
        for ours, theirs in zip(self.parts, prefix.parts):
            if ours != theirs:
                break
            shared += 1
        return UrlPath(self.parts[shared:], self.origin)

    def remove_extension(self, ext: str) -> UrlPath:
        """Strip `ext` from the last segment if present."""
        if not self.parts or not self.parts[-1].endswith(ext):
            return self
        return UrlPath(self.parts[:-1] + (self.parts[-1][: -len(ext)],), self.origin)

    def file_name(self) -> str | None:
        """Return the last segment, if any."""
        return self.parts[-1] if self.parts else None

    def to_absolute(self, base: UrlPath) -> UrlPath:
        """Place this path under the site base, unless it is external."""
        if self.origin is not None:
            return self
        return base.join(self)

    def to_raw_string(self) -> str:
        """Human-readable form: segments joined with `/`, no encoding."""
        return "/".join(self.parts)

    def to_path(self) -> Path:
        """Relative filesystem path for this URL."""
        return Path(*self.parts) if self.parts else Path()

    def __str__(self) -> str:
        encoded = "/".join(quote(p, safe="") for p in self.parts)
        return f"{self.origin or ''}/{encoded}"
