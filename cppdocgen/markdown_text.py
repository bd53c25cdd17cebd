"""Markdown helpers: front matter, titles and HTML conversion."""

from __future__ import annotations

import re
from typing import Any

import markdown
import yaml

from cppdocgen.errors import ConfigError

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)
HEADING_RE = re.compile(r"^#{1,6}[ \t]+(.+?)[ \t#]*$", re.MULTILINE)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Separate a leading `---` YAML block from the markdown body."""
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        msg = f"Malformed front matter: {e}"
        raise ConfigError(msg) from e
    if not isinstance(meta, dict):
        msg = "Front matter must be a mapping"
        raise ConfigError(msg)
    return meta, text[match.end() :]


def extract_title(body: str) -> str | None:
    """Text of the first markdown heading, if any."""
    match = HEADING_RE.search(body)
    return match.group(1).strip() if match else None


def fmt_markdown(text: str) -> str:
    """Render markdown to HTML."""
    # A fresh converter per call; Markdown instances keep per-document state
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
