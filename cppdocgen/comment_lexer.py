"""Character-level lexer for JSDoc-style C++ doc comments."""

from __future__ import annotations

from collections.abc import Callable

LINE_PREFIXES = ("///<", "//!<", "///", "//!", "//")


def strip_delimiters(raw: str) -> str:
    """Remove `/* */` delimiters or `///`-style line prefixes."""
    text = raw.strip()
    if text.startswith("/*"):
        text = text[2:]
        if text.endswith("*/"):
            text = text[:-2]
        if text.startswith(("*<", "!<")):
            text = text[2:]
        elif text.startswith(("*", "!")):
            text = text[1:]
        return text
    if text.startswith("//"):
        lines = []
        for line in text.splitlines():
            stripped = line.lstrip()
            for prefix in LINE_PREFIXES:
                if stripped.startswith(prefix):
                    stripped = stripped[len(prefix) :]
                    break
            lines.append(stripped)
        return "\n".join(lines)
    return text


class CommentLexer:
    """Reads commands (`@tag[attrs]`) and their values from a comment body.

    Line breaks inside values are kept, but each following line's `*` marker
    and base indentation (measured on the first non-blank line) are dropped,
    so deeper indentation survives for code blocks.
    """

    def __init__(self, raw: str) -> None:
        """Prepare the stripped comment body for reading."""
        self.text = strip_delimiters(raw)
        self.pos = 0
        self.indent: int | None = None
        self.line_start = True

    def _peek(self, offset: int = 0) -> str | None:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else None

    def _skip_marker(self) -> None:
        """Skip an optional `*` marker and up to the base indentation."""
        j = self.pos
        while j < len(self.text) and self.text[j] in " \t":
            j += 1
        if (
            j < len(self.text)
            and self.text[j] == "*"
            and self.text[j + 1 : j + 2] != "/"
        ):
            self.pos = j + 1

        width = 0
        while self._peek() in {" ", "\t"} and (
            self.indent is None or width < self.indent
        ):
            self.pos += 1
            width += 1
        if self.indent is None and self._peek() not in {"\n", None}:
            self.indent = width
        self.line_start = False

    def _skip_blank(self) -> None:
        """Skip whitespace, including line breaks and their markers."""
        while True:
            if self.line_start:
                self._skip_marker()
            c = self._peek()
            if c == "\n":
                self.pos += 1
                self.line_start = True
            elif c is not None and c.isspace():
                self.pos += 1
            else:
                return

    def _skip_inline(self) -> None:
        while self._peek() in {" ", "\t"}:
            self.pos += 1

    def _eat_until(self, stop: Callable[[str], bool]) -> str:
        out: list[str] = []
        while True:
            c = self._peek()
            if c is None:
                break
            if c == "\\" and self._peek(1) == "@":
                out.append("@")
                self.pos += 2
                continue
            if stop(c):
                break
            self.pos += 1
            if c == "\n":
                out.append("\n")
                self._skip_marker()
            else:
                out.append(c)
        return "".join(out)

    def _read_attrs(self) -> dict[str, str]:
        self.pos += 1  # [
        body = self._eat_until(lambda c: c in "]\n")
        if self._peek() == "]":
            self.pos += 1
        attrs: dict[str, str] = {}
        for item in body.split(","):
            key, sep, value = item.partition("=")
            if key.strip():
                attrs[key.strip()] = value.strip() if sep else "true"
        return attrs

    def next_command(self) -> tuple[str, dict[str, str]] | None:
        """Return the next command name and attributes, or None at the end.

        Text that does not start with `@` is an implicit `description`.
        """
        self._skip_blank()
        c = self._peek()
        if c is None:
            return None
        if c != "@":
            return "description", {}
        self.pos += 1
        name = self._eat_until(lambda ch: ch.isspace() or ch in "[@")
        attrs = self._read_attrs() if self._peek() == "[" else {}
        return name, attrs

    def next_param(self) -> str | None:
        """Read a single whitespace-delimited word (e.g. a parameter name)."""
        self._skip_blank()
        word = self._eat_until(lambda c: c.isspace() or c == "@")
        return word or None

    def next_value(self) -> str | None:
        """Read raw text up to the next command; None if it is blank."""
        self._skip_inline()
        value = self._eat_until(lambda c: c == "@")
        return value if value.strip() else None
