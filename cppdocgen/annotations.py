"""Offset-stable text rewriting: tokens, annotations and their application."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

TOKEN_RE = re.compile(r"[^\W_]+")


@dataclass(frozen=True)
class Token:
    """A maximal alphanumeric run and its [start, end) character offsets."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Annotation:
    """Replace text[start:end] with `replacement`."""

    start: int
    end: int
    replacement: str


def tokenize(text: str) -> list[Token]:
    """Split text into alphanumeric runs, in order of appearance."""
    return [Token(m.group(), m.start(), m.end()) for m in TOKEN_RE.finditer(text)]


@dataclass
class Annotations:
    """Pending replacements over one text.

    Tokens are computed once up front; claiming a token records a
    replacement for its range and removes it from later lookups. The
    original text is never touched until `into_result`.
    """

    text: str
    tokens: list[Token] = field(init=False)
    pending: list[Annotation] = field(default_factory=list, init=False)
    _by_text: dict[str, list[int]] = field(default_factory=dict, init=False, repr=False)
    _claimed: set[int] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self.tokens = tokenize(self.text)
        for i, token in enumerate(self.tokens):
            self._by_text.setdefault(token.text, []).append(i)

    def protect(self, start: int, end: int) -> None:
        """Claim every token inside [start, end) so it is never replaced."""
        for i, token in enumerate(self.tokens):
            if token.start >= start and token.end <= end:
                self._claimed.add(i)

    def claim(self, word: str, replacement: str) -> bool:
        """Annotate the first unclaimed occurrence of `word`."""
        if word.islower():
            return False
        for i in self._by_text.get(word, ()):
            if i in self._claimed:
                continue
            token = self.tokens[i]
            self._claimed.add(i)
            self.pending.append(Annotation(token.start, token.end, replacement))
            return True
        return False

    def into_result(self) -> str:
        """Apply every pending annotation left to right."""
        return apply_annotations(self.text, self.pending)


def apply_annotations(text: str, annotations: list[Annotation]) -> str:
    """Apply non-overlapping replacements, tracking one running offset delta."""
    result = text
    delta = 0
    for a in sorted(annotations, key=lambda a: a.start):
        start, end = a.start + delta, a.end + delta
        result = result[:start] + a.replacement + result[end:]
        delta += len(a.replacement) - (a.end - a.start)
    return result
