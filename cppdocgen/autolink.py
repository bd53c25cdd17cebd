"""Rewrite bare mentions of symbol names into markdown links."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from cppdocgen.annotations import Annotations

if TYPE_CHECKING:
    from cppdocgen.linker import Linker
    from cppdocgen.symbol_graph import SymbolGraph

# Markdown whose text must stay verbatim: fenced blocks (an unclosed fence
# runs to the end), code spans, links and images, and <...> autolinks or tags
VERBATIM_RE = re.compile(
    r"^[ \t]*(?P<fence>```|~~~).*?(?:^[ \t]*(?P=fence)[^\n]*$|\Z)"
    r"|(?P<ticks>`+).+?(?P=ticks)"
    r"|!?\[[^\]\n]*\](?:\([^)\n]*\)|\[[^\]\n]*\])"
    r"|<[^<>\s]+[^<>]*>",
    re.MULTILINE | re.DOTALL,
)


def autolink(text: str, graph: SymbolGraph, linker: Linker) -> str:
    """Link the first mention of each symbol name found in `text`.

    Lowercase-only words are never linked. When several symbols share a
    name, the first one reached by a depth-first walk of the graph wins.
    Code, existing links and inline HTML are left untouched.
    """
    if not text:
        return text
    annotations = Annotations(text)
    if not annotations.tokens:
        return text
    for match in VERBATIM_RE.finditer(text):
        annotations.protect(match.start(), match.end())

    seen: set[str] = set()
    for symbol in graph.walk():
        name = symbol.name
        if name in seen:
            continue
        seen.add(name)
        annotations.claim(name, f"[{name}]({linker.href(symbol)})")
    return annotations.into_result()
