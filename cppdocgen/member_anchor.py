"""In-page anchors for class members."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.symbol import Symbol


def slug(name: str) -> str:
    """Lowercase identifier; other characters become `-<hex code>`.

    Operators stay distinct: `operator==` is `operator-3d-3d`.
    """
    out = []
    for ch in name.strip():
        if ch.isascii() and (ch.isalnum() or ch == "_"):
            out.append(ch.lower())
        else:
            out.append(f"-{ord(ch):x}")
    return "".join(out).strip("-") or "member"


def member_anchor(symbol: Symbol) -> str:
    """Anchor of a method or field on its owner's page, e.g. `method-size`.

    Later overloads of the same name get a counter: `method-size-2`.
    """
    anchor = f"{symbol.kind.value}-{slug(symbol.name)}"
    if symbol.parent is None:
        return anchor
    same = [
        c
        for c in symbol.parent.children_of_kind(symbol.kind)
        if slug(c.name) == slug(symbol.name)
    ]
    index = next((i for i, c in enumerate(same) if c is symbol), 0)
    return anchor if index == 0 else f"{anchor}-{index + 1}"
