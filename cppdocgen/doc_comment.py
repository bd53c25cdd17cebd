"""Structured form of a parsed doc comment."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Example:
    """A code block from an @example/@code command."""

    code: str
    analyze: bool = False  # re-highlight as C++ when rendering


@dataclass(frozen=True)
class DocComment:
    """Description and tagged sections of one symbol's comment."""

    description: str | None = None
    params: tuple[tuple[str, str], ...] = ()
    tparams: tuple[tuple[str, str], ...] = ()
    returns: str | None = None
    throws: str | None = None
    see: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    version: str | None = None
    since: str | None = None
    examples: tuple[Example, ...] = ()

    def summary(self) -> str:
        """First paragraph of the description, on one line."""
        if not self.description:
            return ""
        return self.description.split("\n\n", 1)[0].replace("\n", " ").strip()
