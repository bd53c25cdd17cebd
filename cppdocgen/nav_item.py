"""Navigation tree shown in the sidebar of every page."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cppdocgen.url_path import UrlPath


@dataclass(frozen=True)
class SubItem:
    """An anchor inside a linked page (e.g. a member function)."""

    title: str
    anchor: str


@dataclass(frozen=True)
class NavLink:
    """A leaf linking to a page."""

    title: str
    url: UrlPath
    icon: str | None = None
    subitems: tuple[SubItem, ...] = ()

    def to_html(self, base: UrlPath) -> str:
        href = escape(str(self.url.to_absolute(base)))
        icon = f"<i data-feather='{self.icon}'></i>" if self.icon else ""
        link = f"<a href='{href}'>{icon}<span>{escape(self.title)}</span></a>"
        if not self.subitems:
            return link
        subs = "".join(
            f"<a href='{href}#{escape(s.anchor)}'>{escape(s.title)}</a>"
            for s in self.subitems
        )
        return f"<details class='nav-link'><summary>{link}</summary>{subs}</details>"


@dataclass(frozen=True)
class NavDir:
    """A collapsible folder of items."""

    title: str
    children: tuple[NavItem, ...]
    icon: str | None = None
    is_open: bool = False

    def to_html(self, base: UrlPath) -> str:
        icon = f"<i data-feather='{self.icon}'></i>" if self.icon else ""
        inner = "".join(c.to_html(base) for c in self.children)
        return (
            f"<details class='nav-dir'{' open' if self.is_open else ''}>"
            f"<summary>{icon}<span>{escape(self.title)}</span></summary>"
            f"<div>{inner}</div></details>"
        )


@dataclass(frozen=True)
class NavRoot:
    """Top-level list without a heading of its own."""

    children: tuple[NavItem, ...]

    def to_html(self, base: UrlPath) -> str:
        return "".join(c.to_html(base) for c in self.children)


NavItem = NavLink | NavDir | NavRoot
