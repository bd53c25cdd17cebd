"""Concurrent page generation with a one-time navigation render."""

from __future__ import annotations

import logging
from concurrent.futures import Future, as_completed
from typing import TYPE_CHECKING, Protocol

from cppdocgen.errors import BuildError, RenderError
from cppdocgen.nav_item import NavRoot
from cppdocgen.write_page import write_page

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor

    from cppdocgen.build_context import BuildContext
    from cppdocgen.entries import Entry, IndexEntry, NamespaceEntry
    from cppdocgen.file_entries import FileRootEntry
    from cppdocgen.page_output import PageOutput
    from cppdocgen.tutorial_entries import TutorialFolderEntry
    from cppdocgen.url_path import UrlPath

    # (completed, total, page url)
    ProgressCallback = Callable[[int, int, str], None]

logger = logging.getLogger(__name__)


class PageEntry(Protocol):
    def url(self) -> UrlPath: ...

    def output(self, context: BuildContext) -> PageOutput: ...


class Builder:
    """Schedules one write task per page on `executor`.

    The navigation HTML is rendered once in the constructor, before any
    task is submitted, and every page task reads that same string.
    """

    def __init__(
        self,
        context: BuildContext,
        executor: Executor,
        *,
        index: IndexEntry,
        symbols: NamespaceEntry,
        files: list[FileRootEntry] | None = None,
        tutorials: TutorialFolderEntry | None = None,
    ) -> None:
        self.context = context
        self.executor = executor
        self.index = index
        self.symbols = symbols
        self.files = files or []
        self.tutorials = tutorials
        self._pending: dict[Future[None], str] = {}
        self.nav = self._render_nav()

    @property
    def entries(self) -> list[Entry]:
        """Top-level entries, in build order."""
        entries: list[Entry] = [self.index, self.symbols, *self.files]
        if self.tutorials is not None:
            entries.append(self.tutorials)
        return entries

    def _render_nav(self) -> str:
        base = self.context.config.output_url
        symbols = NavRoot((self.index.nav(), self.symbols.nav()))
        files = NavRoot(tuple(f.nav() for f in self.files))
        tutorials = self.tutorials.nav().to_html(base) if self.tutorials else ""
        try:
            return self.context.renderer.render_text(
                "nav",
                {
                    **self.context.default_fragments(),
                    "tutorial_content": tutorials,
                    "entity_content": symbols.to_html(base),
                    "file_content": files.to_html(base),
                },
            )
        except RenderError as e:
            raise BuildError("<navigation>", e) from e

    def create_output_for(self, entry: PageEntry) -> list[Future[None]]:
        """Prepare the page's fragments here, then submit its write task.

        A failure while preparing stops scheduling and is raised at once.
        """
        try:
            page = entry.output(self.context)
        except Exception as e:
            raise BuildError(str(entry.url()), e) from e
        future = self.executor.submit(write_page, self.context, page, self.nav)
        self._pending[future] = str(page.url)
        return [future]

    def build(self, progress: ProgressCallback | None = None) -> int:
        """Submit every page and wait for all of them.

        The first failure seen is raised as a `BuildError` once every other
        task has finished. Returns the number of pages written.
        """
        handles: list[Future[None]] = []
        for entry in self.entries:
            handles.extend(entry.build(self))

        total = len(handles)
        failure: BuildError | None = None
        done = 0
        for future in as_completed(handles):
            url = self._pending.pop(future, "?")
            try:
                future.result()
            except Exception as e:
                logger.debug("Page %s failed", url, exc_info=True)
                if failure is None:
                    failure = BuildError(url, e)
                continue
            done += 1
            if progress is not None:
                try:
                    progress(done, total, url)
                except Exception:
                    logger.warning("Progress callback failed", exc_info=True)

        if failure is not None:
            raise failure
        return done
