from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, Generic, TypeVar

from revenuecat.utils.exceptions import PaginationLimitExceeded
from revenuecat.utils.pagination import Page
from revenuecat.utils.types import DEFAULT_MAX_PAGES

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[[str | None], Awaitable[Page[T]]]


class PagedCollection(Generic[T]):
    """Lazy traversal over every item of a cursor-paginated list endpoint.

    Wraps a ``fetch_page(cursor)`` coroutine function that is already bound
    to one endpoint and its filters. Nothing is requested until a terminal
    method is awaited. Each call to :meth:`iterate` starts again from the
    first page; pages are fetched strictly one after another and their
    items are yielded in server order.

    The traversal stops exactly when a page comes back without a cursor.
    An empty page that still carries a cursor is followed.
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        *,
        max_pages: int = DEFAULT_MAX_PAGES,
        name: str = "",
    ) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self._fetch_page = fetch_page
        self._max_pages = max_pages
        self._name = name or getattr(fetch_page, "__name__", "collection")

    def __repr__(self) -> str:
        return f"PagedCollection({self._name!r}, max_pages={self._max_pages})"

    @property
    def max_pages(self) -> int:
        return self._max_pages

    # --- One-shot access ---

    async def page(self, cursor: str | None = None) -> Page[T]:
        """Fetch a single page; pass the previous page's ``next_cursor`` to advance."""
        return await self._fetch_page(cursor)

    async def first_page(self) -> Page[T]:
        return await self.page(None)

    # --- Traversal ---

    async def pages(self, *, cancel: asyncio.Event | None = None) -> AsyncIterator[Page[T]]:
        """Yield pages from the first one until a page has no cursor.

        Args:
            cancel: When set, the in-flight fetch is aborted and traversal ends

        Raises:
            PaginationLimitExceeded: If the server repeats a cursor or more
                than ``max_pages`` pages would be needed
        """
        cursor: str | None = None
        fetched = 0
        while True:
            if cancel is not None and cancel.is_set():
                logger.debug("%s: cancelled after %d page(s)", self._name, fetched)
                return

            page = await self._fetch(cursor, cancel)
            if page is None:
                logger.debug("%s: cancelled during fetch of page %d", self._name, fetched + 1)
                return
            fetched += 1
            logger.debug(
                "%s: page %d returned %d item(s), more=%s",
                self._name,
                fetched,
                len(page.items),
                page.has_next,
            )

            if page.next_cursor is not None and page.next_cursor == cursor:
                raise PaginationLimitExceeded(
                    f"{self._name}: server returned the same cursor twice ({cursor!r})"
                )

            yield page

            if page.next_cursor is None:
                return
            if fetched >= self._max_pages:
                raise PaginationLimitExceeded(
                    f"{self._name}: still paginating after {self._max_pages} pages"
                )
            cursor = page.next_cursor

    async def iterate(self, *, cancel: asyncio.Event | None = None) -> AsyncIterator[T]:
        """Yield every item across all pages, in server order."""
        async for page in self.pages(cancel=cancel):
            for item in page.items:
                if cancel is not None and cancel.is_set():
                    return
                yield item

    def __aiter__(self) -> AsyncIterator[T]:
        return self.iterate()

    async def all(self, *, cancel: asyncio.Event | None = None) -> list[T]:
        """Drain the traversal into a list."""
        return [item async for item in self.iterate(cancel=cancel)]

    # --- Internal ---

    async def _fetch(self, cursor: str | None, cancel: asyncio.Event | None) -> Page[T] | None:
        """Fetch one page, racing it against ``cancel``. Returns None when cancelled."""
        if cancel is None:
            return await self._fetch_page(cursor)

        fetch_task = asyncio.ensure_future(self._fetch_page(cursor))
        cancel_task = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({fetch_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not cancel_task.done():
                cancel_task.cancel()
            if not fetch_task.done():
                fetch_task.cancel()

        if not cancel.is_set():
            return fetch_task.result()

        # Cancelled: settle the fetch so its outcome is never reported as unretrieved
        await asyncio.wait({fetch_task})
        if not fetch_task.cancelled() and fetch_task.exception() is not None:
            logger.debug(
                "%s: discarding error from cancelled fetch: %r", self._name, fetch_task.exception()
            )
        return None
