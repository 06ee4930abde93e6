"""Pull-based iterator over a paged data source."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, TypeVar

from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, IteratorConfig, validate_config
from .core.awaitables import call_soon
from .core.buffer import FetchPage, PageBuffer
from .core.errors import PagedIteratorConfigError
from .core.requests import ActiveSlot, Request, RequestQueue

logger = logging.getLogger("paged_iterator")

T = TypeVar("T")


class PagedIterator(AsyncIterator[T]):
    """Serves items one at a time from a source that is fetched page by page.

    ``fetch_page(page, page_size, iterator)`` is called with an increasing page
    index and must return the items of that page, either directly or as an
    awaitable. A page shorter than ``page_size`` marks the end of the source.

    Every call to :meth:`next` returns a future. Futures settle in call order
    with the next item, or with ``None`` once the source is exhausted. Only one
    page fetch is ever in flight. When a fetch fails, every outstanding future
    fails with that exception and later calls resolve with ``None``.
    """

    def __init__(
        self,
        fetch_page: FetchPage | None = None,
        *,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if fetch_page is None or not callable(fetch_page):
            raise PagedIteratorConfigError("fetch_page is required")
        validate_config(IteratorConfig(page=page, page_size=page_size))

        self.fetch_page = fetch_page
        self._buffer = PageBuffer(fetch_page, page=page, page_size=page_size)
        self._queue = RequestQueue()
        self._active = ActiveSlot()
        self._done = False
        self._error: BaseException | None = None
        self._refill_task: asyncio.Task[None] | None = None
        self._issued = 0

    @classmethod
    def from_config(
        cls,
        fetch_page: FetchPage | None,
        config: IteratorConfig | None = None,
    ) -> "PagedIterator[Any]":
        config = config or IteratorConfig()
        return cls(fetch_page, page=config.page, page_size=config.page_size)

    @property
    def page(self) -> int:
        """Index of the next page to fetch."""
        return self._buffer.page

    @property
    def page_size(self) -> int:
        return self._buffer.page_size

    @property
    def done(self) -> bool:
        return self._done

    @property
    def last_fetch_short(self) -> bool:
        return self._buffer.last_fetch_short

    @property
    def error(self) -> BaseException | None:
        """The exception that ended iteration, if a fetch failed."""
        return self._error

    @property
    def pending(self) -> int:
        return len(self._queue) + (1 if self._active.occupied else 0)

    def next(self) -> asyncio.Future[T | None]:
        """Request the next item.

        Must be called from a running event loop.
        """

        loop = asyncio.get_running_loop()
        self._issued += 1
        request = Request(self._issued, loop.create_future())
        self._queue.push(request)
        logger.debug("request queued ordinal=%s pending=%s", request.ordinal, self.pending)
        self._process_queue()
        return request.future

    def __aiter__(self) -> "PagedIterator[T]":
        return self

    async def __anext__(self) -> T:
        item = await self.next()
        if item is None:
            raise StopAsyncIteration
        return item

    async def collect(self, limit: int | None = None) -> list[T]:
        """Consume items into a list, up to ``limit`` when given."""
        result: list[T] = []
        while limit is None or len(result) < limit:
            item = await self.next()
            if item is None:
                break
            result.append(item)
        return result

    def _process_queue(self) -> None:
        if self._active.occupied:
            return
        request = self._queue.pop()
        if request is None:
            return
        self._active.occupy(request)
        call_soon(self._process_active)

    def _process_active(self) -> None:
        request = self._active.request
        if request.settled:
            # cancelled by the consumer while waiting
            self._active.release()
            self._process_queue()
            return

        if self._done:
            self._resolve_active(None)
            return

        found, item = self._buffer.attempt_next()
        if found:
            self._resolve_active(item)
        elif self._buffer.last_fetch_short:
            self._resolve_active(None)
        else:
            self._refill_task = asyncio.get_running_loop().create_task(self._refill_active())

    async def _refill_active(self) -> None:
        try:
            await self._buffer.refill(self)
        except asyncio.CancelledError:
            self._cancel_outstanding()
            raise
        except Exception as exc:
            self._fail(exc)
            return
        finally:
            self._refill_task = None
        self._process_active()

    def _resolve_active(self, value: T | None) -> None:
        if value is None and not self._done:
            self._done = True
            logger.info(
                "iterator exhausted next_page=%s fetches=%s",
                self._buffer.page,
                self._buffer.fetch_count,
            )
        request = self._active.release()
        request.resolve(value)
        self._process_queue()

    def _fail(self, exc: Exception) -> None:
        self._done = True
        self._error = exc
        failed: list[Request] = []
        if self._active.occupied:
            failed.append(self._active.release())
        failed.extend(self._queue.drain())
        rejected = sum(1 for request in failed if request.reject(exc))
        logger.error(
            "fetch failed page=%s rejected=%s error=%s",
            self._buffer.page - 1,
            rejected,
            exc.__class__.__name__,
        )

    def _cancel_outstanding(self) -> None:
        self._done = True
        if self._active.occupied:
            self._active.release().cancel()
        for request in self._queue.drain():
            request.cancel()
        logger.warning("page fetch cancelled page=%s", self._buffer.page - 1)


__all__ = [
    "PagedIterator",
]
