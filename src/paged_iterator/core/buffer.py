"""One-page item buffer and refill logic."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from .awaitables import resolve_page
from .errors import IteratorStateError

logger = logging.getLogger("paged_iterator")

FetchPage = Callable[[int, int, Any], object]


class PageBuffer:
    """Holds the undelivered items of the most recently fetched page.

    ``page`` is the index of the next page to fetch. ``last_fetch_short`` turns
    true once a fetch returns fewer than ``page_size`` items and never goes
    back to false.
    """

    def __init__(self, fetch_page: FetchPage, *, page: int, page_size: int) -> None:
        self._fetch_page = fetch_page
        self.page = page
        self.page_size = page_size
        self.last_fetch_short = False
        self.fetch_count = 0
        self._items: deque[Any] = deque()

    def __len__(self) -> int:
        return len(self._items)

    @property
    def exhausted(self) -> bool:
        return self.last_fetch_short and not self._items

    def attempt_next(self) -> tuple[bool, Any]:
        """Pop the next buffered item.

        Returns ``(True, item)`` or ``(False, None)`` when the buffer is empty.
        """

        if not self._items:
            return False, None
        return True, self._items.popleft()

    async def refill(self, owner: Any = None) -> int:
        if self._items:
            raise IteratorStateError(f"refill requested with {len(self._items)} buffered items")

        page = self.page
        self.page += 1
        self.fetch_count += 1
        logger.debug("fetch start page=%s page_size=%s", page, self.page_size)

        items = await resolve_page(self._fetch_page(page, self.page_size, owner), page=page)

        self._items = deque(items)
        self.last_fetch_short = len(items) < self.page_size
        logger.debug(
            "fetch done page=%s items=%s short=%s",
            page,
            len(items),
            self.last_fetch_short,
        )
        return len(items)


__all__ = [
    "FetchPage",
    "PageBuffer",
]
