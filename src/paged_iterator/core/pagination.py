"""Blocking item iteration over a paged source."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

from .awaitables import coerce_items, is_pending_result
from .errors import PageProtocolError

T = TypeVar("T")


def iterate_items(
    fetch_page: Callable[[int, int, Any], Iterable[T]],
    *,
    page: int = 0,
    page_size: int = 100,
) -> Iterator[T]:
    """Yield items page by page until a page comes back short.

    ``fetch_page`` receives ``(page, page_size, None)`` and must return the
    items directly; use :class:`paged_iterator.PagedIterator` for awaitable
    sources.
    """

    current = page
    while True:
        result = fetch_page(current, page_size, None)
        if is_pending_result(result):
            close = getattr(result, "close", None)
            if callable(close):
                close()
            raise PageProtocolError("fetch_page returned an awaitable in blocking mode", page=current)
        items = coerce_items(result, page=current)
        current += 1
        for item in items:
            if item is None:
                return
            yield item
        if len(items) < page_size:
            return


__all__ = [
    "iterate_items",
]
