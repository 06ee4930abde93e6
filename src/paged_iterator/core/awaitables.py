"""Helpers for page results that may or may not be awaitable."""

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .errors import PageProtocolError


def is_pending_result(value: object) -> bool:
    return inspect.isawaitable(value) or isinstance(value, concurrent.futures.Future)


async def resolve_result(value: object) -> Any:
    """Wait on awaitables and thread-pool futures, pass plain values through."""

    if isinstance(value, concurrent.futures.Future):
        return await asyncio.wrap_future(value)
    if inspect.isawaitable(value):
        return await value
    return value


def coerce_items(value: object, *, page: int) -> list[Any]:
    if value is None:
        raise PageProtocolError("fetch_page returned None", page=page)
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
        raise PageProtocolError(
            f"fetch_page must return a sequence of items, got {type(value).__name__}",
            page=page,
        )
    return list(value)


async def resolve_page(value: object, *, page: int) -> list[Any]:
    return coerce_items(await resolve_result(value), page=page)


def call_soon(callback: Callable[[], object]) -> asyncio.Handle:
    """Run ``callback`` once the current call stack has unwound."""

    return asyncio.get_running_loop().call_soon(callback)


__all__ = [
    "is_pending_result",
    "resolve_result",
    "coerce_items",
    "resolve_page",
    "call_soon",
]
