"""Public package exports for paged iterator."""

from .config import HttpFetcherConfig, IteratorConfig
from .core.errors import (
    IteratorStateError,
    PagedIteratorConfigError,
    PagedIteratorError,
    PageFetchError,
    PageHttpError,
    PageProtocolError,
    PageTransportError,
)
from .core.pagination import iterate_items
from .http_fetcher import AsyncHttpPageFetcher
from .iterator import PagedIterator

__all__ = [
    "PagedIterator",
    "IteratorConfig",
    "HttpFetcherConfig",
    "AsyncHttpPageFetcher",
    "iterate_items",
    "PagedIteratorError",
    "PagedIteratorConfigError",
    "IteratorStateError",
    "PageFetchError",
    "PageTransportError",
    "PageHttpError",
    "PageProtocolError",
]
