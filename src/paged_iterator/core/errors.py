"""Error types."""

from __future__ import annotations


class PagedIteratorError(Exception):
    """Base exception for this package."""


class PagedIteratorConfigError(PagedIteratorError, ValueError):
    """Invalid construction options (missing fetch_page, bad page size...)."""


class IteratorStateError(PagedIteratorError, RuntimeError):
    """Internal scheduling invariant was violated."""


class PageFetchError(PagedIteratorError):
    """Base exception for the bundled page fetchers."""

    def __init__(
        self,
        message: str,
        *,
        page: int | None = None,
        http_status: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.page = page
        self.http_status = http_status
        self.cause = cause


class PageTransportError(PageFetchError):
    """Network/transport-level failure."""


class PageHttpError(PageFetchError):
    """Server answered with an HTTP error status."""


class PageProtocolError(PageFetchError):
    """Page payload has an unexpected shape."""


__all__ = [
    "PagedIteratorError",
    "PagedIteratorConfigError",
    "IteratorStateError",
    "PageFetchError",
    "PageTransportError",
    "PageHttpError",
    "PageProtocolError",
]
