"""Fetch collaborator that reads pages from a JSON HTTP endpoint."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from types import TracebackType
from typing import Any, Protocol

import httpx

from .config import HttpFetcherConfig, validate_config
from .core.async_throttling import AsyncMinIntervalThrottler
from .core.errors import PageTransportError
from .core.response_parsing import parse_page_items

logger = logging.getLogger("paged_iterator")


class AsyncPageClient(Protocol):
    async def get(self, url: str, *, params: Mapping[str, str]) -> Any: ...
    async def aclose(self) -> None: ...


def build_default_headers(config: HttpFetcherConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: HttpFetcherConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


class AsyncHttpPageFetcher:
    """``fetch_page`` implementation backed by ``httpx.AsyncClient``.

    Each call issues ``GET <base_url>/<endpoint>`` with the page index and page
    size as query parameters. Failures are not retried.
    """

    def __init__(
        self,
        config: HttpFetcherConfig,
        *,
        client: AsyncPageClient | None = None,
        clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        validate_config(config)
        self._config = config
        self._closed = False
        self._throttler = AsyncMinIntervalThrottler(
            config.throttling.min_wait_interval_seconds,
            clock=clock or time.monotonic,
            sleeper=sleeper,
        )
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url.rstrip("/") + "/",
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def build_params(self, page: int, page_size: int) -> dict[str, str]:
        params = dict(self._config.params)
        params[self._config.page_param] = str(page)
        params[self._config.page_size_param] = str(page_size)
        return params

    async def __call__(self, page: int, page_size: int, iterator: object = None) -> list[Any]:
        if self._closed:
            raise PageTransportError("fetcher is already closed", page=page)

        endpoint = self._config.endpoint.lstrip("/")
        params = self.build_params(page, page_size)
        await self._throttler.wait()

        logger.debug("page request start endpoint=%s page=%s", endpoint, page)
        try:
            response = await self._client.get(endpoint, params=params)
        except Exception as exc:
            logger.error(
                "page request network error endpoint=%s page=%s error=%s",
                endpoint,
                page,
                exc.__class__.__name__,
            )
            raise PageTransportError(
                "network/transport error",
                page=page,
                cause="network",
            ) from exc

        items = parse_page_items(response, page=page, items_key=self._config.items_key)
        logger.info(
            "page request success endpoint=%s page=%s items=%s",
            endpoint,
            page,
            len(items),
        )
        return items

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpPageFetcher":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncPageClient",
    "AsyncHttpPageFetcher",
    "build_default_headers",
    "build_default_timeout",
]
