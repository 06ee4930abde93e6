"""Iterator and fetcher configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .core.errors import PagedIteratorConfigError

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 100


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(slots=True, frozen=True)
class IteratorConfig:
    """Paging settings for one iterator."""

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def validate(self) -> None:
        if not _is_int(self.page) or self.page < 0:
            raise ValueError("page must be an int >= 0")
        if not _is_int(self.page_size) or self.page_size < 1:
            raise ValueError("page_size must be an int >= 1")


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class ThrottlingConfig:
    """Throttling-related settings."""

    min_wait_interval_seconds: float = 0.0

    def validate(self) -> None:
        if self.min_wait_interval_seconds < 0:
            raise ValueError("throttling.min_wait_interval_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class HttpFetcherConfig:
    """Settings for fetching pages from a JSON HTTP endpoint."""

    base_url: str
    endpoint: str = ""
    params: Mapping[str, str] = field(default_factory=dict)
    page_param: str = "page"
    page_size_param: str = "pageSize"
    items_key: str | None = "items"
    user_agent: str = "paged-iterator/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    throttling: ThrottlingConfig = field(default_factory=ThrottlingConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.page_param or not self.page_size_param:
            raise ValueError("page_param and page_size_param must not be empty")
        if self.page_param == self.page_size_param:
            raise ValueError("page_param and page_size_param must differ")
        if self.items_key == "":
            raise ValueError("items_key must be None or a non-empty string")
        self.transport.validate()
        self.throttling.validate()


def validate_config(config: IteratorConfig | HttpFetcherConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise PagedIteratorConfigError(str(exc)) from exc


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "IteratorConfig",
    "TransportConfig",
    "ThrottlingConfig",
    "HttpFetcherConfig",
    "validate_config",
]
