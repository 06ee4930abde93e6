"""Page payload parsing for the HTTP fetcher."""

from __future__ import annotations

from typing import Any, Protocol

from .errors import PageHttpError, PageProtocolError


class JsonPayloadResponse(Protocol):
    status_code: int

    def json(self) -> object: ...


def parse_page_items(
    response: JsonPayloadResponse,
    *,
    page: int,
    items_key: str | None,
) -> list[Any]:
    """Extract the item list of one page from a JSON response.

    The body is either a JSON array or an object holding the array under
    ``items_key``.
    """

    http_status = getattr(response, "status_code", None)
    if http_status is not None and http_status >= 400:
        raise PageHttpError(
            f"page request failed with HTTP {http_status}",
            page=page,
            http_status=http_status,
        )

    try:
        payload = response.json()
    except Exception as exc:
        raise PageProtocolError(
            "response body is not valid JSON",
            page=page,
            http_status=http_status,
        ) from exc

    if isinstance(payload, dict) and items_key is not None:
        if items_key not in payload:
            raise PageProtocolError(
                f"response JSON object has no {items_key!r} key",
                page=page,
                http_status=http_status,
            )
        payload = payload[items_key]

    if not isinstance(payload, list):
        raise PageProtocolError(
            f"page items must be a JSON array, got {type(payload).__name__}",
            page=page,
            http_status=http_status,
        )
    return payload


__all__ = [
    "parse_page_items",
]
