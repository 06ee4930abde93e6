"""Pending "next item" requests and the single active slot."""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Any

from .errors import IteratorStateError


@dataclass(slots=True)
class Request:
    """One outstanding call for the next item."""

    ordinal: int
    future: asyncio.Future[Any]

    @property
    def settled(self) -> bool:
        return self.future.done()

    @property
    def cancelled(self) -> bool:
        return self.future.cancelled()

    def resolve(self, value: Any) -> bool:
        if self.future.done():
            return False
        self.future.set_result(value)
        return True

    def reject(self, exc: BaseException) -> bool:
        if self.future.done():
            return False
        self.future.set_exception(exc)
        return True

    def cancel(self) -> bool:
        return self.future.cancel()


class RequestQueue:
    """FIFO of requests waiting for the active slot."""

    def __init__(self) -> None:
        self._requests: deque[Request] = deque()

    def __len__(self) -> int:
        return len(self._requests)

    def __bool__(self) -> bool:
        return bool(self._requests)

    def push(self, request: Request) -> None:
        self._requests.append(request)

    def pop(self) -> Request | None:
        """Return the oldest request still waiting on a result.

        Requests whose future was cancelled by the consumer are discarded.
        """

        while self._requests:
            request = self._requests.popleft()
            if not request.settled:
                return request
        return None

    def drain(self) -> list[Request]:
        drained = list(self._requests)
        self._requests.clear()
        return drained


class ActiveSlot:
    """Holds the request currently being serviced, if any."""

    __slots__ = ("_request",)

    def __init__(self) -> None:
        self._request: Request | None = None

    @property
    def occupied(self) -> bool:
        return self._request is not None

    @property
    def request(self) -> Request:
        if self._request is None:
            raise IteratorStateError("no active request")
        return self._request

    def occupy(self, request: Request) -> None:
        if self._request is not None:
            raise IteratorStateError(
                f"request #{request.ordinal} activated while #{self._request.ordinal} is active"
            )
        self._request = request

    def release(self) -> Request:
        request = self.request
        self._request = None
        return request


__all__ = [
    "Request",
    "RequestQueue",
    "ActiveSlot",
]
