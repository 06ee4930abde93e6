from __future__ import annotations

import asyncio

import pytest

from paged_iterator.core.errors import IteratorStateError
from paged_iterator.core.requests import ActiveSlot, Request, RequestQueue


def _request(ordinal: int) -> Request:
    return Request(ordinal, asyncio.get_running_loop().create_future())


@pytest.mark.asyncio
async def test_request_settles_once():
    request = _request(1)
    assert request.resolve("a") is True
    assert request.resolve("b") is False
    assert request.reject(RuntimeError("late")) is False
    assert await request.future == "a"


@pytest.mark.asyncio
async def test_queue_is_fifo_and_skips_cancelled():
    queue = RequestQueue()
    requests = [_request(i) for i in range(4)]
    for request in requests:
        queue.push(request)
    requests[1].cancel()
    assert len(queue) == 4
    assert [queue.pop().ordinal for _ in range(3)] == [0, 2, 3]
    assert queue.pop() is None
    assert not queue


@pytest.mark.asyncio
async def test_queue_drain_empties_queue():
    queue = RequestQueue()
    queue.push(_request(1))
    queue.push(_request(2))
    assert [r.ordinal for r in queue.drain()] == [1, 2]
    assert len(queue) == 0


@pytest.mark.asyncio
async def test_active_slot_holds_at_most_one_request():
    slot = ActiveSlot()
    assert slot.occupied is False
    first = _request(1)
    slot.occupy(first)
    with pytest.raises(IteratorStateError):
        slot.occupy(_request(2))
    assert slot.release() is first
    assert slot.occupied is False


def test_releasing_empty_slot_is_an_invariant_violation():
    slot = ActiveSlot()
    with pytest.raises(IteratorStateError):
        slot.release()
    with pytest.raises(IteratorStateError):
        _ = slot.request
