from __future__ import annotations

import asyncio
from typing import Any

import pytest

from pyruntimeconfig.state.hub import ReadinessHub


@pytest.mark.asyncio
async def test_ready_resolves_immediately_once_settled() -> None:
    hub = ReadinessHub()
    assert hub.notify_ready() is True

    await asyncio.wait_for(hub.ready(), timeout=0.1)
    assert hub.is_ready is True


@pytest.mark.asyncio
async def test_readiness_is_settled_only_once() -> None:
    hub = ReadinessHub()
    error = RuntimeError("first fetch failed")

    assert hub.notify_ready(error) is True
    assert hub.notify_ready() is False

    for _ in range(2):
        with pytest.raises(RuntimeError, match="first fetch failed"):
            await hub.ready()
    assert hub.ready_error is error


@pytest.mark.asyncio
async def test_pending_callers_all_rejected_together() -> None:
    hub = ReadinessHub()
    waiters = [asyncio.create_task(hub.ready()) for _ in range(3)]
    await asyncio.sleep(0)

    hub.notify_ready(ValueError("boom"))

    results = await asyncio.gather(*waiters, return_exceptions=True)
    assert all(isinstance(result, ValueError) for result in results)


@pytest.mark.asyncio
async def test_cancel_waiters_cancels_pending_callers() -> None:
    hub = ReadinessHub()
    waiter = asyncio.create_task(hub.ready())
    await asyncio.sleep(0)

    hub.cancel_waiters()

    with pytest.raises(asyncio.CancelledError):
        await waiter
    assert hub.is_ready is False


def test_observers_called_in_registration_order_without_replay() -> None:
    hub = ReadinessHub()
    calls: list[tuple[str, dict[str, Any]]] = []

    hub.notify_observers({"ignored": True})
    hub.observe(lambda data: calls.append(("first", data)))
    hub.observe(lambda data: calls.append(("second", data)))
    hub.notify_observers({"k": 1})

    assert calls == [("first", {"k": 1}), ("second", {"k": 1})]
