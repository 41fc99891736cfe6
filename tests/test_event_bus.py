"""Tests for the in-process event bus."""

from __future__ import annotations

import pytest

from servio.application.events import EventBus
from servio.domain.entities import DomainEvent

pytestmark = pytest.mark.anyio


def _event(event_type: str = "order.status_changed") -> DomainEvent:
    return DomainEvent(restaurant_id="R1", type=event_type, payload={"orderId": "O1"})


async def test_handlers_run_in_registration_order() -> None:
    bus = EventBus()
    calls: list[str] = []

    async def first(event: DomainEvent) -> None:
        calls.append("first")

    async def second(event: DomainEvent) -> None:
        calls.append("second")

    bus.on("order.status_changed", first)
    bus.on("order.status_changed", second)

    await bus.emit("order.status_changed", _event())

    assert calls == ["first", "second"]


async def test_plain_callables_are_accepted() -> None:
    bus = EventBus()
    received: list[DomainEvent] = []
    bus.on("task.created", received.append)

    event = _event("task.created")
    await bus.emit("task.created", event)

    assert received == [event]


async def test_emit_without_handlers_is_a_no_op() -> None:
    bus = EventBus()

    await bus.emit("unknown.type", _event("unknown.type"))

    assert bus.listener_count("unknown.type") == 0


async def test_failing_handler_stops_the_chain_and_propagates() -> None:
    bus = EventBus()
    calls: list[str] = []

    async def failing(event: DomainEvent) -> None:
        calls.append("failing")
        raise RuntimeError("boom")

    async def never_called(event: DomainEvent) -> None:
        calls.append("second")

    bus.on("inventory.low_stock", failing)
    bus.on("inventory.low_stock", never_called)

    with pytest.raises(RuntimeError, match="boom"):
        await bus.emit("inventory.low_stock", _event("inventory.low_stock"))

    assert calls == ["failing"]


async def test_duplicate_registration_runs_twice() -> None:
    bus = EventBus()
    calls: list[str] = []

    async def handler(event: DomainEvent) -> None:
        calls.append(event.type)

    bus.on("task.completed", handler)
    bus.on("task.completed", handler)

    await bus.emit("task.completed", _event("task.completed"))

    assert calls == ["task.completed", "task.completed"]
    assert bus.listener_count("task.completed") == 2


async def test_off_removes_a_single_registration() -> None:
    bus = EventBus()
    calls: list[str] = []

    async def handler(event: DomainEvent) -> None:
        calls.append("called")

    bus.on("system.error", handler)

    assert bus.off("system.error", handler) is True
    assert bus.off("system.error", handler) is False
    assert bus.listener_count("system.error") == 0

    await bus.emit("system.error", _event("system.error"))
    assert calls == []


async def test_handlers_only_receive_their_event_type() -> None:
    bus = EventBus()
    calls: list[str] = []

    async def handler(event: DomainEvent) -> None:
        calls.append(event.type)

    bus.on("staff.clock_in", handler)

    await bus.emit("staff.clock_out", _event("staff.clock_out"))

    assert calls == []
