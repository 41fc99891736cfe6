"""Tests for websocket rooms and realtime notification delivery."""

from __future__ import annotations

import anyio
import pytest

from servio.infrastructure.notifications import (
    NOTIFICATIONS_CREATED,
    UNREAD_COUNT_UPDATED,
    ConnectionManager,
    NotificationDispatcher,
    restaurant_room,
    user_room,
)

pytestmark = pytest.mark.anyio


class FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.accepted = False
        self.fail = fail
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


async def _drain() -> None:
    for _ in range(3):
        await anyio.sleep(0)


async def test_connect_joins_every_room() -> None:
    manager = ConnectionManager()
    socket = FakeWebSocket()

    await manager.connect([restaurant_room("R1"), user_room("U1")], socket)

    assert socket.accepted
    assert manager.room_size("restaurant-R1") == 1
    assert manager.room_size("user-U1") == 1


async def test_disconnect_leaves_every_room() -> None:
    manager = ConnectionManager()
    socket = FakeWebSocket()
    await manager.connect(["restaurant-R1", "user-U1"], socket)

    manager.disconnect(socket)
    manager.disconnect(socket)

    assert manager.room_size("restaurant-R1") == 0
    assert manager.room_size("user-U1") == 0


async def test_failed_send_drops_the_socket() -> None:
    manager = ConnectionManager()
    healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
    await manager.connect(["restaurant-R1"], healthy)
    await manager.connect(["restaurant-R1", "user-U2"], broken)

    await manager.send_to_room("restaurant-R1", {"type": "ping"})

    assert healthy.sent == [{"type": "ping"}]
    assert manager.room_size("restaurant-R1") == 1
    assert manager.room_size("user-U2") == 0


async def test_emit_to_restaurant_wraps_the_message() -> None:
    manager = ConnectionManager()
    in_room, elsewhere = FakeWebSocket(), FakeWebSocket()
    await manager.connect([restaurant_room("R1")], in_room)
    await manager.connect([restaurant_room("R2")], elsewhere)
    dispatcher = NotificationDispatcher(manager)

    dispatcher.emit_to_restaurant("R1", {"restaurantId": "R1", "notification": {"id": "N1"}})
    await _drain()

    assert in_room.sent == [
        {
            "type": NOTIFICATIONS_CREATED,
            "data": {"restaurantId": "R1", "notification": {"id": "N1"}},
        }
    ]
    assert elsewhere.sent == []


async def test_emit_to_user_targets_the_user_room() -> None:
    manager = ConnectionManager()
    socket = FakeWebSocket()
    await manager.connect([user_room("U1")], socket)
    dispatcher = NotificationDispatcher(manager)

    dispatcher.emit_to_user("U1", UNREAD_COUNT_UPDATED, {"unreadCount": 3})
    await _drain()

    assert socket.sent == [{"type": UNREAD_COUNT_UPDATED, "data": {"unreadCount": 3}}]


async def test_emit_from_a_worker_thread() -> None:
    manager = ConnectionManager()
    socket = FakeWebSocket()
    await manager.connect([restaurant_room("R1")], socket)
    dispatcher = NotificationDispatcher(manager)

    await anyio.to_thread.run_sync(dispatcher.emit_to_restaurant, "R1", {"restaurantId": "R1"})

    assert socket.sent == [{"type": NOTIFICATIONS_CREATED, "data": {"restaurantId": "R1"}}]


def test_emit_without_event_loop_is_dropped() -> None:
    dispatcher = NotificationDispatcher(ConnectionManager())

    dispatcher.emit_to_user("U1", UNREAD_COUNT_UPDATED, {"unreadCount": 0})


async def test_finished_deliveries_are_released() -> None:
    manager = ConnectionManager()
    socket = FakeWebSocket()
    await manager.connect([restaurant_room("R1")], socket)
    dispatcher = NotificationDispatcher(manager)

    dispatcher.emit_to_restaurant("R1", {"restaurantId": "R1"})
    assert len(dispatcher._pending) == 1
    await _drain()

    assert dispatcher._pending == set()
    assert len(socket.sent) == 1
