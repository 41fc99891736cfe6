"""Tests for the event handlers that store and broadcast notifications."""

from __future__ import annotations

import json
from datetime import datetime

import anyio
import pytest

from servio.application.events import EventBus
from servio.application.use_cases.notifications import NotificationService, realtime_payload
from servio.domain.entities import (
    HANDLED_EVENT_TYPES,
    CreatedNotification,
    DomainEvent,
    NotificationDraft,
    NotificationSeverity,
)
from servio.infrastructure.notifications import (
    ConnectionManager,
    NotificationDispatcher,
    restaurant_room,
)

pytestmark = pytest.mark.anyio


class RecordingStore:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple] = []
        self.error = error

    def create_notification(self, restaurant_id, event_type, draft) -> CreatedNotification:
        self.calls.append((restaurant_id, event_type, draft))
        if self.error is not None:
            raise self.error
        return CreatedNotification(
            notification_id=f"N{len(self.calls)}", created_at="2024-05-01T12:00:00+00:00"
        )


class RecordingMessaging:
    def __init__(self) -> None:
        self.confirmations: list[tuple[str, str]] = []
        self.status_updates: list[tuple[str, str, str]] = []

    async def send_order_confirmation(self, order_id: str, restaurant_id: str) -> None:
        self.confirmations.append((order_id, restaurant_id))

    async def send_order_status_update(
        self, order_id: str, restaurant_id: str, new_status: str
    ) -> None:
        self.status_updates.append((order_id, restaurant_id, new_status))


def test_registers_a_handler_for_every_handled_type(dispatcher) -> None:
    bus = EventBus()

    NotificationService(bus, RecordingStore(), dispatcher, RecordingMessaging())

    for event_type in HANDLED_EVENT_TYPES:
        expected = 2 if event_type.startswith("order.") else 1
        assert bus.listener_count(event_type) == expected


async def test_low_stock_event_is_stored_and_broadcast(dispatcher) -> None:
    bus = EventBus()
    store = RecordingStore()
    NotificationService(bus, store, dispatcher)

    await bus.emit(
        "inventory.low_stock",
        DomainEvent(
            restaurant_id="R1", type="inventory.low_stock", payload={"itemName": "Chicken Wings"}
        ),
    )

    assert len(store.calls) == 1
    restaurant_id, event_type, draft = store.calls[0]
    assert (restaurant_id, event_type) == ("R1", "inventory.low_stock")
    assert draft.message == "Chicken Wings is low on stock."

    assert dispatcher.restaurant_messages == [
        (
            "R1",
            {
                "restaurantId": "R1",
                "notification": {
                    "id": "N1",
                    "type": "inventory.low_stock",
                    "severity": "warning",
                    "title": "Low Stock",
                    "message": "Chicken Wings is low on stock.",
                    "metadata": {"itemName": "Chicken Wings"},
                    "createdAt": "2024-05-01T12:00:00+00:00",
                    "isRead": False,
                },
            },
        )
    ]


async def test_unknown_type_never_reaches_the_store(dispatcher) -> None:
    bus = EventBus()
    store = RecordingStore()
    service = NotificationService(bus, store, dispatcher)

    await service.handle_event(
        DomainEvent(restaurant_id="R1", type="loyalty.points_awarded", payload={})
    )

    assert store.calls == []
    assert dispatcher.restaurant_messages == []


async def test_order_created_sends_customer_confirmation(dispatcher) -> None:
    bus = EventBus()
    messaging = RecordingMessaging()
    NotificationService(bus, RecordingStore(), dispatcher, messaging)

    await bus.emit(
        "order.created_web",
        DomainEvent(
            restaurant_id="R1",
            type="order.created_web",
            payload={"orderId": "O1", "customerName": "Sam"},
        ),
    )

    assert messaging.confirmations == [("O1", "R1")]
    assert len(dispatcher.restaurant_messages) == 1


async def test_order_status_change_sends_customer_update(dispatcher) -> None:
    bus = EventBus()
    messaging = RecordingMessaging()
    NotificationService(bus, RecordingStore(), dispatcher, messaging)

    await bus.emit(
        "order.status_changed",
        DomainEvent(
            restaurant_id="R1",
            type="order.status_changed",
            payload={"orderId": "O1", "previousStatus": "received", "newStatus": "ready"},
        ),
    )

    assert messaging.status_updates == [("O1", "R1", "ready")]


async def test_missing_order_id_skips_customer_messages(dispatcher) -> None:
    bus = EventBus()
    messaging = RecordingMessaging()
    NotificationService(bus, RecordingStore(), dispatcher, messaging)

    await bus.emit(
        "order.status_changed",
        DomainEvent(restaurant_id="R1", type="order.status_changed", payload={"newStatus": "ready"}),
    )

    assert messaging.status_updates == []


async def test_store_failure_blocks_customer_message(dispatcher) -> None:
    bus = EventBus()
    messaging = RecordingMessaging()
    NotificationService(bus, RecordingStore(error=RuntimeError("db down")), dispatcher, messaging)

    with pytest.raises(RuntimeError, match="db down"):
        await bus.emit(
            "order.created_vapi",
            DomainEvent(restaurant_id="R1", type="order.created_vapi", payload={"orderId": "O9"}),
        )

    assert messaging.confirmations == []
    assert dispatcher.restaurant_messages == []


class JsonSocket:
    """Websocket stand-in that encodes messages the way the real socket does."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    async def accept(self) -> None:
        pass

    async def send_json(self, message: dict) -> None:
        self.sent.append(json.dumps(message))


async def test_pushed_metadata_matches_the_stored_encoding() -> None:
    manager = ConnectionManager()
    socket = JsonSocket()
    await manager.connect([restaurant_room("R1")], socket)
    bus = EventBus()
    NotificationService(bus, RecordingStore(), NotificationDispatcher(manager))

    await bus.emit(
        "inventory.low_stock",
        DomainEvent(
            restaurant_id="R1",
            type="inventory.low_stock",
            payload={"itemName": "Wings", "checkedAt": datetime(2024, 5, 1)},
        ),
    )
    for _ in range(3):
        await anyio.sleep(0)

    assert manager.room_size("restaurant-R1") == 1
    (raw,) = socket.sent
    metadata = json.loads(raw)["data"]["notification"]["metadata"]
    assert metadata == {"itemName": "Wings", "checkedAt": "2024-05-01T00:00:00"}


def test_unencodable_metadata_is_pushed_as_empty_object() -> None:
    draft = NotificationDraft(
        severity=NotificationSeverity.WARNING,
        title="Low Stock",
        message="Wings is low on stock.",
        metadata={"sensor": object()},
    )
    created = CreatedNotification(notification_id="N1", created_at="2024-05-01T12:00:00+00:00")

    payload = realtime_payload("R1", "inventory.low_stock", draft, created)

    assert payload["notification"]["metadata"] == {}
