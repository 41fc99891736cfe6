"""Subscribe to domain events and turn them into stored, broadcast notifications."""

from __future__ import annotations

import json
import logging
from typing import Any

from servio.application.events import EventBus
from servio.application.use_cases.order_messaging import OrderNotificationService
from servio.domain.entities import (
    HANDLED_EVENT_TYPES,
    CreatedNotification,
    DomainEvent,
    NotificationDraft,
    NotificationEventType,
)
from servio.infrastructure.notifications import NotificationDispatcher
from servio.infrastructure.repositories import NotificationStore, serialize_metadata

from .templates import build_notification_drafts

logger = logging.getLogger(__name__)

ORDER_CREATED_TYPES = (
    NotificationEventType.ORDER_CREATED_WEB.value,
    NotificationEventType.ORDER_CREATED_VAPI.value,
)
ORDER_STATUS_CHANGED = NotificationEventType.ORDER_STATUS_CHANGED.value


def _enum_value(value: Any) -> str:
    return str(getattr(value, "value", value))


def realtime_payload(
    restaurant_id: str,
    event_type: str,
    draft: NotificationDraft,
    created: CreatedNotification,
) -> dict[str, Any]:
    """Build the message pushed to the restaurant room for a new notification."""

    return {
        "restaurantId": restaurant_id,
        "notification": {
            "id": created.notification_id,
            "type": _enum_value(event_type),
            "severity": _enum_value(draft.severity),
            "title": draft.title,
            "message": draft.message,
            "metadata": json.loads(serialize_metadata(draft.metadata)),
            "createdAt": created.created_at,
            "isRead": False,
        },
    }


class NotificationService:
    """Wire the event bus to the notification store and realtime dispatcher.

    Constructing the service registers its handlers: first one drafting
    handler per handled event type, then the customer messaging handlers on
    the order events. Handlers run in that order, so a failure while drafting
    an order notification keeps the customer message for that emit from
    being sent.
    """

    def __init__(
        self,
        bus: EventBus,
        store: NotificationStore,
        dispatcher: NotificationDispatcher,
        order_messaging: OrderNotificationService | None = None,
    ) -> None:
        self.bus = bus
        self.store = store
        self.dispatcher = dispatcher
        self.order_messaging = order_messaging

        for event_type in HANDLED_EVENT_TYPES:
            bus.on(event_type, self.handle_event)

        if order_messaging is not None:
            for event_type in ORDER_CREATED_TYPES:
                bus.on(event_type, self.handle_order_created)
            bus.on(ORDER_STATUS_CHANGED, self.handle_order_status_changed)

    async def handle_event(self, event: DomainEvent) -> None:
        drafts = build_notification_drafts(event)
        if not drafts:
            return

        for draft in drafts:
            created = self.store.create_notification(event.restaurant_id, event.type, draft)
            self.dispatcher.emit_to_restaurant(
                event.restaurant_id,
                realtime_payload(event.restaurant_id, event.type, draft, created),
            )
        logger.debug("Created %d notification(s) for %s", len(drafts), event)

    async def handle_order_created(self, event: DomainEvent) -> None:
        order_id = (event.payload or {}).get("orderId")
        if not order_id:
            return
        await self.order_messaging.send_order_confirmation(str(order_id), event.restaurant_id)

    async def handle_order_status_changed(self, event: DomainEvent) -> None:
        payload = event.payload or {}
        order_id = payload.get("orderId")
        new_status = payload.get("newStatus")
        if not (order_id and new_status):
            return
        await self.order_messaging.send_order_status_update(
            str(order_id), event.restaurant_id, str(new_status)
        )


__all__ = ["NotificationService", "realtime_payload"]
