"""Order use cases that announce their changes on the event bus."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from sqlalchemy.orm import Session

from servio.application.events import EventBus
from servio.domain.entities import (
    ORDER_STATUS_RECEIVED,
    ORDER_STATUSES,
    DomainEvent,
    EventActor,
    NotificationEventType,
    Order,
    StaffUser,
)
from servio.infrastructure.repositories import OrderRepository

logger = logging.getLogger(__name__)

CHANNEL_VAPI = "vapi"


def _actor_for(user: StaffUser | None) -> EventActor:
    return EventActor.user(user.id) if user is not None else EventActor.system()


async def create_order(
    session: Session,
    bus: EventBus,
    *,
    restaurant_id: str,
    channel: str,
    total_amount: float,
    items: list[dict[str, Any]] | None = None,
    customer_name: str | None = None,
    customer_phone: str | None = None,
    customer_email: str | None = None,
    external_id: str | None = None,
    user: StaffUser | None = None,
) -> Order:
    """Store a new order and emit the matching ``order.created_*`` event."""

    if total_amount < 0:
        raise ValueError("Order total cannot be negative")

    order = OrderRepository(session).create(
        Order(
            id=str(uuid4()),
            restaurant_id=restaurant_id,
            channel=channel,
            total_amount=total_amount,
            status=ORDER_STATUS_RECEIVED,
            external_id=external_id,
            items=list(items or []),
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
        )
    )

    event_type = (
        NotificationEventType.ORDER_CREATED_VAPI
        if channel == CHANNEL_VAPI
        else NotificationEventType.ORDER_CREATED_WEB
    )
    await bus.emit(
        event_type.value,
        DomainEvent(
            restaurant_id=restaurant_id,
            type=event_type.value,
            actor=_actor_for(user),
            payload={
                "orderId": order.id,
                "customerName": order.customer_name,
                "totalAmount": order.total_amount,
                "channel": order.channel,
            },
        ),
    )
    return order


async def update_order_status(
    session: Session,
    bus: EventBus,
    *,
    order_id: str,
    status: str,
    user: StaffUser,
) -> Order:
    """Change an order's status and emit ``order.status_changed``.

    The update is committed before the event is emitted; an error raised by
    a handler reaches the caller even though the new status is stored.
    """

    if status not in ORDER_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")

    repository = OrderRepository(session)
    current = repository.get_for_restaurant(order_id, user.restaurant_id)
    if current is None:
        raise LookupError("Order not found")

    updated = repository.update_status(order_id, status)
    logger.info("Order %s moved from %s to %s", order_id, current.status, status)

    event_type = NotificationEventType.ORDER_STATUS_CHANGED.value
    await bus.emit(
        event_type,
        DomainEvent(
            restaurant_id=user.restaurant_id,
            type=event_type,
            actor=_actor_for(user),
            payload={
                "orderId": order_id,
                "previousStatus": current.status,
                "newStatus": status,
            },
        ),
    )
    return updated


__all__ = ["CHANNEL_VAPI", "create_order", "update_order_status"]
