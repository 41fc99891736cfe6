"""Domain events describing state changes elsewhere in the platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping


class NotificationEventType(str, Enum):
    """Event types the notification pipeline knows how to draft."""

    STAFF_CLOCK_IN = "staff.clock_in"
    STAFF_CLOCK_OUT = "staff.clock_out"
    STAFF_BREAK_START = "staff.break_start"
    STAFF_BREAK_END = "staff.break_end"
    STAFF_OPEN_SHIFT_DETECTED = "staff.open_shift_detected"
    ORDER_CREATED_WEB = "order.created_web"
    ORDER_CREATED_VAPI = "order.created_vapi"
    ORDER_STATUS_CHANGED = "order.status_changed"
    RECEIPT_UPLOADED = "receipt.uploaded"
    RECEIPT_APPLIED = "receipt.applied"
    INVENTORY_LOW_STOCK = "inventory.low_stock"
    TASK_CREATED = "task.created"
    TASK_COMPLETED = "task.completed"
    SYSTEM_ERROR = "system.error"
    SYSTEM_WARNING = "system.warning"


HANDLED_EVENT_TYPES: tuple[str, ...] = tuple(
    event_type.value for event_type in NotificationEventType
)


@dataclass(frozen=True)
class EventActor:
    """Who caused the event: a signed-in ``user`` or the ``system``."""

    actor_type: str
    actor_id: str | None = None

    @classmethod
    def system(cls) -> "EventActor":
        return cls(actor_type="system")

    @classmethod
    def user(cls, user_id: str) -> "EventActor":
        return cls(actor_type="user", actor_id=user_id)


@dataclass(frozen=True)
class DomainEvent:
    """A fact that happened inside a restaurant.

    Events are never persisted; only the notifications derived from them are.
    ``type`` is a plain string so producers can emit types the notification
    pipeline does not handle.
    """

    restaurant_id: str
    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    actor: EventActor = field(default_factory=EventActor.system)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return f"DomainEvent({self.type}, restaurant={self.restaurant_id})"


__all__ = [
    "DomainEvent",
    "EventActor",
    "HANDLED_EVENT_TYPES",
    "NotificationEventType",
]
