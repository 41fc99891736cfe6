"""Repository implementations for infrastructure layer."""

from .customer_repository import (
    SEND_STATUS_FAILED,
    SEND_STATUS_SENT,
    CustomerRepository,
)
from .notification_repository import NotificationRepository, parse_metadata
from .notification_store import NotificationStore, serialize_metadata
from .order_repository import OrderRepository

__all__ = [
    "SEND_STATUS_FAILED",
    "SEND_STATUS_SENT",
    "CustomerRepository",
    "NotificationRepository",
    "NotificationStore",
    "OrderRepository",
    "parse_metadata",
    "serialize_metadata",
]
