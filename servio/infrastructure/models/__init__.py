"""ORM models used by the application infrastructure."""

from .notification import (
    RECIPIENT_TYPE_RESTAURANT,
    RECIPIENT_TYPE_ROLE,
    RECIPIENT_TYPE_USER,
    NotificationModel,
    NotificationReadModel,
    NotificationRecipientModel,
)
from .order import CustomerModel, MarketingSendModel, OrderModel

__all__ = [
    "RECIPIENT_TYPE_RESTAURANT",
    "RECIPIENT_TYPE_ROLE",
    "RECIPIENT_TYPE_USER",
    "NotificationModel",
    "NotificationReadModel",
    "NotificationRecipientModel",
    "CustomerModel",
    "MarketingSendModel",
    "OrderModel",
]
