from .event import EventAccepted, EventPublish
from .notification import (
    ClearedNotifications,
    NotificationList,
    NotificationRead,
    UnreadCount,
)
from .order import OrderCreate, OrderRead, OrderStatusUpdate

__all__ = [
    "ClearedNotifications",
    "EventAccepted",
    "EventPublish",
    "NotificationList",
    "NotificationRead",
    "OrderCreate",
    "OrderRead",
    "OrderStatusUpdate",
    "UnreadCount",
]
