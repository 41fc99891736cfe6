"""Realtime notification infrastructure helpers."""

from .dispatcher import (
    NOTIFICATIONS_CREATED,
    UNREAD_COUNT_UPDATED,
    NotificationDispatcher,
)
from .manager import ConnectionManager, restaurant_room, user_room

__all__ = [
    "NOTIFICATIONS_CREATED",
    "UNREAD_COUNT_UPDATED",
    "ConnectionManager",
    "NotificationDispatcher",
    "restaurant_room",
    "user_room",
]
