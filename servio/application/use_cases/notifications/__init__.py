"""Notification drafting, delivery and inbox use cases."""

from .inbox import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    InboxPage,
    clear_all,
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
)
from .service import NotificationService, realtime_payload
from .templates import build_notification_drafts

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "InboxPage",
    "NotificationService",
    "build_notification_drafts",
    "clear_all",
    "delete_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
    "realtime_payload",
]
