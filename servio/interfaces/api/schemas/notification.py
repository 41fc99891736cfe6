"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    restaurant_id: str
    type: str
    severity: str
    title: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None


class NotificationList(BaseModel):
    notifications: list[NotificationRead]
    unread_count: int


class UnreadCount(BaseModel):
    unread_count: int


class ClearedNotifications(BaseModel):
    deleted: int


__all__ = ["ClearedNotifications", "NotificationList", "NotificationRead", "UnreadCount"]
