"""Utility helpers to push notifications to websocket rooms."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from .manager import ConnectionManager, restaurant_room, user_room

logger = logging.getLogger(__name__)

NOTIFICATIONS_CREATED = "notifications.created"
UNREAD_COUNT_UPDATED = "notifications.unread_count.updated"


class NotificationDispatcher:
    """Wrap payloads in an envelope and schedule their delivery."""

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    @property
    def manager(self) -> ConnectionManager:
        return self._manager

    def emit_to_restaurant(self, restaurant_id: str, message: dict[str, Any]) -> None:
        """Schedule ``message`` for every socket in the restaurant's room."""

        self._schedule(
            restaurant_room(restaurant_id),
            {"type": NOTIFICATIONS_CREATED, "data": message},
        )

    def emit_to_user(self, user_id: str, event_type: str, payload: dict[str, Any]) -> None:
        """Schedule ``payload`` for every socket the user has open."""

        self._schedule(user_room(user_id), {"type": event_type, "data": payload})

    def _schedule(self, room: str, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_room, room, message)
            except RuntimeError:
                logger.debug("No event loop available; dropping %s for %s", message["type"], room)
        else:
            task = loop.create_task(self._manager.send_to_room(room, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


__all__ = [
    "NOTIFICATIONS_CREATED",
    "UNREAD_COUNT_UPDATED",
    "NotificationDispatcher",
]
