"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Iterable, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def restaurant_room(restaurant_id: str) -> str:
    return f"restaurant-{restaurant_id}"


def user_room(user_id: str) -> str:
    return f"user-{user_id}"


class ConnectionManager:
    """Manage active websocket connections grouped into named rooms."""

    def __init__(self) -> None:
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._memberships: dict[WebSocket, set[str]] = {}

    async def connect(self, rooms: Iterable[str], websocket: WebSocket) -> None:
        """Accept the websocket connection and join it to every room in ``rooms``."""

        await websocket.accept()
        self.join(rooms, websocket)

    def join(self, rooms: Iterable[str], websocket: WebSocket) -> None:
        joined = self._memberships.setdefault(websocket, set())
        for room in rooms:
            self._rooms[room].add(websocket)
            joined.add(room)

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove ``websocket`` from every room it joined."""

        for room in self._memberships.pop(websocket, set()):
            connections = self._rooms.get(room)
            if connections is None:
                continue
            connections.discard(websocket)
            if not connections:
                self._rooms.pop(room, None)

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def send_to_room(self, room: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection in ``room``."""

        connections = list(self._rooms.get(room, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception:
                logger.debug("Dropping websocket from %s after failed send", room)
                self.disconnect(connection)


__all__ = [
    "ConnectionManager",
    "restaurant_room",
    "user_room",
]
