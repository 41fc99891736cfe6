"""
In-process event bus connecting route handlers to notification delivery.

Route handlers emit domain events after a state change; subscribers such as
the notification service react to them. Delivery rules:

- Handlers are keyed by event type string and invoked in registration order.
- ``emit`` awaits each handler before calling the next one.
- There is no isolation between handlers: an exception raised by a handler
  stops the remaining handlers for that ``emit`` call and propagates to the
  caller unchanged. Callers that need independence must catch it themselves.
- No persistence, no replay, no retries. Emitting a type with no handlers is
  a no-op.

The bus is constructed explicitly and injected into its consumers.
"""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Union

from servio.domain.entities import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Union[Awaitable[Any], Any]]


class EventBus:
    """Publish/subscribe registry mapping event types to async handlers.

    Example:
        bus = EventBus()

        async def on_status_changed(event):
            ...

        bus.on("order.status_changed", on_status_changed)
        await bus.emit("order.status_changed", event)
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def on(self, event_type: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``event_type``.

        The same handler may be registered more than once and will then be
        called once per registration.
        """

        self._handlers[event_type].append(handler)
        logger.debug("Subscribed handler to '%s' events", event_type)

    def off(self, event_type: str, handler: EventHandler) -> bool:
        """Remove one registration of ``handler``; ``False`` if it was absent."""

        handlers = self._handlers.get(event_type)
        if not handlers:
            return False
        try:
            handlers.remove(handler)
        except ValueError:
            return False
        if not handlers:
            self._handlers.pop(event_type, None)
        return True

    def listener_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, ()))

    async def emit(self, event_type: str, event: DomainEvent) -> None:
        """Run every handler registered for ``event_type`` sequentially."""

        handlers = list(self._handlers.get(event_type, ()))
        if not handlers:
            logger.debug("No handlers for event type '%s'", event_type)
            return

        logger.info("Emitting %s to %d handler(s)", event, len(handlers))
        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result


__all__ = ["EventBus", "EventHandler"]
