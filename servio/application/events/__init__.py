"""Domain event publishing."""

from .bus import EventBus, EventHandler

__all__ = ["EventBus", "EventHandler"]
