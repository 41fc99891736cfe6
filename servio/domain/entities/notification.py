"""Domain entities for drafted and persisted notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Literal, Mapping, Union


class NotificationSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class RestaurantRecipient:
    """Every staff member of the restaurant."""

    kind: ClassVar[Literal["restaurant"]] = "restaurant"


@dataclass(frozen=True)
class RoleRecipient:
    """Every user holding ``role`` at the restaurant."""

    role: str
    kind: ClassVar[Literal["role"]] = "role"


@dataclass(frozen=True)
class UserRecipient:
    """A single addressee."""

    user_id: str
    kind: ClassVar[Literal["user"]] = "user"


Recipient = Union[RestaurantRecipient, RoleRecipient, UserRecipient]


@dataclass(frozen=True)
class NotificationDraft:
    """In-memory notification produced from a domain event, not yet stored."""

    severity: NotificationSeverity
    title: str
    message: str
    recipients: list[Recipient] = field(default_factory=list)
    metadata: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class CreatedNotification:
    """Identifier and client-side timestamp handed back by the store."""

    notification_id: str
    created_at: str


@dataclass
class Notification:
    """A stored notification as seen by one reader."""

    id: str
    restaurant_id: str
    type: str
    severity: str
    title: str
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = [
    "CreatedNotification",
    "Notification",
    "NotificationDraft",
    "NotificationSeverity",
    "Recipient",
    "RestaurantRecipient",
    "RoleRecipient",
    "UserRecipient",
]
