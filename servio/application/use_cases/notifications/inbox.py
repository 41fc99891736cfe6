"""Use cases behind the authenticated notification inbox."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.orm import Session

from servio.domain.entities import Notification, StaffUser
from servio.infrastructure.notifications import UNREAD_COUNT_UPDATED, NotificationDispatcher
from servio.infrastructure.repositories import NotificationRepository

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


@dataclass(frozen=True)
class InboxPage:
    notifications: Sequence[Notification]
    unread_count: int


def _clamp_limit(limit: int | None) -> int:
    if limit is None or limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def list_notifications(
    session: Session, *, user: StaffUser, limit: int | None = DEFAULT_LIMIT
) -> InboxPage:
    """Return the newest notifications visible to ``user`` and the unread total."""

    repository = NotificationRepository(session)
    return InboxPage(
        notifications=repository.list_for_user(user, limit=_clamp_limit(limit)),
        unread_count=repository.count_unread(user),
    )


def _publish_unread_count(
    dispatcher: NotificationDispatcher | None, user: StaffUser, unread_count: int
) -> None:
    if dispatcher is None:
        return
    dispatcher.emit_to_user(user.id, UNREAD_COUNT_UPDATED, {"unreadCount": unread_count})


def mark_read(
    session: Session,
    *,
    user: StaffUser,
    notification_id: str,
    dispatcher: NotificationDispatcher | None = None,
) -> int:
    """Record that ``user`` read the notification and return the new unread count."""

    repository = NotificationRepository(session)
    repository.mark_as_read([notification_id], user=user)
    unread_count = repository.count_unread(user)
    _publish_unread_count(dispatcher, user, unread_count)
    return unread_count


def mark_all_read(
    session: Session,
    *,
    user: StaffUser,
    dispatcher: NotificationDispatcher | None = None,
) -> int:
    repository = NotificationRepository(session)
    repository.mark_all_as_read(user)
    unread_count = repository.count_unread(user)
    _publish_unread_count(dispatcher, user, unread_count)
    return unread_count


def clear_all(
    session: Session,
    *,
    user: StaffUser,
    dispatcher: NotificationDispatcher | None = None,
) -> int:
    """Delete every notification visible to ``user``; return how many were removed."""

    deleted = NotificationRepository(session).clear_for_user(user)
    _publish_unread_count(dispatcher, user, 0)
    return deleted


def delete_notification(session: Session, *, user: StaffUser, notification_id: str) -> None:
    repository = NotificationRepository(session)
    if not repository.belongs_to_restaurant(notification_id, user.restaurant_id):
        raise LookupError("Notification not found")
    repository.delete(notification_id)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "InboxPage",
    "clear_all",
    "delete_notification",
    "list_notifications",
    "mark_all_read",
    "mark_read",
]
