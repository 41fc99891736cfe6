"""Reader-side queries over stored notifications."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.orm import Session

from servio.domain.entities import Notification, StaffUser
from servio.infrastructure.models import (
    RECIPIENT_TYPE_RESTAURANT,
    RECIPIENT_TYPE_ROLE,
    RECIPIENT_TYPE_USER,
    NotificationModel,
    NotificationReadModel,
    NotificationRecipientModel,
)
from servio.utils import ensure_app_timezone, now_utc_naive


def parse_metadata(value: Any) -> dict[str, Any]:
    """Decode the stored JSON text; anything unreadable becomes ``{}``."""

    if not value:
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


class NotificationRepository:
    """List, mark and remove the notifications visible to one reader.

    A notification is visible to a user when it belongs to their restaurant
    and one of its recipient rows targets the whole restaurant, their role,
    or them directly.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @staticmethod
    def _audience_clause(user: StaffUser):
        return or_(
            NotificationRecipientModel.recipient_type == RECIPIENT_TYPE_RESTAURANT,
            and_(
                NotificationRecipientModel.recipient_type == RECIPIENT_TYPE_ROLE,
                NotificationRecipientModel.recipient_role == user.role,
            ),
            and_(
                NotificationRecipientModel.recipient_type == RECIPIENT_TYPE_USER,
                NotificationRecipientModel.recipient_user_id == user.id,
            ),
        )

    def _visible_ids(self, user: StaffUser):
        return (
            select(NotificationRecipientModel.notification_id)
            .join(
                NotificationModel,
                NotificationModel.id == NotificationRecipientModel.notification_id,
            )
            .where(NotificationModel.restaurant_id == user.restaurant_id)
            .where(self._audience_clause(user))
        )

    def _read_ids(self, user: StaffUser):
        return select(NotificationReadModel.notification_id).where(
            NotificationReadModel.user_id == user.id
        )

    def list_for_user(self, user: StaffUser, *, limit: int | None = 50) -> Sequence[Notification]:
        query = (
            select(NotificationModel, NotificationReadModel.read_at)
            .outerjoin(
                NotificationReadModel,
                and_(
                    NotificationReadModel.notification_id == NotificationModel.id,
                    NotificationReadModel.user_id == user.id,
                ),
            )
            .where(NotificationModel.id.in_(self._visible_ids(user)))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [
            self._to_entity(model, read_at)
            for model, read_at in self.session.execute(query).all()
        ]

    def list_unread_for_user(
        self, user: StaffUser, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            select(NotificationModel)
            .where(NotificationModel.id.in_(self._visible_ids(user)))
            .where(NotificationModel.id.not_in(self._read_ids(user)))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model, None) for model in self.session.scalars(query).all()]

    def count_unread(self, user: StaffUser) -> int:
        query = (
            select(func.count(NotificationModel.id))
            .where(NotificationModel.id.in_(self._visible_ids(user)))
            .where(NotificationModel.id.not_in(self._read_ids(user)))
        )
        return int(self.session.scalar(query) or 0)

    def belongs_to_restaurant(self, notification_id: str, restaurant_id: str) -> bool:
        query = select(NotificationModel.id).where(
            NotificationModel.id == notification_id,
            NotificationModel.restaurant_id == restaurant_id,
        )
        return self.session.scalar(query) is not None

    def mark_as_read(self, notification_ids: Sequence[str], *, user: StaffUser) -> None:
        """Record a read receipt for each id, refreshing existing receipts."""

        ids = list(dict.fromkeys(i for i in notification_ids if i))
        if not ids:
            return
        now = now_utc_naive()
        existing = {
            read.notification_id: read
            for read in self.session.scalars(
                select(NotificationReadModel).where(
                    NotificationReadModel.user_id == user.id,
                    NotificationReadModel.notification_id.in_(ids),
                )
            )
        }
        known = set(
            self.session.scalars(
                select(NotificationModel.id).where(
                    NotificationModel.id.in_(ids),
                    NotificationModel.restaurant_id == user.restaurant_id,
                )
            )
        )
        for notification_id in ids:
            if notification_id not in known:
                continue
            read = existing.get(notification_id)
            if read is None:
                self.session.add(
                    NotificationReadModel(
                        notification_id=notification_id, user_id=user.id, read_at=now
                    )
                )
            else:
                read.read_at = now
        self.session.commit()

    def mark_all_as_read(self, user: StaffUser) -> None:
        unread = self.session.scalars(
            select(NotificationModel.id)
            .where(NotificationModel.id.in_(self._visible_ids(user)))
            .where(NotificationModel.id.not_in(self._read_ids(user)))
        ).all()
        self.mark_as_read(list(unread), user=user)

    def delete(self, notification_id: str) -> None:
        self._delete_ids([notification_id])
        self.session.commit()

    def clear_for_user(self, user: StaffUser) -> int:
        """Delete every notification visible to ``user``; return how many."""

        ids = list(set(self.session.scalars(self._visible_ids(user)).all()))
        self._delete_ids(ids)
        self.session.commit()
        return len(ids)

    def _delete_ids(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        self.session.execute(
            delete(NotificationReadModel).where(NotificationReadModel.notification_id.in_(ids))
        )
        self.session.execute(
            delete(NotificationRecipientModel).where(
                NotificationRecipientModel.notification_id.in_(ids)
            )
        )
        self.session.execute(delete(NotificationModel).where(NotificationModel.id.in_(ids)))

    @staticmethod
    def _to_entity(model: NotificationModel, read_at) -> Notification:
        return Notification(
            id=model.id,
            restaurant_id=model.restaurant_id,
            type=model.type,
            severity=model.severity,
            title=model.title,
            message=model.message,
            metadata=parse_metadata(model.metadata_json),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(read_at),
        )


__all__ = ["NotificationRepository", "parse_metadata"]
