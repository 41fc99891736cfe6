"""Durable persistence of drafted notifications and their recipients."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping
from uuid import uuid4

from sqlalchemy.orm import Session

from servio.domain.entities import (
    CreatedNotification,
    NotificationDraft,
    Recipient,
    RestaurantRecipient,
    RoleRecipient,
    UserRecipient,
)
from servio.infrastructure.models import (
    RECIPIENT_TYPE_RESTAURANT,
    RECIPIENT_TYPE_ROLE,
    RECIPIENT_TYPE_USER,
    NotificationModel,
    NotificationRecipientModel,
)
from servio.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

EMPTY_METADATA = "{}"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_metadata(metadata: Mapping[str, Any] | None) -> str:
    """Return ``metadata`` as JSON text, or ``'{}'`` when it cannot be encoded."""

    if not metadata:
        return EMPTY_METADATA
    try:
        return json.dumps(dict(metadata), default=_json_default)
    except (TypeError, ValueError) as exc:
        logger.debug("Storing empty metadata, value is not serializable: %s", exc)
        return EMPTY_METADATA


def _recipient_row(restaurant_id: str, recipient: Recipient) -> NotificationRecipientModel:
    if isinstance(recipient, RestaurantRecipient):
        return NotificationRecipientModel(
            restaurant_id=restaurant_id,
            recipient_type=RECIPIENT_TYPE_RESTAURANT,
        )
    if isinstance(recipient, RoleRecipient):
        return NotificationRecipientModel(
            restaurant_id=restaurant_id,
            recipient_type=RECIPIENT_TYPE_ROLE,
            recipient_role=recipient.role,
        )
    if isinstance(recipient, UserRecipient):
        return NotificationRecipientModel(
            restaurant_id=restaurant_id,
            recipient_type=RECIPIENT_TYPE_USER,
            recipient_user_id=recipient.user_id,
        )
    raise TypeError(f"Unsupported notification recipient: {recipient!r}")


class NotificationStore:
    """Insert one notification row plus one row per resolved recipient.

    Each call opens its own session so the store can be shared by event
    handlers that outlive any request.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_notification(
        self, restaurant_id: str, event_type: str, draft: NotificationDraft
    ) -> CreatedNotification:
        """Persist ``draft`` for ``restaurant_id``.

        The returned ``created_at`` is taken on this side of the connection;
        the stored column uses the database clock and can differ slightly.
        """

        notification_id = str(uuid4())
        type_value = str(getattr(event_type, "value", event_type))
        rows = [_recipient_row(restaurant_id, recipient) for recipient in draft.recipients]

        model = NotificationModel(
            id=notification_id,
            restaurant_id=restaurant_id,
            type=type_value,
            severity=str(getattr(draft.severity, "value", draft.severity)),
            title=draft.title,
            message=draft.message,
            metadata_json=serialize_metadata(draft.metadata),
        )

        session = self._session_factory()
        try:
            session.add(model)
            session.flush()
            for row in rows:
                row.notification_id = notification_id
                session.add(row)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        created_at = now_in_app_timezone().isoformat()
        logger.debug(
            "Stored notification %s (%s) with %d recipient(s)",
            notification_id,
            type_value,
            len(rows),
        )
        return CreatedNotification(notification_id=notification_id, created_at=created_at)


__all__ = ["EMPTY_METADATA", "NotificationStore", "serialize_metadata"]
