"""SQLAlchemy models for persisted notifications and their audiences."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from servio.infrastructure.database import Base

RECIPIENT_TYPE_RESTAURANT = "restaurant"
RECIPIENT_TYPE_ROLE = "role"
RECIPIENT_TYPE_USER = "user"


class NotificationModel(Base):
    """One notification drafted from a domain event."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True)
    restaurant_id = Column(String(64), nullable=False, index=True)
    type = Column(String(64), nullable=False)
    severity = Column(String(16), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    metadata_json = Column("metadata", Text, nullable=False, default="{}")
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)

    recipients = relationship(
        "NotificationRecipientModel",
        back_populates="notification",
        cascade="all, delete-orphan",
    )


class NotificationRecipientModel(Base):
    """Audience row: the whole restaurant, a role or a single user."""

    __tablename__ = "notification_recipients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        String(36),
        ForeignKey("notifications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    restaurant_id = Column(String(64), nullable=False, index=True)
    recipient_type = Column(String(16), nullable=False)
    recipient_role = Column(String(32), nullable=True)
    recipient_user_id = Column(String(64), nullable=True)

    notification = relationship("NotificationModel", back_populates="recipients")


class NotificationReadModel(Base):
    """Per-reader read receipt."""

    __tablename__ = "notification_reads"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_reads_reader"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        String(36),
        ForeignKey("notifications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(64), nullable=False, index=True)
    read_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = [
    "NotificationModel",
    "NotificationReadModel",
    "NotificationRecipientModel",
    "RECIPIENT_TYPE_RESTAURANT",
    "RECIPIENT_TYPE_ROLE",
    "RECIPIENT_TYPE_USER",
]
