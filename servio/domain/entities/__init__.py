"""Domain entities exposed by the application."""

from .domain_event import (
    HANDLED_EVENT_TYPES,
    DomainEvent,
    EventActor,
    NotificationEventType,
)
from .notification import (
    CreatedNotification,
    Notification,
    NotificationDraft,
    NotificationSeverity,
    Recipient,
    RestaurantRecipient,
    RoleRecipient,
    UserRecipient,
)
from .order import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_PREPARING,
    ORDER_STATUS_READY,
    ORDER_STATUS_RECEIVED,
    ORDER_STATUSES,
    Customer,
    Order,
)
from .user import ROLE_MANAGER, ROLE_OWNER, ROLE_STAFF, StaffUser

__all__ = [
    "HANDLED_EVENT_TYPES",
    "DomainEvent",
    "EventActor",
    "NotificationEventType",
    "CreatedNotification",
    "Notification",
    "NotificationDraft",
    "NotificationSeverity",
    "Recipient",
    "RestaurantRecipient",
    "RoleRecipient",
    "UserRecipient",
    "ORDER_STATUSES",
    "ORDER_STATUS_CANCELLED",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_PREPARING",
    "ORDER_STATUS_READY",
    "ORDER_STATUS_RECEIVED",
    "Customer",
    "Order",
    "ROLE_MANAGER",
    "ROLE_OWNER",
    "ROLE_STAFF",
    "StaffUser",
]
