"""Domain entities for orders and the customers who place them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ORDER_STATUS_RECEIVED = "received"
ORDER_STATUS_PREPARING = "preparing"
ORDER_STATUS_READY = "ready"
ORDER_STATUS_COMPLETED = "completed"
ORDER_STATUS_CANCELLED = "cancelled"

ORDER_STATUSES: tuple[str, ...] = (
    ORDER_STATUS_RECEIVED,
    ORDER_STATUS_PREPARING,
    ORDER_STATUS_READY,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CANCELLED,
)


@dataclass
class Order:
    """An order placed through the website, the dashboard or the phone line."""

    id: str
    restaurant_id: str
    channel: str
    total_amount: float
    status: str = ORDER_STATUS_RECEIVED
    external_id: str | None = None
    items: list[dict[str, Any]] = field(default_factory=list)
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def short_id(self) -> str:
        """First eight characters, used in customer-facing messages."""

        return self.id[:8]


@dataclass
class Customer:
    id: str
    restaurant_id: str
    name: str
    email: str | None
    phone: str | None
    opt_in_sms: bool
    opt_in_email: bool
    total_orders: int = 0
    total_spent: float = 0.0
    last_order_date: datetime | None = None


__all__ = [
    "Customer",
    "ORDER_STATUSES",
    "ORDER_STATUS_CANCELLED",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_PREPARING",
    "ORDER_STATUS_READY",
    "ORDER_STATUS_RECEIVED",
    "Order",
]
