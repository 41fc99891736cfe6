"""Aggregate application use cases."""

from .order_messaging import OrderNotificationService
from .orders import create_order, update_order_status

__all__ = [
    "OrderNotificationService",
    "create_order",
    "update_order_status",
]
