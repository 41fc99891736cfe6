"""Persistence helpers for orders."""

from __future__ import annotations

import json

from sqlalchemy.orm import Session

from servio.domain.entities import Order
from servio.infrastructure.models import OrderModel
from servio.utils import ensure_app_timezone, now_utc_naive


class OrderRepository:
    """Provide the order lookups and writes the order routes need."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, order_id: str) -> Order | None:
        model = self.session.get(OrderModel, order_id)
        if model is None:
            return None
        return self._to_entity(model)

    def get_for_restaurant(self, order_id: str, restaurant_id: str) -> Order | None:
        order = self.get(order_id)
        if order is None or order.restaurant_id != restaurant_id:
            return None
        return order

    def create(self, order: Order) -> Order:
        model = OrderModel(
            id=order.id,
            restaurant_id=order.restaurant_id,
            external_id=order.external_id,
            channel=order.channel,
            items=json.dumps(order.items),
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_email=order.customer_email,
            total_amount=order.total_amount,
            status=order.status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, order_id: str, status: str) -> Order:
        model = self.session.get(OrderModel, order_id)
        if model is None:
            raise LookupError(f"Order {order_id} not found")
        model.status = status
        model.updated_at = now_utc_naive()
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: OrderModel) -> Order:
        try:
            items = json.loads(model.items or "[]")
        except json.JSONDecodeError:
            items = []
        return Order(
            id=model.id,
            restaurant_id=model.restaurant_id,
            external_id=model.external_id,
            channel=model.channel,
            items=items if isinstance(items, list) else [],
            customer_name=model.customer_name,
            customer_phone=model.customer_phone,
            customer_email=model.customer_email,
            total_amount=float(model.total_amount or 0.0),
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["OrderRepository"]
