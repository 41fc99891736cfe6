"""Persistence helpers for customers and the messages sent to them."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from servio.domain.entities import Customer
from servio.infrastructure.models import CustomerModel, MarketingSendModel
from servio.utils import ensure_app_timezone, now_utc_naive

SEND_STATUS_SENT = "sent"
SEND_STATUS_FAILED = "failed"


class CustomerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self, restaurant_id: str, *, email: str | None = None, phone: str | None = None
    ) -> Customer | None:
        """Look a customer up by email, or by phone when no email is given."""

        model = self._find_model(restaurant_id, email=email, phone=phone)
        return self._to_entity(model) if model is not None else None

    def get_or_create(
        self,
        restaurant_id: str,
        *,
        name: str | None,
        email: str | None,
        phone: str | None,
        order_total: float,
    ) -> Customer:
        """Record an order for the matching customer, creating one if needed.

        New customers are opted in to the channels they provided contact
        details for.
        """

        now = now_utc_naive()
        model = self._find_model(restaurant_id, email=email, phone=phone)
        if model is not None:
            model.total_orders = (model.total_orders or 0) + 1
            model.total_spent = (model.total_spent or 0.0) + order_total
            model.last_order_date = now
            model.updated_at = now
        else:
            model = CustomerModel(
                id=str(uuid4()),
                restaurant_id=restaurant_id,
                name=name or "Customer",
                email=email,
                phone=phone,
                opt_in_sms=bool(phone),
                opt_in_email=bool(email),
                total_orders=1,
                total_spent=order_total,
                last_order_date=now,
            )
            self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def log_send(
        self,
        customer_id: str,
        *,
        channel: str,
        recipient: str,
        message: str,
        status: str,
        error_message: str | None = None,
    ) -> None:
        self.session.add(
            MarketingSendModel(
                id=str(uuid4()),
                customer_id=customer_id,
                type=channel,
                recipient=recipient,
                message=message,
                status=status,
                error_message=error_message,
            )
        )
        self.session.commit()

    def list_sends(self, customer_id: str) -> list[MarketingSendModel]:
        query = (
            select(MarketingSendModel)
            .where(MarketingSendModel.customer_id == customer_id)
            .order_by(MarketingSendModel.created_at)
        )
        return list(self.session.scalars(query).all())

    def _find_model(
        self, restaurant_id: str, *, email: str | None, phone: str | None
    ) -> CustomerModel | None:
        query = select(CustomerModel).where(CustomerModel.restaurant_id == restaurant_id)
        if email:
            query = query.where(CustomerModel.email == email)
        elif phone:
            query = query.where(CustomerModel.phone == phone)
        else:
            return None
        return self.session.scalars(query.limit(1)).first()

    @staticmethod
    def _to_entity(model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            restaurant_id=model.restaurant_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            opt_in_sms=bool(model.opt_in_sms),
            opt_in_email=bool(model.opt_in_email),
            total_orders=model.total_orders or 0,
            total_spent=float(model.total_spent or 0.0),
            last_order_date=ensure_app_timezone(model.last_order_date),
        )


__all__ = [
    "CustomerRepository",
    "SEND_STATUS_FAILED",
    "SEND_STATUS_SENT",
]
