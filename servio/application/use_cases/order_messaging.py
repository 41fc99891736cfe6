"""Customer-facing SMS and email messages about their orders."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from anyio import to_thread
from sqlalchemy.orm import Session

from servio.config import Settings, get_settings
from servio.domain.entities import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_PREPARING,
    ORDER_STATUS_READY,
    Customer,
    Order,
)
from servio.infrastructure.email import send_email, text_to_html
from servio.infrastructure.repositories import (
    SEND_STATUS_FAILED,
    SEND_STATUS_SENT,
    CustomerRepository,
    OrderRepository,
)
from servio.infrastructure.sms import SmsResult, send_sms

logger = logging.getLogger(__name__)

SmsSender = Callable[[str, str], Awaitable[SmsResult]]
EmailSender = Callable[[str, str, str], bool]

CONFIRMATION_SMS = (
    "Thank you for your order! Order #{order_id} received. Total: {total}. "
    "We'll notify you when it's ready!"
)
CONFIRMATION_EMAIL = (
    "Thank you for your order!\n\n"
    "Order #{order_id}\n"
    "Total: {total}\n\n"
    "We'll notify you when your order is ready for pickup!"
)
CONFIRMATION_SUBJECT = "Order Confirmation - Order #{order_id}"
STATUS_SUBJECT = "Order {status} - Order #{order_id}"

_STATUS_MESSAGES = {
    ORDER_STATUS_PREPARING: "Your order #{order_id} is now being prepared!",
    ORDER_STATUS_READY: "Your order #{order_id} is ready for pickup!",
    ORDER_STATUS_COMPLETED: "Your order #{order_id} is complete. Thank you for your business!",
    ORDER_STATUS_CANCELLED: (
        "Your order #{order_id} has been cancelled. Please contact us if you have questions."
    ),
}


def format_total(amount: float) -> str:
    return f"${amount:.2f}"


def status_message(order_id: str, status: str) -> str:
    """Return the customer message announcing ``status`` for ``order_id``."""

    short_id = order_id[:8]
    template = _STATUS_MESSAGES.get(status)
    if template is None:
        return f"Order #{short_id} status updated to {status}"
    return template.format(order_id=short_id)


class OrderNotificationService:
    """Send order confirmations and status updates to customers.

    Both public operations log and swallow their own failures so an event
    handler calling them never raises. Every send attempt is recorded in
    ``marketing_sends``.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        sms_sender: SmsSender = send_sms,
        email_sender: EmailSender = send_email,
        settings: Settings | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._sms_sender = sms_sender
        self._email_sender = email_sender
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def send_order_confirmation(self, order_id: str, restaurant_id: str) -> None:
        try:
            await self._send_confirmation(order_id, restaurant_id)
        except Exception:
            logger.exception("Error sending order confirmation for %s", order_id)

    async def send_order_status_update(
        self, order_id: str, restaurant_id: str, new_status: str
    ) -> None:
        try:
            await self._send_status_update(order_id, restaurant_id, new_status)
        except Exception:
            logger.exception("Error sending order status update for %s", order_id)

    async def _send_confirmation(self, order_id: str, restaurant_id: str) -> None:
        session = self._session_factory()
        try:
            order = OrderRepository(session).get_for_restaurant(order_id, restaurant_id)
            if order is None:
                logger.warning("Order not found for notification: %s", order_id)
                return
            if not (order.customer_phone or order.customer_email):
                logger.debug("Order %s has no customer contact details", order_id)
                return

            customers = CustomerRepository(session)
            customer = customers.get_or_create(
                restaurant_id,
                name=order.customer_name,
                email=order.customer_email,
                phone=order.customer_phone,
                order_total=order.total_amount,
            )
            values = {"order_id": order.short_id, "total": format_total(order.total_amount)}
            settings = self.settings

            if settings.order_sms_enabled and customer.phone and customer.opt_in_sms:
                await self._deliver_sms(customers, customer, CONFIRMATION_SMS.format(**values))
            if settings.order_email_enabled and customer.email and customer.opt_in_email:
                await self._deliver_email(
                    customers,
                    customer,
                    CONFIRMATION_SUBJECT.format(**values),
                    CONFIRMATION_EMAIL.format(**values),
                )
        finally:
            session.close()

    async def _send_status_update(
        self, order_id: str, restaurant_id: str, new_status: str
    ) -> None:
        session = self._session_factory()
        try:
            order = OrderRepository(session).get_for_restaurant(order_id, restaurant_id)
            if order is None:
                return
            customers = CustomerRepository(session)
            customer = self._existing_customer(customers, order)
            if customer is None:
                return

            message = status_message(order.id, new_status)
            settings = self.settings
            if settings.order_sms_enabled and customer.phone and customer.opt_in_sms:
                await self._deliver_sms(customers, customer, message)
            if settings.order_email_enabled and customer.email and customer.opt_in_email:
                subject = STATUS_SUBJECT.format(
                    status=new_status.capitalize(), order_id=order.short_id
                )
                await self._deliver_email(customers, customer, subject, message)
        finally:
            session.close()

    @staticmethod
    def _existing_customer(customers: CustomerRepository, order: Order) -> Customer | None:
        if order.customer_email:
            return customers.find(order.restaurant_id, email=order.customer_email)
        if order.customer_phone:
            return customers.find(order.restaurant_id, phone=order.customer_phone)
        return None

    async def _deliver_sms(
        self, customers: CustomerRepository, customer: Customer, body: str
    ) -> None:
        result = await self._sms_sender(customer.phone, body)
        customers.log_send(
            customer.id,
            channel="sms",
            recipient=customer.phone,
            message=body,
            status=SEND_STATUS_SENT if result.success else SEND_STATUS_FAILED,
            error_message=result.error,
        )

    async def _deliver_email(
        self, customers: CustomerRepository, customer: Customer, subject: str, text: str
    ) -> None:
        delivered = await to_thread.run_sync(
            self._email_sender, subject, text_to_html(text), customer.email
        )
        customers.log_send(
            customer.id,
            channel="email",
            recipient=customer.email,
            message=text,
            status=SEND_STATUS_SENT if delivered else SEND_STATUS_FAILED,
            error_message=None if delivered else "Email delivery failed",
        )


__all__ = [
    "OrderNotificationService",
    "format_total",
    "status_message",
]
