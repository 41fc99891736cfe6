"""Turn domain events into user-facing notification drafts.

``build_notification_drafts`` is a pure function of the event: the same
event always yields the same drafts and nothing outside the event is read.
Event types without a builder yield no drafts.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from servio.domain.entities import (
    DomainEvent,
    NotificationDraft,
    NotificationEventType,
    NotificationSeverity,
    Recipient,
    RestaurantRecipient,
    RoleRecipient,
    UserRecipient,
)
from servio.domain.entities.user import ROLE_MANAGER, ROLE_OWNER

Payload = Mapping[str, Any]
DraftBuilder = Callable[[Payload], list[NotificationDraft]]

_DEFAULT_STAFF_NAME = "Staff member"


def _restaurant_wide() -> list[Recipient]:
    return [RestaurantRecipient()]


def _owners_and_managers() -> list[Recipient]:
    return [RoleRecipient(ROLE_OWNER), RoleRecipient(ROLE_MANAGER)]


def _coalesce(payload: Payload, key: str, default: Any) -> Any:
    """Return ``payload[key]`` unless it is missing or ``None``."""

    value = payload.get(key)
    return default if value is None else value


def _staff_draft(title: str, action: str, payload: Payload, *extra: str) -> list[NotificationDraft]:
    staff_name = _coalesce(payload, "staffName", _DEFAULT_STAFF_NAME)
    metadata = {"staffId": payload.get("staffId"), "timeEntryId": payload.get("timeEntryId")}
    for key in extra:
        metadata[key] = payload.get(key)
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title=title,
            message=f"{staff_name} {action}.",
            metadata=metadata,
            recipients=_owners_and_managers(),
        )
    ]


def _clock_in(payload: Payload) -> list[NotificationDraft]:
    return _staff_draft("Staff Clock In", "clocked in", payload, "position")


def _clock_out(payload: Payload) -> list[NotificationDraft]:
    return _staff_draft("Staff Clock Out", "clocked out", payload, "totalHours")


def _break_start(payload: Payload) -> list[NotificationDraft]:
    return _staff_draft("Break Started", "started a break", payload)


def _break_end(payload: Payload) -> list[NotificationDraft]:
    return _staff_draft("Break Ended", "ended a break", payload, "durationMinutes")


def _open_shift(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.WARNING,
            title="Open Shift Detected",
            message=payload.get("message") or "An open shift needs coverage.",
            metadata=dict(payload),
            recipients=_owners_and_managers(),
        )
    ]


def _placed_by(payload: Payload) -> str:
    customer_name = payload.get("customerName")
    return f" by {customer_name}" if customer_name else ""


def _order_created_web(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="New Web Order",
            message=f"New order placed{_placed_by(payload)}.",
            metadata={"orderId": payload.get("orderId"), "source": payload.get("channel") or "web"},
            recipients=_restaurant_wide(),
        )
    ]


def _order_created_vapi(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="New Phone Order",
            message=f"New phone order placed{_placed_by(payload)}.",
            metadata={"orderId": payload.get("orderId"), "source": "vapi"},
            recipients=_restaurant_wide(),
        )
    ]


def _order_status_changed(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="Order Status Updated",
            message=f"Order {payload.get('orderId')} updated to {payload.get('newStatus')}.",
            metadata={
                "orderId": payload.get("orderId"),
                "previousStatus": payload.get("previousStatus"),
                "newStatus": payload.get("newStatus"),
            },
            recipients=_restaurant_wide(),
        )
    ]


def _receipt_uploaded(payload: Payload) -> list[NotificationDraft]:
    supplier_name = payload.get("supplierName")
    message = f"Receipt uploaded for {supplier_name}." if supplier_name else "Receipt uploaded."
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="Receipt Uploaded",
            message=message,
            metadata={
                "receiptId": payload.get("receiptId"),
                "supplierName": supplier_name,
                "totalAmount": payload.get("totalAmount"),
            },
            recipients=_owners_and_managers(),
        )
    ]


def _receipt_applied(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="Receipt Applied",
            message=f"Receipt {payload.get('receiptId')} applied to inventory.",
            metadata={
                "receiptId": payload.get("receiptId"),
                "appliedItemsCount": payload.get("appliedItemsCount"),
            },
            recipients=_owners_and_managers(),
        )
    ]


def _low_stock(payload: Payload) -> list[NotificationDraft]:
    item_name = _coalesce(payload, "itemName", "Inventory item")
    return [
        NotificationDraft(
            severity=NotificationSeverity.WARNING,
            title="Low Stock",
            message=f"{item_name} is low on stock.",
            metadata=dict(payload),
            recipients=_owners_and_managers(),
        )
    ]


def _task_created(payload: Payload) -> list[NotificationDraft]:
    assigned_to = payload.get("assignedTo")
    recipients: list[Recipient] = (
        [UserRecipient(str(assigned_to))] if assigned_to else [RoleRecipient(ROLE_MANAGER)]
    )
    title = payload.get("title")
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="Task Created",
            message=f"Task created: {title}." if title else "New task created.",
            metadata={"taskId": payload.get("taskId"), "title": title, "assignedTo": assigned_to},
            recipients=recipients,
        )
    ]


def _task_completed(payload: Payload) -> list[NotificationDraft]:
    title = payload.get("title")
    return [
        NotificationDraft(
            severity=NotificationSeverity.INFO,
            title="Task Completed",
            message=f"Task completed: {title}." if title else "Task completed.",
            metadata={"taskId": payload.get("taskId"), "title": title},
            recipients=[RoleRecipient(ROLE_MANAGER), RoleRecipient(ROLE_OWNER)],
        )
    ]


def _system_error(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.CRITICAL,
            title="System Error",
            message=payload.get("message") or "An error occurred.",
            metadata=dict(payload),
            recipients=[RoleRecipient(ROLE_OWNER)],
        )
    ]


def _system_warning(payload: Payload) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            severity=NotificationSeverity.WARNING,
            title="System Warning",
            message=payload.get("message") or "A warning was reported.",
            metadata=dict(payload),
            recipients=[RoleRecipient(ROLE_OWNER)],
        )
    ]


_BUILDERS: dict[str, DraftBuilder] = {
    NotificationEventType.STAFF_CLOCK_IN.value: _clock_in,
    NotificationEventType.STAFF_CLOCK_OUT.value: _clock_out,
    NotificationEventType.STAFF_BREAK_START.value: _break_start,
    NotificationEventType.STAFF_BREAK_END.value: _break_end,
    NotificationEventType.STAFF_OPEN_SHIFT_DETECTED.value: _open_shift,
    NotificationEventType.ORDER_CREATED_WEB.value: _order_created_web,
    NotificationEventType.ORDER_CREATED_VAPI.value: _order_created_vapi,
    NotificationEventType.ORDER_STATUS_CHANGED.value: _order_status_changed,
    NotificationEventType.RECEIPT_UPLOADED.value: _receipt_uploaded,
    NotificationEventType.RECEIPT_APPLIED.value: _receipt_applied,
    NotificationEventType.INVENTORY_LOW_STOCK.value: _low_stock,
    NotificationEventType.TASK_CREATED.value: _task_created,
    NotificationEventType.TASK_COMPLETED.value: _task_completed,
    NotificationEventType.SYSTEM_ERROR.value: _system_error,
    NotificationEventType.SYSTEM_WARNING.value: _system_warning,
}


def build_notification_drafts(event: DomainEvent) -> list[NotificationDraft]:
    """Return the drafts ``event`` should produce; ``[]`` for unknown types."""

    builder = _BUILDERS.get(event.type)
    if builder is None:
        return []
    return builder(event.payload or {})


__all__ = ["build_notification_drafts"]
