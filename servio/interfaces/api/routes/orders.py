"""Routes for creating orders and moving them through their statuses."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from servio.application.events import EventBus
from servio.application.use_cases import (
    create_order as create_order_uc,
    update_order_status as update_order_status_uc,
)
from servio.domain.entities import Order, StaffUser
from servio.interfaces.api.dependencies import get_current_user, get_db, get_event_bus
from servio.interfaces.api.schemas import OrderCreate, OrderRead, OrderStatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


def _to_read_model(order: Order) -> OrderRead:
    return OrderRead.model_validate(order)


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_in: OrderCreate,
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    current_user: StaffUser = Depends(get_current_user),
) -> OrderRead:
    """Create an order for the user's restaurant and announce it."""

    try:
        order = await create_order_uc(
            db,
            bus,
            restaurant_id=current_user.restaurant_id,
            channel=order_in.channel,
            total_amount=order_in.total_amount,
            items=order_in.items,
            customer_name=order_in.customer_name,
            customer_phone=order_in.customer_phone,
            customer_email=order_in.customer_email,
            external_id=order_in.external_id,
            user=current_user,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(order)


@router.post("/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    current_user: StaffUser = Depends(get_current_user),
) -> OrderRead:
    try:
        order = await update_order_status_uc(
            db, bus, order_id=order_id, status=payload.status, user=current_user
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(order)
