"""Route that lets producers outside this service publish domain events."""

import logging

from fastapi import APIRouter, Depends, status

from servio.application.events import EventBus
from servio.domain.entities import DomainEvent, EventActor, StaffUser
from servio.interfaces.api.dependencies import get_event_bus, require_event_publisher
from servio.interfaces.api.schemas import EventAccepted, EventPublish

router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=EventAccepted, status_code=status.HTTP_202_ACCEPTED)
async def publish_event(
    event_in: EventPublish,
    bus: EventBus = Depends(get_event_bus),
    current_user: StaffUser = Depends(require_event_publisher),
) -> EventAccepted:
    """Emit ``event_in`` for the caller's restaurant and wait for its handlers."""

    event = DomainEvent(
        restaurant_id=current_user.restaurant_id,
        type=event_in.type,
        payload=event_in.payload,
        actor=EventActor.user(current_user.id),
    )
    listeners = bus.listener_count(event_in.type)
    if not listeners:
        logger.info("No listeners registered for published event %s", event_in.type)
    await bus.emit(event_in.type, event)
    return EventAccepted(type=event_in.type, listeners=listeners)
