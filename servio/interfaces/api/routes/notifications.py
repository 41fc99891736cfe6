"""Endpoints and websocket handler for the staff notification inbox."""

from __future__ import annotations

from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from servio.application.use_cases.notifications import (
    DEFAULT_LIMIT,
    clear_all as clear_all_uc,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_read as mark_all_read_uc,
    mark_read as mark_read_uc,
)
from servio.domain.entities import Notification, StaffUser
from servio.infrastructure.notifications import (
    NotificationDispatcher,
    restaurant_room,
    user_room,
)
from servio.infrastructure.repositories import NotificationRepository
from servio.interfaces.api.dependencies import (
    get_current_user,
    get_db,
    get_dispatcher,
    resolve_current_user,
)
from servio.interfaces.api.schemas import (
    ClearedNotifications,
    NotificationList,
    NotificationRead,
    UnreadCount,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        restaurant_id=notification.restaurant_id,
        type=notification.type,
        severity=notification.severity,
        title=notification.title,
        message=notification.message,
        metadata=notification.metadata or {},
        created_at=notification.created_at,
        is_read=notification.is_read,
        read_at=notification.read_at,
    )


def _notification_to_payload(notification: Notification) -> dict[str, Any]:
    return _notification_to_schema(notification).model_dump(mode="json")


@router.get("/", response_model=NotificationList)
def list_notifications(
    limit: int = Query(DEFAULT_LIMIT),
    db: Session = Depends(get_db),
    current_user: StaffUser = Depends(get_current_user),
) -> NotificationList:
    """Return the newest notifications visible to the authenticated user."""

    page = list_notifications_uc(db, user=current_user, limit=limit)
    return NotificationList(
        notifications=[_notification_to_schema(n) for n in page.notifications],
        unread_count=page.unread_count,
    )


@router.post("/read-all", response_model=UnreadCount)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: StaffUser = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> UnreadCount:
    unread = mark_all_read_uc(db, user=current_user, dispatcher=dispatcher)
    return UnreadCount(unread_count=unread)


@router.post("/{notification_id}/read", response_model=UnreadCount)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: StaffUser = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> UnreadCount:
    unread = mark_read_uc(
        db, user=current_user, notification_id=notification_id, dispatcher=dispatcher
    )
    return UnreadCount(unread_count=unread)


@router.delete("/clear-all", response_model=ClearedNotifications)
def clear_notifications(
    db: Session = Depends(get_db),
    current_user: StaffUser = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ClearedNotifications:
    """Delete every notification the authenticated user can see."""

    deleted = clear_all_uc(db, user=current_user, dispatcher=dispatcher)
    return ClearedNotifications(deleted=deleted)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: StaffUser = Depends(get_current_user),
) -> Response:
    try:
        delete_notification_uc(db, user=current_user, notification_id=notification_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream new notifications for the user's restaurant and their own updates."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user = resolve_current_user(token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    session_factory = websocket.app.state.session_factory
    dispatcher: NotificationDispatcher = websocket.app.state.dispatcher
    manager = dispatcher.manager

    session = session_factory()
    try:
        pending = NotificationRepository(session).list_unread_for_user(user)
    finally:
        session.close()

    await manager.connect([restaurant_room(user.restaurant_id), user_room(user.id)], websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [_notification_to_payload(n) for n in pending]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = session_factory()
                    try:
                        repository = NotificationRepository(ack_session)
                        repository.mark_as_read([str(i) for i in ids], user=user)
                        unread = repository.count_unread(user)
                    finally:
                        ack_session.close()
                    await websocket.send_json(
                        {"type": "ack", "data": {"ids": ids, "unreadCount": unread}}
                    )
                continue
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception:
        manager.disconnect(websocket)
        raise
