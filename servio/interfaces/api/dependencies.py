"""FastAPI dependency utilities."""

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from servio.application.events import EventBus
from servio.domain.entities import StaffUser
from servio.infrastructure.notifications import NotificationDispatcher
from servio.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str) -> StaffUser:
    """Build the staff identity carried by ``token``."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    user_id = payload.get("sub")
    restaurant_id = payload.get("restaurant_id")
    role = payload.get("role")
    if not (user_id and restaurant_id and role):
        raise _credentials_error()

    return StaffUser(id=str(user_id), restaurant_id=str(restaurant_id), role=str(role))


def get_db(request: Request) -> Iterator[Session]:
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_current_user(token: str = Depends(oauth2_scheme)) -> StaffUser:
    """Return the authenticated staff member from the bearer token."""

    return resolve_current_user(token)


def require_event_publisher(current_user: StaffUser = Depends(get_current_user)) -> StaffUser:
    """Ensure the authenticated user may publish events for their restaurant."""

    if not current_user.can_publish_events():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def get_event_bus(request: Request) -> EventBus:
    return request.app.state.event_bus


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher
