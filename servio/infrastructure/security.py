"""Helpers for issuing and validating staff access tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from servio.config import get_settings

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_staff_token(
    user_id: str,
    restaurant_id: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a token carrying the claims the API authenticates against."""

    return create_access_token(
        {"sub": user_id, "restaurant_id": restaurant_id, "role": role},
        expires_delta,
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "create_staff_token", "decode_access_token"]
