"""Shared fixtures for the notification pipeline tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
for _name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM_NUMBER",
):
    os.environ.pop(_name, None)

from servio.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from servio.infrastructure.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    initialize_database,
)
from servio.infrastructure.security import create_staff_token  # noqa: E402
from servio.infrastructure.sms import SmsResult  # noqa: E402


class RecordingDispatcher:
    """Collect realtime messages instead of pushing them to sockets."""

    def __init__(self) -> None:
        self.restaurant_messages: list[tuple[str, dict[str, Any]]] = []
        self.user_messages: list[tuple[str, str, dict[str, Any]]] = []

    def emit_to_restaurant(self, restaurant_id: str, message: dict[str, Any]) -> None:
        self.restaurant_messages.append((restaurant_id, message))

    def emit_to_user(self, user_id: str, event_type: str, payload: dict[str, Any]) -> None:
        self.user_messages.append((user_id, event_type, payload))


class RecordingSms:
    def __init__(self, result: SmsResult | None = None) -> None:
        self.result = result or SmsResult(success=True, sid="SM123")
        self.sent: list[tuple[str, str]] = []

    async def __call__(self, to_phone: str, body: str) -> SmsResult:
        self.sent.append((to_phone, body))
        return self.result


class RecordingEmail:
    def __init__(self, delivered: bool = True) -> None:
        self.delivered = delivered
        self.sent: list[tuple[str, str, str]] = []

    def __call__(self, subject: str, html_content: str, recipient: str) -> bool:
        self.sent.append((subject, html_content, recipient))
        return self.delivered


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def sms_sender() -> RecordingSms:
    return RecordingSms()


@pytest.fixture
def email_sender() -> RecordingEmail:
    return RecordingEmail()


def auth_headers(user_id: str, restaurant_id: str, role: str) -> dict[str, str]:
    token = create_staff_token(user_id, restaurant_id, role)
    return {"Authorization": f"Bearer {token}"}
