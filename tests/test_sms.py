"""Tests for the Twilio SMS sender."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from servio.config import Settings
from servio.infrastructure import sms as sms_module

pytestmark = pytest.mark.anyio


@pytest.fixture
def twilio_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(
        secret_key="test",
        twilio_account_sid="AC123",
        twilio_auth_token="token",
        twilio_from_number="+15550009999",
    )
    monkeypatch.setattr(sms_module, "get_settings", lambda: settings)
    return settings


async def test_missing_credentials_report_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sms_module, "get_settings", lambda: Settings(secret_key="test"))

    result = await sms_module.send_sms("+15550001111", "Hello")

    assert result.success is False
    assert result.error == "SMS provider not configured"


async def test_successful_send(twilio_settings: Settings) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, json={"sid": "SM42", "status": "queued"})

    result = await sms_module.send_sms(
        "+15550001111", "Your order is ready", transport=httpx.MockTransport(handler)
    )

    assert result.success is True
    assert result.sid == "SM42"
    (request,) = captured
    assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
    assert request.headers["Authorization"].startswith("Basic ")
    form = parse_qs(request.content.decode())
    assert form == {
        "From": ["+15550009999"],
        "To": ["+15550001111"],
        "Body": ["Your order is ready"],
    }


async def test_api_error_message_is_reported(twilio_settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})

    result = await sms_module.send_sms(
        "+1555", "Hello", transport=httpx.MockTransport(handler)
    )

    assert result.success is False
    assert result.error == "Invalid 'To' Phone Number"


async def test_transport_errors_are_reported(twilio_settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await sms_module.send_sms(
        "+15550001111", "Hello", transport=httpx.MockTransport(handler)
    )

    assert result.success is False
    assert "connection refused" in result.error
