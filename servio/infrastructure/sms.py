"""Send SMS messages through the Twilio REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from servio.config import get_settings

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"


@dataclass(frozen=True)
class SmsResult:
    success: bool
    sid: str | None = None
    error: str | None = None


def _error_from_response(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text[:200]}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {response.status_code}"


async def send_sms(
    to_phone: str,
    body: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SmsResult:
    """Send ``body`` to ``to_phone`` and report the outcome.

    Missing credentials and transport errors are reported as a failed
    result rather than raised.
    """

    settings = get_settings()
    if not settings.sms_configured:
        logger.info("Twilio configuration incomplete; skipping SMS delivery")
        return SmsResult(success=False, error="SMS provider not configured")

    url = TWILIO_MESSAGES_URL.format(account_sid=settings.twilio_account_sid)
    form_data = {"From": settings.twilio_from_number, "To": to_phone, "Body": body}

    try:
        async with httpx.AsyncClient(
            timeout=settings.sms_timeout_seconds,
            auth=(settings.twilio_account_sid, settings.twilio_auth_token),
            transport=transport,
        ) as client:
            response = await client.post(url, data=form_data)
    except httpx.HTTPError as exc:
        logger.error("Twilio request to %s failed: %s", to_phone, exc)
        return SmsResult(success=False, error=str(exc) or exc.__class__.__name__)

    if response.status_code != 201:
        error = _error_from_response(response)
        logger.error("Twilio API responded with status %s: %s", response.status_code, error)
        return SmsResult(success=False, error=error)

    sid = response.json().get("sid")
    logger.info("SMS %s sent to %s", sid, to_phone)
    return SmsResult(success=True, sid=sid)


__all__ = ["SmsResult", "send_sms"]
