"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from servio.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "orders@example.com"


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class MissingSettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: MissingSettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "sam@example.com") is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    sent = []

    class SuccessfulClient:
        def __init__(self, api_key: str) -> None:
            self.api_key = api_key

        def send(self, message):
            sent.append(message)
            return types.SimpleNamespace(status_code=202, body=None)

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", SuccessfulClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "sam@example.com") is True
    assert len(sent) == 1


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient:
        def __init__(self, api_key: str) -> None:
            pass

        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "sam@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_unsuccessful_response_is_a_failure(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient:
        def __init__(self, api_key: str) -> None:
            pass

        def send(self, message):
            return types.SimpleNamespace(status_code=500, body=b"upstream error")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "sam@example.com") is False

    assert "upstream error" in caplog.text


def test_text_to_html_escapes_and_splits_lines() -> None:
    assert email_module.text_to_html("Order #1\n\nTotal: <$5>") == (
        "<p>Order #1</p><p>Total: &lt;$5&gt;</p>"
    )
