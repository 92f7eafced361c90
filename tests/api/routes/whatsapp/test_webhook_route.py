"""Testes para endpoints da rota de webhook WhatsApp."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from starlette.requests import Request

from api.connectors.whatsapp.signature import SignatureResult
from api.connectors.whatsapp.webhook.receive import InvalidJsonError, InvalidSignatureError
from api.routes.whatsapp import webhook
from app.infra.whatsapp.webhook_repository import WhatsAppWebhookRepository
from tests.fakes.fake_whatsapp import make_settings


def _build_request(
    *,
    method: str,
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/",
        "raw_path": b"/",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


class _FakeWebhookRepository:
    def __init__(self, processed: bool = True) -> None:
        self.processed = processed
        self.payloads: list[dict[str, Any]] = []

    async def process_webhook_payload(self, payload: dict[str, Any]) -> bool:
        self.payloads.append(payload)
        return self.processed


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        webhook, "get_whatsapp_settings", lambda: SimpleNamespace(webhook_secret="secret")
    )


@pytest.mark.asyncio
async def test_verify_webhook_success(monkeypatch: pytest.MonkeyPatch) -> None:
    repository = WhatsAppWebhookRepository(make_settings(webhook_verification_token="token"))
    monkeypatch.setattr(webhook, "get_webhook_repository", lambda: repository)

    request = _build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=token&hub.challenge=abc",
    )
    response = await webhook.verify_webhook(request)

    assert response.status_code == 200
    assert response.body == b"abc"


@pytest.mark.asyncio
async def test_verify_webhook_invalid_token(monkeypatch: pytest.MonkeyPatch) -> None:
    repository = WhatsAppWebhookRepository(make_settings(webhook_verification_token="token"))
    monkeypatch.setattr(webhook, "get_webhook_repository", lambda: repository)

    request = _build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=wrong&hub.challenge=abc",
    )
    response = await webhook.verify_webhook(request)

    assert response.status_code == 403
    assert response.body == b"Forbidden"


@pytest.mark.asyncio
async def test_receive_webhook_success(monkeypatch: pytest.MonkeyPatch, settings: None) -> None:
    repository = _FakeWebhookRepository(processed=True)
    monkeypatch.setattr(webhook, "get_webhook_repository", lambda: repository)
    monkeypatch.setattr(
        webhook,
        "parse_webhook_request",
        lambda raw_body, headers, secret: (
            {"object": "whatsapp_business_account", "entry": []},
            SignatureResult(valid=True, skipped=False),
        ),
    )

    request = _build_request(
        method="POST",
        body=b'{"object": "whatsapp_business_account", "entry": []}',
        headers={"x-correlation-id": "cid-123"},
    )

    response = await webhook.receive_webhook(request)

    assert response == {"status": "received", "correlation_id": "cid-123"}
    assert repository.payloads == [{"object": "whatsapp_business_account", "entry": []}]


@pytest.mark.asyncio
async def test_receive_webhook_generates_correlation_id(
    monkeypatch: pytest.MonkeyPatch, settings: None
) -> None:
    monkeypatch.setattr(webhook, "get_webhook_repository", lambda: _FakeWebhookRepository())
    monkeypatch.setattr(
        webhook,
        "parse_webhook_request",
        lambda raw_body, headers, secret: ({}, SignatureResult(valid=True, skipped=True)),
    )

    response = await webhook.receive_webhook(_build_request(method="POST", body=b"{}"))

    assert response["status"] == "received"
    assert response["correlation_id"]


@pytest.mark.asyncio
async def test_receive_webhook_dispatch_failure_returns_500(
    monkeypatch: pytest.MonkeyPatch, settings: None
) -> None:
    monkeypatch.setattr(
        webhook, "get_webhook_repository", lambda: _FakeWebhookRepository(processed=False)
    )
    monkeypatch.setattr(
        webhook,
        "parse_webhook_request",
        lambda raw_body, headers, secret: ({"entry": []}, SignatureResult(valid=True)),
    )

    request = _build_request(
        method="POST",
        body=b'{"entry": []}',
        headers={"x-correlation-id": "cid-500"},
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 500
    assert b"internal_error" in response.body
    assert b"cid-500" in response.body


@pytest.mark.asyncio
async def test_receive_webhook_invalid_signature(
    monkeypatch: pytest.MonkeyPatch, settings: None
) -> None:
    def _raise_invalid_signature(
        *, raw_body: bytes, headers: dict[str, str], secret: str | None
    ) -> tuple[dict[str, object], SignatureResult]:
        raise InvalidSignatureError("signature_mismatch")

    monkeypatch.setattr(webhook, "parse_webhook_request", _raise_invalid_signature)

    request = _build_request(method="POST", body=b"{}")
    response = await webhook.receive_webhook(request)

    assert response.status_code == 401
    assert response.body == b"Unauthorized"


@pytest.mark.asyncio
async def test_receive_webhook_invalid_json(
    monkeypatch: pytest.MonkeyPatch, settings: None
) -> None:
    def _raise_invalid_json(
        *, raw_body: bytes, headers: dict[str, str], secret: str | None
    ) -> tuple[dict[str, object], SignatureResult]:
        raise InvalidJsonError("invalid_json")

    monkeypatch.setattr(webhook, "parse_webhook_request", _raise_invalid_json)

    request = _build_request(method="POST", body=b"{invalid}")
    response = await webhook.receive_webhook(request)

    assert response.status_code == 400
    assert response.body == b"Bad Request"
