"""Protocolo do repositório de webhook (verificação + dispatch)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# Handler de evento: recebe o objeto `value` da change
WebhookEventHandler = Callable[[dict[str, Any]], Awaitable[None]]


class WhatsAppWebhookRepositoryProtocol(Protocol):
    """Contrato para verificação e processamento de webhooks."""

    def verify_webhook(self, mode: str | None, token: str | None, challenge: str | None) -> str | None: ...

    async def process_webhook_payload(self, payload: dict[str, Any]) -> bool: ...

    def register_event_handler(self, event_type: str, handler: WebhookEventHandler) -> None: ...
