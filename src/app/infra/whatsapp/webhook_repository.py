"""Repositório de webhook WhatsApp: verificação e dispatch de eventos.

O payload do webhook segue `object → entry[] → changes[] → value`.
Cada change com `field == "messages"` pode carregar `messages[]` e/ou
`statuses[]`; os handlers registrados para o evento correspondente recebem
o objeto `value` inteiro.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.webhook.verify import verify_webhook_challenge
from app.constants.whatsapp import WEBHOOK_OBJECT, WebhookEventType, WebhookField

if TYPE_CHECKING:
    from app.protocols.webhook_repository import WebhookEventHandler
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class WhatsAppWebhookRepository:
    """Verifica o handshake e distribui eventos para handlers registrados.

    Registro append-only: handlers nunca são removidos e vivem enquanto a
    instância existir (singleton via bootstrap).
    """

    def __init__(self, settings: WhatsAppSettings) -> None:
        self._settings = settings
        self._event_handlers: dict[WebhookEventType, list[WebhookEventHandler]] = {}

    def verify_webhook(
        self,
        mode: str | None,
        token: str | None,
        challenge: str | None,
    ) -> str | None:
        """Retorna o challenge se mode/token conferem; None caso contrário."""
        result = verify_webhook_challenge(
            hub_mode=mode,
            hub_verify_token=token,
            hub_challenge=challenge,
            expected_token=self._settings.webhook_verification_token,
        )
        if result is None:
            logger.warning("webhook_verification_failed", extra={"hub_mode": mode})
        else:
            logger.info("webhook_verified", extra={"hub_mode": mode})
        return result

    def register_event_handler(
        self,
        event_type: WebhookEventType | str,
        handler: WebhookEventHandler,
    ) -> None:
        """Registra handler assíncrono para um tipo de evento.

        Raises:
            ValueError: Se o tipo de evento não for suportado.
        """
        key = WebhookEventType(event_type)
        self._event_handlers.setdefault(key, []).append(handler)
        logger.debug(
            "webhook_handler_registered",
            extra={"event_type": key.value, "handler_count": len(self._event_handlers[key])},
        )

    def handlers_for(self, event_type: WebhookEventType | str) -> list[WebhookEventHandler]:
        """Cópia da lista de handlers registrados para o evento."""
        return list(self._event_handlers.get(WebhookEventType(event_type), []))

    async def process_webhook_payload(self, payload: dict[str, Any]) -> bool:
        """Processa payload do webhook.

        Returns:
            True se o payload foi aceito e todos os handlers concluíram;
            False se `object` não for de WhatsApp ou se algum handler falhar.
            Nunca lança.
        """
        webhook_object = payload.get("object") if isinstance(payload, dict) else None
        if webhook_object != WEBHOOK_OBJECT:
            logger.warning(
                "webhook_payload_rejected",
                extra={"reason": "invalid_object", "object": str(webhook_object)},
            )
            return False

        try:
            for entry in _as_dict_list(payload.get("entry")):
                for change in _as_dict_list(entry.get("changes")):
                    await self._process_change(change)
        except Exception:
            logger.exception("webhook_processing_failed")
            return False

        return True

    async def _process_change(self, change: dict[str, Any]) -> None:
        field = change.get("field")
        value = change.get("value")
        if not isinstance(value, dict):
            value = {}

        if field == WebhookField.MESSAGES:
            if _as_dict_list(value.get("messages")):
                await self._dispatch(WebhookEventType.MESSAGE, value)
            if _as_dict_list(value.get("statuses")):
                await self._dispatch(WebhookEventType.STATUS, value)
        elif field == WebhookField.MESSAGE_TEMPLATE_STATUS_UPDATE:
            await self._dispatch(WebhookEventType.MESSAGE_TEMPLATE_STATUS_UPDATE, value)

    async def _dispatch(self, event_type: WebhookEventType, value: dict[str, Any]) -> None:
        # Handlers rodam concorrentemente; a primeira exceção propaga.
        handlers = self._event_handlers.get(event_type, [])
        if not handlers:
            return
        logger.info(
            "webhook_event_dispatched",
            extra={"event_type": event_type.value, "handler_count": len(handlers)},
        )
        await asyncio.gather(*(handler(value) for handler in handlers))


def _as_dict_list(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]
