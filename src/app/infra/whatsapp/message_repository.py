"""Repositório de mensagens outbound via WhatsApp Cloud API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpError
from app.constants.whatsapp import MESSAGING_PRODUCT
from app.domain.whatsapp_message import (
    MediaInfo,
    WhatsAppMessage,
    WhatsAppMessageResponse,
)

if TYPE_CHECKING:
    from app.protocols.http_client import WhatsAppHttpClientProtocol
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class WhatsAppMessageRepository:
    """Envia mensagens e operações relacionadas ao número configurado."""

    def __init__(
        self,
        settings: WhatsAppSettings,
        http_client: WhatsAppHttpClientProtocol,
    ) -> None:
        self._settings = settings
        self._http_client = http_client

    @property
    def _messages_endpoint(self) -> str:
        return f"{self._settings.phone_number_id}/messages"

    async def send_message(
        self,
        message: WhatsAppMessage | Mapping[str, Any],
    ) -> WhatsAppMessageResponse:
        """Envia mensagem (um único POST, sem retry).

        `messaging_product` é sempre forçado para "whatsapp".

        Raises:
            WhatsAppApiRequestError: Resposta não-2xx (status no texto do erro)
            HttpError: Falha de transporte
        """
        if isinstance(message, WhatsAppMessage):
            body = message.to_payload()
        else:
            body = dict(message)
        body["messaging_product"] = MESSAGING_PRODUCT

        response = await self._http_client.post(self._messages_endpoint, body)
        result = WhatsAppMessageResponse.model_validate(response)

        logger.info(
            "whatsapp_message_sent",
            extra={"message_type": body.get("type"), "message_id": result.message_id},
        )
        return result

    async def mark_message_as_read(self, message_id: str) -> bool:
        """Marca mensagem recebida como lida.

        Returns:
            True em sucesso; False se a API ou o transporte falharem.
        """
        try:
            await self._http_client.post(
                self._messages_endpoint,
                {
                    "messaging_product": MESSAGING_PRODUCT,
                    "status": "read",
                    "message_id": message_id,
                },
            )
        except HttpError as exc:
            logger.warning(
                "whatsapp_mark_read_failed",
                extra={"status_code": exc.status_code, "error": str(exc)},
            )
            return False
        return True

    async def retrieve_media(self, media_id: str) -> MediaInfo:
        """Obtém URL temporária e metadados de uma mídia (GET /{media_id})."""
        if not media_id:
            raise ValueError("media_id é obrigatório")
        data = await self._http_client.get(media_id)
        return MediaInfo.model_validate(data)
