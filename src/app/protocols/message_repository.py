"""Protocolo do repositório de mensagens outbound."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.whatsapp_message import (
        MediaInfo,
        WhatsAppMessage,
        WhatsAppMessageResponse,
    )


class WhatsAppMessageRepositoryProtocol(Protocol):
    """Contrato para envio de mensagens via WhatsApp Cloud API."""

    async def send_message(
        self,
        message: WhatsAppMessage | Mapping[str, Any],
    ) -> WhatsAppMessageResponse: ...

    async def mark_message_as_read(self, message_id: str) -> bool: ...

    async def retrieve_media(self, media_id: str) -> MediaInfo: ...
