"""Modelos de domínio para mensagens inbound (webhook `value.messages[]`).

Parsing tolerante: chaves desconhecidas são ignoradas e quase todos os
conteúdos são opcionais, pois a Meta adiciona campos sem aviso.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class _Inbound(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IncomingText(_Inbound):
    body: str


class IncomingMedia(_Inbound):
    """Mídia recebida (image, audio, document, video, sticker)."""

    id: str
    caption: str | None = None
    filename: str | None = None
    sha256: str | None = None
    mime_type: str | None = None


class IncomingLocation(_Inbound):
    latitude: float
    longitude: float
    name: str | None = None
    address: str | None = None


class IncomingButton(_Inbound):
    payload: str
    text: str


class IncomingReply(_Inbound):
    id: str
    title: str
    description: str | None = None


class IncomingInteractive(_Inbound):
    type: str
    button_reply: IncomingReply | None = None
    list_reply: IncomingReply | None = None


class IncomingContext(_Inbound):
    """Reply (from/id) ou encaminhamento (forwarded, sem id)."""

    from_: str | None = Field(default=None, alias="from")
    id: str | None = None
    forwarded: bool | None = None
    frequently_forwarded: bool | None = None


class IncomingWhatsAppMessage(_Inbound):
    """Mensagem recebida de um usuário."""

    message_id: str = Field(alias="id")
    from_: str = Field(alias="from")
    timestamp: str
    type: str

    text: IncomingText | None = None
    image: IncomingMedia | None = None
    audio: IncomingMedia | None = None
    document: IncomingMedia | None = None
    video: IncomingMedia | None = None
    sticker: IncomingMedia | None = None
    location: IncomingLocation | None = None
    button: IncomingButton | None = None
    interactive: IncomingInteractive | None = None
    context: IncomingContext | None = None

    @classmethod
    def from_webhook_value(cls, value: dict[str, Any]) -> list[IncomingWhatsAppMessage]:
        """Extrai as mensagens de um objeto `value` do webhook.

        Mensagens que falham na validação são logadas e descartadas; as
        demais seguem.
        """
        raw_messages = value.get("messages") or []
        if not isinstance(raw_messages, list):
            return []
        messages: list[IncomingWhatsAppMessage] = []
        for index, item in enumerate(raw_messages):
            if not isinstance(item, dict):
                continue
            try:
                messages.append(cls.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "incoming_message_invalid",
                    extra={
                        "index": index,
                        "message_type": item.get("type"),
                        "error_count": exc.error_count(),
                    },
                )
        return messages


__all__ = [
    "IncomingButton",
    "IncomingContext",
    "IncomingInteractive",
    "IncomingLocation",
    "IncomingMedia",
    "IncomingReply",
    "IncomingText",
    "IncomingWhatsAppMessage",
]
