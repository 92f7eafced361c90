"""Use case para mensagens recebidas via webhook.

Roteia cada mensagem inbound para o handler registrado para o seu `type`
(text, image, interactive, ...). O handler pode devolver uma resposta
(`WhatsAppMessage`) que é enviada pelo repositório de mensagens.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.whatsapp_inbound import IncomingWhatsAppMessage

if TYPE_CHECKING:
    from app.domain.whatsapp_message import WhatsAppMessage
    from app.protocols.message_repository import WhatsAppMessageRepositoryProtocol

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE_TYPE = "unsupported_message_type"


@dataclass(frozen=True)
class IncomingMessageHandlerResult:
    """Resultado do tratamento de uma mensagem recebida.

    Attributes:
        success: True se o handler concluiu sem erro
        response: Mensagem a enviar de volta (opcional)
        error: Descrição do erro quando success=False
    """

    success: bool
    response: WhatsAppMessage | None = None
    error: str | None = None


IncomingMessageHandler = Callable[
    [IncomingWhatsAppMessage], Awaitable[IncomingMessageHandlerResult]
]


class HandleIncomingMessageUseCase:
    """Roteia mensagens recebidas por tipo (um handler por tipo)."""

    def __init__(
        self,
        message_repository: WhatsAppMessageRepositoryProtocol | None = None,
    ) -> None:
        self._message_repository = message_repository
        self._type_handlers: dict[str, IncomingMessageHandler] = {}

    def register_type_handler(self, message_type: str, handler: IncomingMessageHandler) -> None:
        """Registra handler para um tipo de mensagem (o último registro vale)."""
        if message_type in self._type_handlers:
            logger.info("incoming_handler_replaced", extra={"message_type": message_type})
        self._type_handlers[message_type] = handler

    async def handle(self, message: IncomingWhatsAppMessage) -> IncomingMessageHandlerResult:
        """Processa uma mensagem recebida.

        Nunca lança: erros do handler viram `success=False`.
        """
        handler = self._type_handlers.get(message.type)
        if handler is None:
            logger.info("incoming_message_unsupported", extra={"message_type": message.type})
            return IncomingMessageHandlerResult(success=False, error=UNSUPPORTED_MESSAGE_TYPE)

        try:
            return await handler(message)
        except Exception as exc:
            logger.exception(
                "incoming_message_handler_failed",
                extra={"message_type": message.type, "message_id": message.message_id},
            )
            return IncomingMessageHandlerResult(success=False, error=str(exc))

    async def handle_webhook_value(self, value: dict[str, Any]) -> None:
        """Handler do evento `message` do webhook.

        Trata as mensagens em ordem e envia as respostas produzidas.
        Falhas de envio propagam para o dispatcher.
        """
        messages = IncomingWhatsAppMessage.from_webhook_value(value)
        for message in messages:
            result = await self.handle(message)
            if result.response is None:
                continue
            if self._message_repository is None:
                logger.warning(
                    "incoming_response_dropped",
                    extra={"reason": "no_message_repository", "message_type": message.type},
                )
                continue
            await self._message_repository.send_message(result.response)


__all__ = [
    "UNSUPPORTED_MESSAGE_TYPE",
    "HandleIncomingMessageUseCase",
    "IncomingMessageHandler",
    "IncomingMessageHandlerResult",
]
