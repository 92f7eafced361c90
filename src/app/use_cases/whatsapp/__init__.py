"""Use cases específicos de WhatsApp."""

from .handle_incoming_message import (
    HandleIncomingMessageUseCase,
    IncomingMessageHandlerResult,
)
from .send_message import (
    SendInteractiveMessageParams,
    SendMediaMessageParams,
    SendMessageUseCase,
    SendTemplateMessageParams,
    SendTextMessageParams,
)

__all__ = [
    # Inbound
    "HandleIncomingMessageUseCase",
    "IncomingMessageHandlerResult",
    # Outbound
    "SendInteractiveMessageParams",
    "SendMediaMessageParams",
    "SendMessageUseCase",
    "SendTemplateMessageParams",
    "SendTextMessageParams",
]
