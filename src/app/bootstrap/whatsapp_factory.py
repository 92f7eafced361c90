"""Factory de wiring para WhatsApp (bootstrap).

As funções `create_*` montam instâncias novas com dependências explícitas;
as funções `get_*` devolvem singletons cacheados para o runtime HTTP.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_client import create_whatsapp_http_client
from app.constants.whatsapp import WebhookEventType
from app.infra.whatsapp.message_repository import WhatsAppMessageRepository
from app.infra.whatsapp.webhook_repository import WhatsAppWebhookRepository
from app.use_cases.whatsapp.handle_incoming_message import HandleIncomingMessageUseCase
from app.use_cases.whatsapp.send_message import SendMessageUseCase
from config.settings import get_whatsapp_settings

if TYPE_CHECKING:
    from app.protocols.http_client import WhatsAppHttpClientProtocol
    from app.protocols.message_repository import WhatsAppMessageRepositoryProtocol
    from app.protocols.webhook_repository import WhatsAppWebhookRepositoryProtocol
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


def create_message_repository(
    settings: WhatsAppSettings,
    http_client: WhatsAppHttpClientProtocol | None = None,
) -> WhatsAppMessageRepository:
    """Cria repositório de mensagens (HTTP client real se não informado)."""
    return WhatsAppMessageRepository(
        settings,
        http_client or create_whatsapp_http_client(settings),
    )


def create_send_message_use_case(
    settings: WhatsAppSettings,
    message_repository: WhatsAppMessageRepositoryProtocol,
) -> SendMessageUseCase:
    return SendMessageUseCase(
        message_repository,
        default_language_code=settings.default_language_code,
    )


def create_webhook_repository(
    settings: WhatsAppSettings,
    incoming_use_case: HandleIncomingMessageUseCase | None = None,
) -> WhatsAppWebhookRepository:
    """Cria repositório de webhook com os handlers padrão registrados.

    - message: HandleIncomingMessageUseCase.handle_webhook_value
    - status: log de statuses de entrega (sem persistência)
    """
    repository = WhatsAppWebhookRepository(settings)
    if incoming_use_case is not None:
        repository.register_event_handler(
            WebhookEventType.MESSAGE, incoming_use_case.handle_webhook_value
        )
    repository.register_event_handler(WebhookEventType.STATUS, log_status_updates)
    return repository


async def log_status_updates(value: dict[str, Any]) -> None:
    """Loga statuses de entrega recebidos (sem número do destinatário)."""
    for status in value.get("statuses") or []:
        if not isinstance(status, dict):
            continue
        logger.info(
            "whatsapp_status_received",
            extra={"message_id": status.get("id"), "status": status.get("status")},
        )


# ──────────────────────────────────────────────────────────────────────────────
# Singletons (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_message_repository() -> WhatsAppMessageRepository:
    return create_message_repository(get_whatsapp_settings())


@lru_cache(maxsize=1)
def get_send_message_use_case() -> SendMessageUseCase:
    return create_send_message_use_case(get_whatsapp_settings(), get_message_repository())


@lru_cache(maxsize=1)
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    """Use case de inbound (singleton); registre handlers por tipo nele."""
    return HandleIncomingMessageUseCase(get_message_repository())


@lru_cache(maxsize=1)
def get_webhook_repository() -> WhatsAppWebhookRepositoryProtocol:
    """Repositório de webhook (singleton) usado pelas rotas."""
    return create_webhook_repository(
        get_whatsapp_settings(),
        incoming_use_case=get_handle_incoming_message_use_case(),
    )
