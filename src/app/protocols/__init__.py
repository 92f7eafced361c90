"""Protocolos e contratos do core da aplicação."""

from .http_client import WhatsAppHttpClientProtocol
from .message_repository import WhatsAppMessageRepositoryProtocol
from .webhook_repository import WebhookEventHandler, WhatsAppWebhookRepositoryProtocol

__all__ = [
    "WebhookEventHandler",
    "WhatsAppHttpClientProtocol",
    "WhatsAppMessageRepositoryProtocol",
    "WhatsAppWebhookRepositoryProtocol",
]
