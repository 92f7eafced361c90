"""Constantes e enums da WhatsApp Cloud API."""

from __future__ import annotations

from enum import StrEnum

# Valor fixo de `messaging_product` em todo envio
MESSAGING_PRODUCT = "whatsapp"

# Valor de `object` em payloads de webhook legítimos
WEBHOOK_OBJECT = "whatsapp_business_account"

# Modo exigido no handshake de verificação do webhook
SUBSCRIBE_MODE = "subscribe"


class MessageType(StrEnum):
    """Tipos de conteúdo de mensagens outbound."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    VIDEO = "video"
    LOCATION = "location"
    CONTACTS = "contacts"
    INTERACTIVE = "interactive"
    TEMPLATE = "template"
    REACTION = "reaction"


MEDIA_MESSAGE_TYPES: frozenset[MessageType] = frozenset(
    {
        MessageType.IMAGE,
        MessageType.AUDIO,
        MessageType.DOCUMENT,
        MessageType.STICKER,
        MessageType.VIDEO,
    }
)


class InteractiveType(StrEnum):
    """Tipos de mensagens interativas."""

    BUTTON = "button"
    LIST = "list"
    PRODUCT = "product"
    PRODUCT_LIST = "product_list"
    FLOW = "flow"
    CATALOG_MESSAGE = "catalog_message"


class WebhookEventType(StrEnum):
    """Eventos de webhook que aceitam handlers registrados."""

    MESSAGE = "message"
    STATUS = "status"
    MESSAGE_TEMPLATE_STATUS_UPDATE = "message_template_status_update"


class WebhookField(StrEnum):
    """Valores de `changes[].field` tratados pelo dispatcher."""

    MESSAGES = "messages"
    MESSAGE_TEMPLATE_STATUS_UPDATE = "message_template_status_update"


# Rótulo padrão do botão que abre mensagens interativas de lista
DEFAULT_LIST_BUTTON_TEXT = "Select an option"
