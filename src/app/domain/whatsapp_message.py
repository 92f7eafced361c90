"""Modelos de domínio para mensagens outbound da WhatsApp Cloud API.

Referência: https://developers.facebook.com/docs/whatsapp/cloud-api/reference/messages

`WhatsAppMessage` é uma união discriminada por `type`: o campo de conteúdo
com o mesmo nome do tipo carrega o payload. Campos None são omitidos na
serialização (`to_payload`).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.constants.whatsapp import InteractiveType, MessageType

ContactKind = Literal["HOME", "WORK"]


class _Payload(BaseModel):
    """Base dos payloads: ignora chaves desconhecidas."""

    model_config = ConfigDict(extra="ignore")


class TextMessage(_Payload):
    body: str
    preview_url: bool | None = None


class MediaMessage(_Payload):
    """Imagem, áudio, documento, sticker ou vídeo (por id ou link)."""

    id: str | None = None
    link: str | None = None
    caption: str | None = None
    filename: str | None = None
    provider: str | None = None


class LocationMessage(_Payload):
    longitude: float
    latitude: float
    name: str | None = None
    address: str | None = None


# ──────────────────────────────────────────────────────────────────────────────
# Contacts
# ──────────────────────────────────────────────────────────────────────────────


class ContactAddress(_Payload):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    country_code: str | None = None
    type: ContactKind | None = None


class ContactEmail(_Payload):
    email: str
    type: ContactKind | None = None


class ContactName(_Payload):
    formatted_name: str
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    prefix: str | None = None


class ContactOrganization(_Payload):
    company: str | None = None
    department: str | None = None
    title: str | None = None


class ContactPhone(_Payload):
    phone: str
    type: Literal["HOME", "WORK", "CELL", "MAIN", "IPHONE", "OTHER"] | None = None
    wa_id: str | None = None


class ContactUrl(_Payload):
    url: str
    type: ContactKind | None = None


class Contact(_Payload):
    """Cartão de contato (birthday no formato YYYY-MM-DD)."""

    name: ContactName
    addresses: list[ContactAddress] | None = None
    birthday: str | None = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    emails: list[ContactEmail] | None = None
    org: ContactOrganization | None = None
    phones: list[ContactPhone] | None = None
    urls: list[ContactUrl] | None = None


# ──────────────────────────────────────────────────────────────────────────────
# Interactive
# ──────────────────────────────────────────────────────────────────────────────


class InteractiveHeader(_Payload):
    type: Literal["text", "video", "image", "document"]
    text: str | None = None
    video: MediaMessage | None = None
    image: MediaMessage | None = None
    document: MediaMessage | None = None


class InteractiveBody(_Payload):
    text: str


class InteractiveFooter(_Payload):
    text: str


class ReplyButton(_Payload):
    id: str
    title: str


class InteractiveButton(_Payload):
    type: Literal["reply"] = "reply"
    reply: ReplyButton


class InteractiveSectionRow(_Payload):
    id: str
    title: str
    description: str | None = None


class ProductItem(_Payload):
    product_retailer_id: str


class InteractiveSection(_Payload):
    title: str
    rows: list[InteractiveSectionRow] | None = None
    product_items: list[ProductItem] | None = None


class InteractiveAction(_Payload):
    button: str | None = None
    buttons: list[InteractiveButton] | None = None
    catalog_id: str | None = None
    product_retailer_id: str | None = None
    sections: list[InteractiveSection] | None = None
    name: str | None = None
    parameters: dict[str, Any] | None = None


class InteractiveMessage(_Payload):
    type: InteractiveType
    header: InteractiveHeader | None = None
    body: InteractiveBody
    footer: InteractiveFooter | None = None
    action: InteractiveAction


# ──────────────────────────────────────────────────────────────────────────────
# Template
# ──────────────────────────────────────────────────────────────────────────────


class TemplateLanguage(_Payload):
    code: str
    policy: Literal["deterministic"] | None = None


class TemplateParameter(_Payload):
    """Parâmetro de componente de template.

    Repassado sem transformação: chaves extras (parameter_name, location,
    coupon_code, action, ...) seguem no payload como vieram.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    text: str | None = None
    currency: dict[str, Any] | None = None
    date_time: dict[str, Any] | None = None
    image: dict[str, Any] | None = None
    document: dict[str, Any] | None = None
    video: dict[str, Any] | None = None
    payload: str | None = None


class TemplateComponent(_Payload):
    model_config = ConfigDict(extra="allow")

    type: str
    sub_type: str | None = None
    index: str | None = None
    parameters: list[TemplateParameter] = Field(default_factory=list)


class TemplateMessage(_Payload):
    name: str
    language: TemplateLanguage
    components: list[TemplateComponent] | None = None


class ReactionMessage(_Payload):
    message_id: str
    emoji: str | None = None


class MessageContext(_Payload):
    """Contexto de resposta (reply a uma mensagem anterior)."""

    message_id: str


# ──────────────────────────────────────────────────────────────────────────────
# Mensagem principal
# ──────────────────────────────────────────────────────────────────────────────


class WhatsAppMessage(BaseModel):
    """Objeto de mensagem enviado ao endpoint /{phone_number_id}/messages."""

    model_config = ConfigDict(extra="ignore")

    messaging_product: Literal["whatsapp"] = "whatsapp"
    recipient_type: Literal["individual", "group"] | None = None
    to: str = Field(..., min_length=1)
    type: MessageType
    context: MessageContext | None = None
    biz_opaque_callback_data: str | None = None

    text: TextMessage | None = None
    image: MediaMessage | None = None
    audio: MediaMessage | None = None
    document: MediaMessage | None = None
    sticker: MediaMessage | None = None
    video: MediaMessage | None = None
    location: LocationMessage | None = None
    contacts: list[Contact] | None = None
    interactive: InteractiveMessage | None = None
    template: TemplateMessage | None = None
    reaction: ReactionMessage | None = None

    @model_validator(mode="after")
    def _require_content_for_type(self) -> WhatsAppMessage:
        if getattr(self, self.type) is None:
            raise ValueError(f"campo '{self.type}' é obrigatório para type='{self.type}'")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serializa para o JSON esperado pela Graph API (sem campos None)."""
        return self.model_dump(mode="json", exclude_none=True)


# ──────────────────────────────────────────────────────────────────────────────
# Respostas
# ──────────────────────────────────────────────────────────────────────────────


class ResponseContact(BaseModel):
    model_config = ConfigDict(extra="ignore")

    input: str
    wa_id: str


class ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    message_status: Literal["accepted", "held_for_quality_assessment"] | None = None


class WhatsAppMessageResponse(BaseModel):
    """Resposta da Graph API para um envio bem-sucedido."""

    model_config = ConfigDict(extra="ignore")

    messaging_product: Literal["whatsapp"] = "whatsapp"
    contacts: list[ResponseContact] = Field(default_factory=list)
    messages: list[ResponseMessage] = Field(default_factory=list)

    @property
    def message_id(self) -> str | None:
        """ID (wamid) da primeira mensagem aceita, se houver."""
        return self.messages[0].id if self.messages else None


class MediaInfo(BaseModel):
    """Metadados de mídia retornados por GET /{media_id}."""

    model_config = ConfigDict(extra="ignore")

    id: str
    url: str
    mime_type: str | None = None
    sha256: str | None = None
    file_size: int | None = None


__all__ = [
    "Contact",
    "ContactAddress",
    "ContactEmail",
    "ContactName",
    "ContactOrganization",
    "ContactPhone",
    "ContactUrl",
    "InteractiveAction",
    "InteractiveBody",
    "InteractiveButton",
    "InteractiveFooter",
    "InteractiveHeader",
    "InteractiveMessage",
    "InteractiveSection",
    "InteractiveSectionRow",
    "LocationMessage",
    "MediaInfo",
    "MediaMessage",
    "MessageContext",
    "ProductItem",
    "ReactionMessage",
    "ReplyButton",
    "ResponseContact",
    "ResponseMessage",
    "TemplateComponent",
    "TemplateLanguage",
    "TemplateMessage",
    "TemplateParameter",
    "TextMessage",
    "WhatsAppMessage",
    "WhatsAppMessageResponse",
]
