"""Use case para envio de mensagens WhatsApp.

Converte parâmetros tipados em `WhatsAppMessage` e delega o envio ao
repositório de mensagens. Todas as mensagens saem com
`recipient_type="individual"`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from app.constants.whatsapp import DEFAULT_LIST_BUTTON_TEXT, MEDIA_MESSAGE_TYPES
from app.domain.whatsapp_message import (
    InteractiveAction,
    InteractiveBody,
    InteractiveButton,
    InteractiveFooter,
    InteractiveHeader,
    InteractiveMessage,
    InteractiveSection,
    MediaMessage,
    MessageContext,
    ReplyButton,
    TemplateComponent,
    TemplateLanguage,
    TemplateMessage,
    TextMessage,
    WhatsAppMessage,
)
from config.settings import DEFAULT_LANGUAGE_CODE

if TYPE_CHECKING:
    from app.domain.whatsapp_message import WhatsAppMessageResponse
    from app.protocols.message_repository import WhatsAppMessageRepositoryProtocol

logger = logging.getLogger(__name__)

MediaType = Literal["image", "audio", "document", "video", "sticker"]
InteractiveKind = Literal["button", "list", "product", "product_list"]


@dataclass(frozen=True)
class SendTextMessageParams:
    to: str
    text: str
    preview_url: bool | None = None
    reply_to_message_id: str | None = None


@dataclass(frozen=True)
class SendMediaMessageParams:
    """Mídia por `media_id` (upload prévio) ou `media_url` (link público)."""

    to: str
    media_type: MediaType
    media_id: str | None = None
    media_url: str | None = None
    caption: str | None = None
    filename: str | None = None
    reply_to_message_id: str | None = None


@dataclass(frozen=True)
class ButtonOption:
    id: str
    title: str


@dataclass(frozen=True)
class ListRow:
    id: str
    title: str
    description: str | None = None


@dataclass(frozen=True)
class ListSection:
    title: str
    rows: list[ListRow] = field(default_factory=list)


@dataclass(frozen=True)
class SendInteractiveMessageParams:
    to: str
    interactive_type: InteractiveKind
    body_text: str
    header_text: str | None = None
    footer_text: str | None = None
    buttons: list[ButtonOption] | None = None
    list_sections: list[ListSection] | None = None
    list_button_text: str = DEFAULT_LIST_BUTTON_TEXT
    reply_to_message_id: str | None = None


@dataclass(frozen=True)
class TemplateComponentParams:
    type: str
    parameters: list[dict[str, Any]] = field(default_factory=list)
    sub_type: str | None = None
    index: str | None = None


@dataclass(frozen=True)
class SendTemplateMessageParams:
    """Template aprovado; `language_code` None usa o idioma padrão configurado."""

    to: str
    template_name: str
    language_code: str | None = None
    components: list[TemplateComponentParams] | None = None


class SendMessageUseCase:
    """Monta mensagens tipadas e envia via repositório."""

    def __init__(
        self,
        message_repository: WhatsAppMessageRepositoryProtocol,
        default_language_code: str = DEFAULT_LANGUAGE_CODE,
    ) -> None:
        self._message_repository = message_repository
        self._default_language_code = default_language_code

    async def send_text_message(self, params: SendTextMessageParams) -> WhatsAppMessageResponse:
        """Envia mensagem de texto."""
        message = WhatsAppMessage(
            recipient_type="individual",
            to=params.to,
            type="text",
            text=TextMessage(body=params.text, preview_url=params.preview_url),
            context=_reply_context(params.reply_to_message_id),
        )
        return await self._send(message)

    async def send_media_message(self, params: SendMediaMessageParams) -> WhatsAppMessageResponse:
        """Envia imagem, áudio, documento, vídeo ou sticker.

        Raises:
            ValueError: Se media_type não for de mídia ou se nem media_id nem
                media_url forem informados.
        """
        if params.media_type not in MEDIA_MESSAGE_TYPES:
            raise ValueError(f"Unsupported media type: {params.media_type}")
        if not params.media_id and not params.media_url:
            raise ValueError("Either media_id or media_url must be provided")

        media = MediaMessage(
            id=params.media_id,
            link=params.media_url,
            caption=params.caption,
            filename=params.filename,
        )
        message = WhatsAppMessage(
            recipient_type="individual",
            to=params.to,
            type=params.media_type,
            context=_reply_context(params.reply_to_message_id),
            **{params.media_type: media},
        )
        return await self._send(message)

    async def send_interactive_message(
        self,
        params: SendInteractiveMessageParams,
    ) -> WhatsAppMessageResponse:
        """Envia mensagem interativa (botões de resposta ou lista)."""
        interactive = InteractiveMessage(
            type=params.interactive_type,
            header=(
                InteractiveHeader(type="text", text=params.header_text)
                if params.header_text
                else None
            ),
            body=InteractiveBody(text=params.body_text),
            footer=InteractiveFooter(text=params.footer_text) if params.footer_text else None,
            action=_build_action(params),
        )
        message = WhatsAppMessage(
            recipient_type="individual",
            to=params.to,
            type="interactive",
            interactive=interactive,
            context=_reply_context(params.reply_to_message_id),
        )
        return await self._send(message)

    async def send_template_message(
        self,
        params: SendTemplateMessageParams,
    ) -> WhatsAppMessageResponse:
        """Envia mensagem de template."""
        components = None
        if params.components is not None:
            components = [
                TemplateComponent.model_validate(
                    {
                        "type": component.type,
                        "sub_type": component.sub_type,
                        "index": component.index,
                        "parameters": component.parameters,
                    }
                )
                for component in params.components
            ]

        message = WhatsAppMessage(
            recipient_type="individual",
            to=params.to,
            type="template",
            template=TemplateMessage(
                name=params.template_name,
                language=TemplateLanguage(
                    code=params.language_code or self._default_language_code
                ),
                components=components,
            ),
        )
        return await self._send(message)

    async def send_custom_message(self, message: WhatsAppMessage) -> WhatsAppMessageResponse:
        """Envia mensagem já montada (casos avançados)."""
        return await self._send(message)

    async def _send(self, message: WhatsAppMessage) -> WhatsAppMessageResponse:
        logger.debug("whatsapp_send_requested", extra={"message_type": message.type})
        return await self._message_repository.send_message(message)


def _reply_context(reply_to_message_id: str | None) -> MessageContext | None:
    if not reply_to_message_id:
        return None
    return MessageContext(message_id=reply_to_message_id)


def _build_action(params: SendInteractiveMessageParams) -> InteractiveAction:
    if params.interactive_type == "button" and params.buttons:
        return InteractiveAction(
            buttons=[
                InteractiveButton(reply=ReplyButton(id=button.id, title=button.title))
                for button in params.buttons
            ]
        )

    if params.interactive_type == "list" and params.list_sections:
        return InteractiveAction(
            button=params.list_button_text,
            sections=[
                InteractiveSection.model_validate(
                    {
                        "title": section.title,
                        "rows": [
                            {"id": row.id, "title": row.title, "description": row.description}
                            for row in section.rows
                        ],
                    }
                )
                for section in params.list_sections
            ],
        )

    return InteractiveAction()
