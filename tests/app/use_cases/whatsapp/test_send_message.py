"""Testes do SendMessageUseCase (formato das mensagens montadas)."""

from __future__ import annotations

import pytest

from app.domain.whatsapp_message import (
    LocationMessage,
    ReactionMessage,
    WhatsAppMessage,
)
from app.use_cases.whatsapp.send_message import (
    ButtonOption,
    ListRow,
    ListSection,
    SendInteractiveMessageParams,
    SendMediaMessageParams,
    SendMessageUseCase,
    SendTemplateMessageParams,
    SendTextMessageParams,
    TemplateComponentParams,
)
from tests.fakes.fake_whatsapp import FakeMessageRepository

TO = "5511999999999"


@pytest.fixture
def repository() -> FakeMessageRepository:
    return FakeMessageRepository()


@pytest.fixture
def use_case(repository: FakeMessageRepository) -> SendMessageUseCase:
    return SendMessageUseCase(repository, default_language_code="pt_BR")


def _sent_payload(repository: FakeMessageRepository) -> dict:
    message = repository.sent[-1]
    assert isinstance(message, WhatsAppMessage)
    return message.to_payload()


@pytest.mark.asyncio
async def test_send_text_message(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    response = await use_case.send_text_message(
        SendTextMessageParams(to=TO, text="Olá!", preview_url=True, reply_to_message_id="wamid.0")
    )

    assert response.message_id == "wamid.1"
    assert _sent_payload(repository) == {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": TO,
        "type": "text",
        "text": {"body": "Olá!", "preview_url": True},
        "context": {"message_id": "wamid.0"},
    }


@pytest.mark.asyncio
async def test_send_media_message_by_link(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    await use_case.send_media_message(
        SendMediaMessageParams(
            to=TO,
            media_type="document",
            media_url="https://example.com/boleto.pdf",
            caption="Seu boleto",
            filename="boleto.pdf",
        )
    )

    payload = _sent_payload(repository)
    assert payload["type"] == "document"
    assert payload["document"] == {
        "link": "https://example.com/boleto.pdf",
        "caption": "Seu boleto",
        "filename": "boleto.pdf",
    }
    assert "context" not in payload


@pytest.mark.asyncio
async def test_send_media_message_requires_id_or_url(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    with pytest.raises(ValueError, match="media_id or media_url"):
        await use_case.send_media_message(SendMediaMessageParams(to=TO, media_type="image"))

    assert repository.sent == []


@pytest.mark.asyncio
async def test_send_button_message(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    await use_case.send_interactive_message(
        SendInteractiveMessageParams(
            to=TO,
            interactive_type="button",
            body_text="Confirma o horário?",
            header_text="Agendamento",
            footer_text="Responda abaixo",
            buttons=[ButtonOption(id="yes", title="Sim"), ButtonOption(id="no", title="Não")],
        )
    )

    interactive = _sent_payload(repository)["interactive"]
    assert interactive == {
        "type": "button",
        "header": {"type": "text", "text": "Agendamento"},
        "body": {"text": "Confirma o horário?"},
        "footer": {"text": "Responda abaixo"},
        "action": {
            "buttons": [
                {"type": "reply", "reply": {"id": "yes", "title": "Sim"}},
                {"type": "reply", "reply": {"id": "no", "title": "Não"}},
            ]
        },
    }


@pytest.mark.asyncio
async def test_send_list_message_uses_default_button_text(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    await use_case.send_interactive_message(
        SendInteractiveMessageParams(
            to=TO,
            interactive_type="list",
            body_text="Escolha um serviço",
            list_sections=[
                ListSection(
                    title="Serviços",
                    rows=[ListRow(id="a", title="Consulta", description="30 min")],
                )
            ],
        )
    )

    interactive = _sent_payload(repository)["interactive"]
    assert "header" not in interactive
    assert interactive["action"] == {
        "button": "Select an option",
        "sections": [
            {
                "title": "Serviços",
                "rows": [{"id": "a", "title": "Consulta", "description": "30 min"}],
            }
        ],
    }


@pytest.mark.asyncio
async def test_send_template_message_uses_default_language(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    await use_case.send_template_message(
        SendTemplateMessageParams(
            to=TO,
            template_name="lembrete",
            components=[
                TemplateComponentParams(
                    type="body", parameters=[{"type": "text", "text": "Maria"}]
                )
            ],
        )
    )

    template = _sent_payload(repository)["template"]
    assert template == {
        "name": "lembrete",
        "language": {"code": "pt_BR"},
        "components": [{"type": "body", "parameters": [{"type": "text", "text": "Maria"}]}],
    }


@pytest.mark.asyncio
async def test_send_template_message_explicit_language(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    await use_case.send_template_message(
        SendTemplateMessageParams(to=TO, template_name="hello_world", language_code="en_US")
    )

    template = _sent_payload(repository)["template"]
    assert template == {"name": "hello_world", "language": {"code": "en_US"}}


@pytest.mark.asyncio
async def test_send_custom_message_passes_through(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    message = WhatsAppMessage(
        to=TO,
        type="location",
        location=LocationMessage(latitude=-23.55, longitude=-46.63, name="Clínica"),
    )

    await use_case.send_custom_message(message)

    assert repository.sent == [message]


@pytest.mark.asyncio
async def test_send_custom_reaction(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    message = WhatsAppMessage(
        to=TO, type="reaction", reaction=ReactionMessage(message_id="wamid.x", emoji="👍")
    )

    await use_case.send_custom_message(message)

    assert _sent_payload(repository)["reaction"] == {"message_id": "wamid.x", "emoji": "👍"}


@pytest.mark.asyncio
async def test_send_media_message_rejects_unsupported_type(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    with pytest.raises(ValueError, match="Unsupported media type: location"):
        await use_case.send_media_message(
            SendMediaMessageParams(to=TO, media_type="location", media_id="media-1")
        )

    assert repository.sent == []


@pytest.mark.asyncio
async def test_send_template_message_keeps_parameters_unchanged(
    use_case: SendMessageUseCase, repository: FakeMessageRepository
) -> None:
    named = {"type": "text", "parameter_name": "customer", "text": "John"}
    location = {
        "type": "location",
        "location": {"latitude": "-23.5", "longitude": "-46.6", "name": "Clínica"},
    }
    coupon = {"type": "coupon_code", "coupon_code": "DESC10"}

    await use_case.send_template_message(
        SendTemplateMessageParams(
            to=TO,
            template_name="pedido_confirmado",
            components=[
                TemplateComponentParams(type="header", parameters=[location]),
                TemplateComponentParams(type="body", parameters=[named]),
                TemplateComponentParams(
                    type="button", sub_type="copy_code", index="0", parameters=[coupon]
                ),
            ],
        )
    )

    components = _sent_payload(repository)["template"]["components"]
    assert components[0]["parameters"] == [location]
    assert components[1]["parameters"] == [named]
    assert components[2] == {
        "type": "button",
        "sub_type": "copy_code",
        "index": "0",
        "parameters": [coupon],
    }
