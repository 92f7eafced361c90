"""Testes dos modelos de mensagens outbound e inbound."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from app.constants.whatsapp import InteractiveType, MessageType
from app.domain.whatsapp_inbound import IncomingWhatsAppMessage
from app.domain.whatsapp_message import (
    Contact,
    ContactName,
    ContactPhone,
    InteractiveAction,
    InteractiveBody,
    InteractiveMessage,
    MediaMessage,
    WhatsAppMessage,
    WhatsAppMessageResponse,
)


def test_to_payload_drops_none_fields() -> None:
    message = WhatsAppMessage(to="123", type="image", image=MediaMessage(id="media-1"))

    assert message.to_payload() == {
        "messaging_product": "whatsapp",
        "to": "123",
        "type": "image",
        "image": {"id": "media-1"},
    }


def test_content_matching_type_is_required() -> None:
    with pytest.raises(ValidationError):
        WhatsAppMessage(to="123", type="text")


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        WhatsAppMessage.model_validate({"to": "123", "type": "poll", "poll": {}})


def test_contacts_message() -> None:
    message = WhatsAppMessage(
        to="123",
        type="contacts",
        contacts=[
            Contact(
                name=ContactName(formatted_name="Clínica Centro"),
                phones=[ContactPhone(phone="+55 11 3333-0000", type="WORK")],
            )
        ],
    )

    assert message.to_payload()["contacts"] == [
        {
            "name": {"formatted_name": "Clínica Centro"},
            "phones": [{"phone": "+55 11 3333-0000", "type": "WORK"}],
        }
    ]


def test_contact_birthday_format() -> None:
    with pytest.raises(ValidationError):
        Contact(name=ContactName(formatted_name="X"), birthday="01/02/1990")


def test_response_message_id() -> None:
    response = WhatsAppMessageResponse.model_validate(
        {
            "messaging_product": "whatsapp",
            "contacts": [{"input": "123", "wa_id": "123"}],
            "messages": [{"id": "wamid.x", "message_status": "accepted"}],
        }
    )

    assert response.message_id == "wamid.x"
    assert WhatsAppMessageResponse().message_id is None


def test_incoming_messages_from_webhook_value() -> None:
    value = {
        "metadata": {"phone_number_id": "test-phone-id"},
        "messages": [
            {
                "id": "wamid.1",
                "from": "5511999999999",
                "timestamp": "1700000000",
                "type": "interactive",
                "interactive": {
                    "type": "button_reply",
                    "button_reply": {"id": "yes", "title": "Sim"},
                },
                "context": {"from": "15550000000", "id": "wamid.0"},
                "unknown_field": True,
            },
            "not-a-dict",
        ],
    }

    messages = IncomingWhatsAppMessage.from_webhook_value(value)

    assert len(messages) == 1
    message = messages[0]
    assert message.message_id == "wamid.1"
    assert message.from_ == "5511999999999"
    assert message.interactive is not None
    assert message.interactive.button_reply is not None
    assert message.interactive.button_reply.id == "yes"
    assert message.context is not None
    assert message.context.id == "wamid.0"


def test_incoming_messages_missing_list() -> None:
    assert IncomingWhatsAppMessage.from_webhook_value({"statuses": []}) == []


def test_message_type_is_enum_member() -> None:
    message = WhatsAppMessage(
        to="123",
        type="interactive",
        interactive=InteractiveMessage(
            type="list",
            body=InteractiveBody(text="Escolha"),
            action=InteractiveAction(button="Ver"),
        ),
    )

    assert message.type is MessageType.INTERACTIVE
    assert message.interactive is not None
    assert message.interactive.type is InteractiveType.LIST
    assert message.to_payload()["interactive"]["type"] == "list"


def test_unknown_interactive_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        InteractiveMessage(
            type="carousel",
            body=InteractiveBody(text="x"),
            action=InteractiveAction(),
        )


def test_forwarded_message_context_without_id() -> None:
    value = {
        "messages": [
            {
                "id": "wamid.fwd",
                "from": "5511999999999",
                "timestamp": "1700000000",
                "type": "text",
                "text": {"body": "encaminhada"},
                "context": {"forwarded": True},
            },
            {
                "id": "wamid.fwd2",
                "from": "5511999999999",
                "timestamp": "1700000001",
                "type": "text",
                "text": {"body": "viral"},
                "context": {"frequently_forwarded": True},
            },
        ]
    }

    messages = IncomingWhatsAppMessage.from_webhook_value(value)

    assert [m.message_id for m in messages] == ["wamid.fwd", "wamid.fwd2"]
    assert messages[0].context is not None
    assert messages[0].context.forwarded is True
    assert messages[0].context.id is None
    assert messages[1].context is not None
    assert messages[1].context.frequently_forwarded is True


def test_invalid_message_is_skipped_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    value = {
        "messages": [
            {"id": "wamid.bad", "timestamp": "1", "type": "text"},
            {
                "id": "wamid.ok",
                "from": "5511999999999",
                "timestamp": "2",
                "type": "text",
                "text": {"body": "oi"},
            },
        ]
    }

    with caplog.at_level(logging.WARNING):
        messages = IncomingWhatsAppMessage.from_webhook_value(value)

    assert [m.message_id for m in messages] == ["wamid.ok"]
    records = [r for r in caplog.records if r.getMessage() == "incoming_message_invalid"]
    assert len(records) == 1
    assert records[0].index == 0
    assert records[0].message_type == "text"
