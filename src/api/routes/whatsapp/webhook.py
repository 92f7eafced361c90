"""Endpoints de webhook do WhatsApp.

Endpoints:
- GET /webhook/whatsapp: verificação de webhook (Meta challenge)
- POST /webhook/whatsapp: recebimento de eventos

Fluxo:
1. GET: Meta envia challenge, respondemos com hub.challenge
2. POST: validamos assinatura e JSON, e aguardamos o dispatch para os
   handlers registrados no repositório de webhook

Segurança:
- Validação HMAC em POST quando WHATSAPP_WEBHOOK_SECRET está configurado
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.whatsapp.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.bootstrap.whatsapp_factory import get_webhook_repository
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import get_whatsapp_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook — responde ao challenge da Meta.

    Query params esperados:
    - hub.mode: deve ser "subscribe"
    - hub.verify_token: deve corresponder ao configurado
    - hub.challenge: valor a retornar

    Returns:
        Texto do challenge ou erro 403.
    """
    challenge = get_webhook_repository().verify_webhook(
        mode=request.query_params.get("hub.mode"),
        token=request.query_params.get("hub.verify_token"),
        challenge=request.query_params.get("hub.challenge"),
    )

    if challenge is None:
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("/", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos do WhatsApp.

    Validações:
    1. Assinatura HMAC (X-Hub-Signature-256)
    2. JSON válido (objeto)

    Processamento:
    - Aguarda o dispatch; 200 se todos os handlers concluírem, 500 caso
      contrário (a Meta reenvia o webhook)

    Returns:
        Confirmação de recebimento ou Response de erro.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_whatsapp_settings()
        raw_body = await request.body()

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                secret=settings.webhook_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"error": str(exc)},
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"error": str(exc)},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        processed = await get_webhook_repository().process_webhook_payload(payload)
        if not processed:
            return JSONResponse(
                content={"status": "internal_error", "correlation_id": get_correlation_id()},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return {"status": "received", "correlation_id": get_correlation_id()}

    finally:
        reset_correlation_id(token)
