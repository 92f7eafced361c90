"""Helpers de logging para API Meta/WhatsApp (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import WhatsAppApiError

logger = logging.getLogger(__name__)


def log_request_failed(
    method: str,
    endpoint: str,
    status_code: int,
    meta_error: WhatsAppApiError | None,
) -> None:
    """Loga resposta não-2xx sem expor token nem corpo da mensagem."""
    extra: dict[str, object] = {
        "method": method,
        "endpoint": endpoint,
        "status_code": status_code,
    }
    if meta_error is not None:
        extra.update(
            {
                "error_type": meta_error.error_type,
                "error_code": meta_error.error_code,
                "is_permanent": meta_error.is_permanent,
                "fbtrace_id": meta_error.fbtrace_id,
            }
        )
    logger.warning("whatsapp_api_request_failed", extra=extra)


def log_success(method: str, endpoint: str, status_code: int) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "whatsapp_api_request_ok",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
