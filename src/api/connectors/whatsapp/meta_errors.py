"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Códigos HTTP/Graph que não adianta repetir
PERMANENT_ERROR_CODES = frozenset({400, 401, 403, 404, 413})
PERMANENT_ERROR_TYPES = frozenset({"OAuthException", "InvalidRequest"})


@dataclass(frozen=True)
class WhatsAppApiError:
    """Objeto `error` retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool
    fbtrace_id: str | None = None


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413 ou tipos OAuth/InvalidRequest.
    Demais (ex: 429, 5xx, 131xxx de throughput) são tratados como transitórios.
    """
    return error_code in PERMANENT_ERROR_CODES or error_type in PERMANENT_ERROR_TYPES


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """Extrai informações de erro do response da Meta.

    Args:
        response_data: JSON do response (qualquer tipo)

    Returns:
        WhatsAppApiError se houver objeto `error`, None caso contrário
    """
    if not isinstance(response_data, dict):
        return None

    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    raw_code = error_obj.get("code", 0)
    error_code = raw_code if isinstance(raw_code, int) else 0
    error_message = str(error_obj.get("message", "Erro desconhecido"))

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=error_message,
        is_permanent=is_permanent_error(error_code, error_type),
        fbtrace_id=error_obj.get("fbtrace_id"),
    )
