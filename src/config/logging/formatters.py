"""Formatters de logging estruturado.

Campos presentes em todo log:
- asctime
- level
- logger
- message
- correlation_id
- service
- channel

Nunca incluir tokens de acesso ou números de telefone.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado (ordem de saída)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
    "channel",
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(service)s] [%(channel)s] [%(correlation_id)s] "
    "%(name)s: %(message)s"
)


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Campos passados via `extra` são anexados ao objeto JSON.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "INFO",
            "logger": "app.infra.whatsapp.webhook_repository",
            "message": "webhook_verified",
            "correlation_id": "abc-123",
            "service": "xtag_whatsapp",
            "channel": "whatsapp"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Cria formatter texto para execução local."""
    return logging.Formatter(TEXT_FORMAT)
