"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="xtag_whatsapp")
    logger = get_logger(__name__)
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import DEFAULT_LOG_CHANNEL, LogContextFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "DEFAULT_LOG_CHANNEL",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "LogContextFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
]
