"""Filter que injeta o contexto do serviço em cada record.

Campos injetados:
- service: nome do serviço
- channel: canal de mensageria (whatsapp), salvo se vier em `extra`
- correlation_id: ID de rastreamento do webhook/requisição

Credenciais passadas por engano em `extra` (access_token, app_secret,
verify_token, webhook_secret) são substituídas por REDACTED_VALUE.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_LOG_CHANNEL = "whatsapp"

REDACTED_VALUE = "[redacted]"

SECRET_RECORD_ATTRS: frozenset[str] = frozenset(
    {"access_token", "app_secret", "verify_token", "webhook_secret"}
)


class LogContextFilter(logging.Filter):
    """Enriquece records com service, channel e correlation_id.

    Nunca descarta records.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        channel: str = DEFAULT_LOG_CHANNEL,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._channel = channel
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self._service_name
        if not getattr(record, "channel", None):
            record.channel = self._channel
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        for attr in SECRET_RECORD_ATTRS.intersection(record.__dict__):
            setattr(record, attr, REDACTED_VALUE)
        return True
