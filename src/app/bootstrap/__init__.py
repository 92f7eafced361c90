"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_webhook_repository

    # Na inicialização do serviço
    initialize_app()

    # Repositório de webhook com handlers já registrados
    repository = get_webhook_repository()
"""

from __future__ import annotations

import logging

from app.bootstrap.whatsapp_factory import (
    get_handle_incoming_message_use_case,
    get_message_repository,
    get_send_message_use_case,
    get_webhook_repository,
)
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    SettingsError,
    get_base_settings,
    get_whatsapp_settings,
)

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado (JSON ou texto) com correlation_id
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        json_output=base.log_format == "json",
    )


def collect_settings_errors() -> list[str]:
    """Lista problemas de configuração (vazia = OK)."""
    errors = [f"base: {error}" for error in get_base_settings().validate()]
    try:
        wa_errors = get_whatsapp_settings().validate()
    except SettingsError as exc:
        wa_errors = [str(exc)]
    errors.extend(f"whatsapp: {error}" for error in wa_errors)
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Se houver erros em ambiente estrito.
    """
    base = get_base_settings()
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


__all__ = [
    "collect_settings_errors",
    "get_handle_incoming_message_use_case",
    "get_message_repository",
    "get_send_message_use_case",
    "get_webhook_repository",
    "initialize_app",
    "validate_runtime_settings",
]
