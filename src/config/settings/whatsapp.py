"""Settings específicas de WhatsApp.

Configurações do canal WhatsApp via Cloud API (Graph API).
Variáveis obrigatórias são verificadas no carregamento; as opcionais
têm defaults seguros.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Defaults do Graph API
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"
DEFAULT_LANGUAGE_CODE: str = "en_US"

# Variáveis de ambiente obrigatórias (ordem usada na mensagem de erro)
REQUIRED_ENV_VARS: tuple[str, ...] = (
    "WHATSAPP_BUSINESS_ACCOUNT_ID",
    "WHATSAPP_PHONE_NUMBER_ID",
    "WHATSAPP_API_VERSION",
    "WHATSAPP_ACCESS_TOKEN",
    "WHATSAPP_WEBHOOK_VERIFICATION_TOKEN",
)


class SettingsError(ValueError):
    """Erro base de carregamento de settings."""


class MissingSettingsError(SettingsError):
    """Variáveis de ambiente obrigatórias ausentes."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}"
        )
        self.missing = missing


class InvalidSettingsError(SettingsError):
    """Variável de ambiente com valor inválido."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name} {reason}")
        self.name = name


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        business_account_id: ID da conta de negócios (WABA)
        phone_number_id: ID do número de telefone no Meta Business
        api_version: Versão da Graph API (ex: v21.0)
        access_token: Token de acesso à Graph API
        webhook_verification_token: Token para verificação de webhook
        api_base_url: URL base da Graph API
        default_language_code: Idioma padrão para templates
        webhook_secret: App secret para validação HMAC (opcional)
        request_timeout_seconds: Timeout para requisições HTTP
    """

    business_account_id: str = ""
    phone_number_id: str = ""
    api_version: str = ""
    access_token: str = ""
    webhook_verification_token: str = ""

    api_base_url: str = GRAPH_API_BASE_URL
    default_language_code: str = DEFAULT_LANGUAGE_CODE

    webhook_secret: str = ""
    request_timeout_seconds: float = 30.0

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    def get_messages_endpoint(self) -> str:
        """Retorna URL para envio de mensagens.

        Returns:
            URL completa no formato: {base}/{versão}/{phone_number_id}/messages

        Raises:
            ValueError: Se phone_number_id não configurado.
        """
        if not self.phone_number_id:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{self.phone_number_id}/messages"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.business_account_id:
            errors.append("WHATSAPP_BUSINESS_ACCOUNT_ID não configurado")

        if not self.phone_number_id:
            errors.append("WHATSAPP_PHONE_NUMBER_ID não configurado")

        if not self.api_version:
            errors.append("WHATSAPP_API_VERSION não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if not self.webhook_verification_token:
            errors.append("WHATSAPP_WEBHOOK_VERIFICATION_TOKEN não configurado")

        if not self.api_base_url.startswith(("http://", "https://")):
            errors.append("WHATSAPP_API_BASE_URL deve começar com http(s)://")

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def load_whatsapp_settings() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente.

    Raises:
        MissingSettingsError: Se alguma variável obrigatória estiver ausente.
        InvalidSettingsError: Se WHATSAPP_REQUEST_TIMEOUT_SECONDS não for numérico.
    """
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    if missing:
        raise MissingSettingsError(missing)

    return WhatsAppSettings(
        business_account_id=os.environ["WHATSAPP_BUSINESS_ACCOUNT_ID"],
        phone_number_id=os.environ["WHATSAPP_PHONE_NUMBER_ID"],
        api_version=os.environ["WHATSAPP_API_VERSION"],
        access_token=os.environ["WHATSAPP_ACCESS_TOKEN"],
        webhook_verification_token=os.environ["WHATSAPP_WEBHOOK_VERIFICATION_TOKEN"],
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL") or GRAPH_API_BASE_URL,
        default_language_code=(
            os.getenv("WHATSAPP_DEFAULT_LANGUAGE_CODE") or DEFAULT_LANGUAGE_CODE
        ),
        webhook_secret=os.getenv("WHATSAPP_WEBHOOK_SECRET", ""),
        request_timeout_seconds=_parse_timeout(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")
        ),
    )


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidSettingsError(
            "WHATSAPP_REQUEST_TIMEOUT_SECONDS", "deve ser numérico"
        ) from exc


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return load_whatsapp_settings()
