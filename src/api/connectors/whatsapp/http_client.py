"""Cliente HTTP especializado para WhatsApp Cloud API (Graph API).

Estende HttpClient genérico com comportamentos específicos de WhatsApp:
- Montagem de URL a partir de base_url + versão da API
- Autenticação Bearer com o access_token configurado
- Erro descritivo (status, texto e corpo) para respostas não-2xx
- Logging estruturado sem PII (tokens, números, conteúdo)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.whatsapp.meta_errors import WhatsAppApiError, parse_meta_error
from api.connectors.whatsapp.meta_logging import log_request_failed, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppApiRequestError(HttpError):
    """Resposta não-2xx da Graph API.

    A mensagem segue o formato
    `WhatsApp API error: <status> <texto> - <corpo JSON>`.
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        response_body: Any,
        meta_error: WhatsAppApiError | None = None,
    ) -> None:
        # Corpo JSON compacto, sem espaços após separadores
        body_text = json.dumps(response_body, ensure_ascii=False, separators=(",", ":"))
        super().__init__(
            f"WhatsApp API error: {status_code} {status_text} - {body_text}",
            status_code=status_code,
        )
        self.status_text = status_text
        self.response_body = response_body
        self.meta_error = meta_error


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para a Graph API, autenticado pelo access_token."""

    def __init__(
        self,
        settings: WhatsAppSettings,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            config or HttpClientConfig(timeout_seconds=settings.request_timeout_seconds),
            transport=transport,
        )
        self._settings = settings

    def build_url(self, endpoint: str) -> str:
        """Resolve endpoint relativo para URL absoluta.

        Endpoints que já começam com http são usados como estão.
        """
        if endpoint.startswith("http"):
            return endpoint
        return f"{self._settings.api_endpoint}/{endpoint.lstrip('/')}"

    async def post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST JSON na Graph API.

        Raises:
            WhatsAppApiRequestError: Se a resposta não for 2xx
            HttpError: Se houver falha de transporte
        """
        headers = {
            "Content-Type": "application/json",
            **self._auth_headers(),
        }
        response = await self.request(
            "POST", self.build_url(endpoint), json=body, headers=headers
        )
        return self._process_response(response, "POST", endpoint)

    async def get(
        self,
        endpoint: str,
        query_params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET na Graph API com query params opcionais.

        Raises:
            WhatsAppApiRequestError: Se a resposta não for 2xx
            HttpError: Se houver falha de transporte
        """
        response = await self.request(
            "GET",
            self.build_url(endpoint),
            params=query_params or None,
            headers=self._auth_headers(),
        )
        return self._process_response(response, "GET", endpoint)

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._settings.access_token}"}

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> dict[str, Any]:
        if not response.is_success:
            body = _safe_json(response)
            meta_error = parse_meta_error(body)
            log_request_failed(method, endpoint, response.status_code, meta_error)
            raise WhatsAppApiRequestError(
                status_code=response.status_code,
                status_text=response.reason_phrase,
                response_body=body,
                meta_error=meta_error,
            )

        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            logger.error("whatsapp_api_invalid_json", extra={"endpoint": endpoint})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        log_success(method, endpoint, response.status_code)
        return data if isinstance(data, dict) else {"data": data}


def _safe_json(response: httpx.Response) -> Any:
    """Corpo JSON do response ou {} se não for JSON."""
    try:
        return response.json()
    except ValueError:
        return {}


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config padrão.

    Args:
        settings: WhatsAppSettings opcional. Se None, carrega do ambiente.
    """
    from config.settings import get_whatsapp_settings

    return WhatsAppHttpClient(settings or get_whatsapp_settings())
