"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class WhatsAppHttpClientProtocol(Protocol):
    """Contrato mínimo para cliente HTTP da Graph API."""

    async def post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]: ...

    async def get(
        self,
        endpoint: str,
        query_params: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...
