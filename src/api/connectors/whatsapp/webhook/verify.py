"""Verificação de webhook exigida pela Meta (handshake GET)."""

from __future__ import annotations

import hmac

from app.constants.whatsapp import SUBSCRIBE_MODE


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str | None:
    """Valida o handshake e retorna o challenge a ser respondido.

    Args:
        hub_mode: Valor de hub.mode
        hub_verify_token: Valor de hub.verify_token
        hub_challenge: Valor de hub.challenge
        expected_token: Token configurado no servidor

    Returns:
        O challenge inalterado se mode == "subscribe" e o token confere;
        None em qualquer outro caso (inclusive token não configurado).
    """
    if not expected_token or hub_mode != SUBSCRIBE_MODE or hub_verify_token is None:
        return None

    if not hmac.compare_digest(hub_verify_token.encode(), expected_token.encode()):
        return None

    return hub_challenge
