"""Validação da assinatura HMAC-SHA256 dos webhooks da Meta.

A Meta assina o corpo bruto com o app secret e envia o resultado em
`X-Hub-Signature-256: sha256=<hex>`.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    skipped: bool = False
    error: str | None = None


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida X-Hub-Signature-256 contra o corpo bruto.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (busca case-insensitive)
        secret: App secret. Se vazio, a validação é pulada.

    Returns:
        SignatureResult (nunca lança)
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    signature = _find_header(headers, SIGNATURE_HEADER)
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not signature.startswith(SIGNATURE_PREFIX):
        return SignatureResult(valid=False, error="invalid_signature_format")

    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    received = signature[len(SIGNATURE_PREFIX):]
    if not hmac.compare_digest(expected, received):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)


def _find_header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
