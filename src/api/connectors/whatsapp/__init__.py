"""Conector WhatsApp - adapter de borda para a Cloud API (Graph API).

Este módulo é o único ponto de IO HTTP para o canal WhatsApp.
Responsabilidades:
- Webhook (verify, signature, receive)
- HTTP client para Graph API
- Parsing de erros da Meta
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import (
    WhatsAppApiRequestError,
    WhatsAppHttpClient,
    create_whatsapp_http_client,
)
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error
from .signature import SignatureResult, verify_meta_signature

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "SignatureResult",
    "WhatsAppApiError",
    "WhatsAppApiRequestError",
    "WhatsAppHttpClient",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
    "verify_meta_signature",
]
