"""Agregador de settings.

Re-exporta as settings base e as do canal WhatsApp.
"""

from __future__ import annotations

from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    LogFormat,
    get_base_settings,
)
from config.settings.whatsapp import (
    DEFAULT_LANGUAGE_CODE,
    GRAPH_API_BASE_URL,
    REQUIRED_ENV_VARS,
    InvalidSettingsError,
    MissingSettingsError,
    SettingsError,
    WhatsAppSettings,
    get_whatsapp_settings,
    load_whatsapp_settings,
)

__all__ = [
    # Constants
    "DEFAULT_LANGUAGE_CODE",
    "DEFAULT_SERVICE_NAME",
    "GRAPH_API_BASE_URL",
    "REQUIRED_ENV_VARS",
    # Base
    "BaseSettings",
    "Environment",
    "LogFormat",
    # Channels
    "InvalidSettingsError",
    "MissingSettingsError",
    "SettingsError",
    "WhatsAppSettings",
    "get_base_settings",
    "get_whatsapp_settings",
    "load_whatsapp_settings",
]
