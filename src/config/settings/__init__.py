"""Agregador de settings do gateway de envio.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    SessionSettings,
    get_base_settings,
    get_session_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    CHAT_ID_SUFFIX,
    ConnectorBackend,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "CHAT_ID_SUFFIX",
    # Base
    "BaseSettings",
    "ConnectorBackend",
    "Environment",
    "SessionSettings",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_session_settings",
    "get_whatsapp_settings",
]
