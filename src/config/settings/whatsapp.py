"""Settings específicas de WhatsApp.

Configurações do conector da sessão (motor WhatsApp Web via sidecar)
e do segredo compartilhado que protege as rotas do gateway.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

ConnectorBackend = Literal["sidecar", "memory"]

# Sufixo do identificador de chat individual na rede WhatsApp
CHAT_ID_SUFFIX: str = "@c.us"
DEFAULT_SIDECAR_URL: str = "http://127.0.0.1:3001"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        secret_key: Segredo compartilhado exigido pelas rotas protegidas
        connector_backend: Implementação do conector (sidecar|memory)
        sidecar_url: URL base do sidecar que hospeda o motor WhatsApp Web
        sidecar_secret: Segredo enviado ao sidecar (x-sidecar-secret)
        chat_id_suffix: Sufixo anexado ao número para formar o chat id
        status_poll_seconds: Intervalo de consulta de status do sidecar
        request_timeout_seconds: Timeout para requisições HTTP ao sidecar
    """

    # Credenciais
    secret_key: str = ""

    # Conector
    connector_backend: ConnectorBackend = "sidecar"
    sidecar_url: str = DEFAULT_SIDECAR_URL
    sidecar_secret: str = ""
    chat_id_suffix: str = CHAT_ID_SUFFIX

    # Timeouts
    status_poll_seconds: float = 2.0
    request_timeout_seconds: float = 30.0

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.secret_key:
            errors.append(
                "SECRET_KEY não configurado (rotas protegidas rejeitarão tudo)"
            )

        if self.connector_backend not in ("sidecar", "memory"):
            errors.append(
                "WHATSAPP_CONNECTOR_BACKEND deve ser 'sidecar' ou 'memory'"
            )

        if self.connector_backend == "sidecar" and not self.sidecar_url:
            errors.append("WHATSAPP_SIDECAR_URL não configurado")

        if not self.chat_id_suffix.startswith("@"):
            errors.append("WHATSAPP_CHAT_ID_SUFFIX deve começar com '@'")

        if self.status_poll_seconds <= 0:
            errors.append("WHATSAPP_STATUS_POLL_SECONDS deve ser > 0")

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    backend = os.getenv("WHATSAPP_CONNECTOR_BACKEND", "sidecar").lower()
    return WhatsAppSettings(
        secret_key=os.getenv("SECRET_KEY", ""),
        connector_backend=backend,  # type: ignore[arg-type]
        sidecar_url=os.getenv("WHATSAPP_SIDECAR_URL", DEFAULT_SIDECAR_URL),
        sidecar_secret=os.getenv("WHATSAPP_SIDECAR_SECRET", ""),
        chat_id_suffix=os.getenv("WHATSAPP_CHAT_ID_SUFFIX", CHAT_ID_SUFFIX),
        status_poll_seconds=float(os.getenv("WHATSAPP_STATUS_POLL_SECONDS", "2")),
        request_timeout_seconds=float(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
