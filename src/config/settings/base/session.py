"""Settings de ciclo de vida da sessão.

Política de reconexão e orçamento de shutdown.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class SessionSettings:
    """Configurações de reconexão e shutdown.

    Attributes:
        reconnect_initial_delay_seconds: Espera antes da primeira reconexão
        reconnect_max_delay_seconds: Teto do backoff exponencial
        reconnect_multiplier: Fator multiplicativo entre tentativas
        reconnect_max_attempts: Máximo de tentativas seguidas (0 = ilimitado)
        reconnect_on_auth_failure: Reconectar também após auth-failed
        shutdown_timeout_seconds: Orçamento do watchdog de shutdown
    """

    reconnect_initial_delay_seconds: float = 1.0
    reconnect_max_delay_seconds: float = 60.0
    reconnect_multiplier: float = 2.0
    reconnect_max_attempts: int = 0
    reconnect_on_auth_failure: bool = False
    shutdown_timeout_seconds: float = 10.0

    def validate(self) -> list[str]:
        """Valida configurações de sessão.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.reconnect_initial_delay_seconds < 0:
            errors.append("SESSION_RECONNECT_INITIAL_DELAY_SECONDS deve ser >= 0")

        if self.reconnect_max_delay_seconds < self.reconnect_initial_delay_seconds:
            errors.append(
                "SESSION_RECONNECT_MAX_DELAY_SECONDS deve ser >= "
                "SESSION_RECONNECT_INITIAL_DELAY_SECONDS"
            )

        if self.reconnect_multiplier < 1:
            errors.append("SESSION_RECONNECT_MULTIPLIER deve ser >= 1")

        if self.reconnect_max_attempts < 0:
            errors.append("SESSION_RECONNECT_MAX_ATTEMPTS deve ser >= 0")

        if self.shutdown_timeout_seconds <= 0:
            errors.append("SHUTDOWN_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_session_from_env() -> SessionSettings:
    """Carrega SessionSettings de variáveis de ambiente."""
    return SessionSettings(
        reconnect_initial_delay_seconds=float(
            os.getenv("SESSION_RECONNECT_INITIAL_DELAY_SECONDS", "1")
        ),
        reconnect_max_delay_seconds=float(
            os.getenv("SESSION_RECONNECT_MAX_DELAY_SECONDS", "60")
        ),
        reconnect_multiplier=float(os.getenv("SESSION_RECONNECT_MULTIPLIER", "2")),
        reconnect_max_attempts=int(os.getenv("SESSION_RECONNECT_MAX_ATTEMPTS", "0")),
        reconnect_on_auth_failure=os.getenv(
            "SESSION_RECONNECT_ON_AUTH_FAILURE", "false"
        ).lower() in ("true", "1", "yes"),
        shutdown_timeout_seconds=float(os.getenv("SHUTDOWN_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_session_settings() -> SessionSettings:
    """Retorna instância cacheada de SessionSettings."""
    return _load_session_from_env()
