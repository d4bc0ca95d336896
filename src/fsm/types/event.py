"""
Eventos de ciclo de vida emitidos pelo conector da sessão.

Os eventos são entregues na ordem de emissão e consumidos por um único
loop de transição (app/sessions/lifecycle.py).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class LifecycleEventType(StrEnum):
    """Tipos de evento aceitos pela FSM."""

    PAIRING_CODE = "pairing-code"
    AUTHENTICATED = "authenticated"
    AUTH_FAILED = "auth-failed"
    READY = "ready"
    DISCONNECTED = "disconnected"
    # Gatilho interno: reconexão agendada pela política de backoff
    RECONNECT = "reconnect"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class LifecycleEvent:
    """
    Evento de ciclo de vida da sessão.

    Attributes:
        type: Tipo do evento
        pairing_code: Código emitido (apenas para PAIRING_CODE)
        reason: Motivo informado pelo motor (desconexão/falha de auth)
        timestamp: Momento da emissão (UTC)
    """

    type: LifecycleEventType
    pairing_code: str | None = None
    reason: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Valida invariantes do evento."""
        if self.type == LifecycleEventType.PAIRING_CODE and not self.pairing_code:
            raise ValueError("evento pairing-code exige pairing_code")

    @classmethod
    def pairing(cls, code: str) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.PAIRING_CODE, pairing_code=code)

    @classmethod
    def authenticated(cls) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.AUTHENTICATED)

    @classmethod
    def auth_failed(cls, reason: str | None = None) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.AUTH_FAILED, reason=reason)

    @classmethod
    def ready(cls) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.READY)

    @classmethod
    def disconnected(cls, reason: str | None = None) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.DISCONNECTED, reason=reason)

    @classmethod
    def reconnect(cls, attempt: int) -> "LifecycleEvent":
        return cls(type=LifecycleEventType.RECONNECT, reason=f"attempt_{attempt}")

    def to_log_dict(self) -> dict[str, Any]:
        """
        Retorna representação segura para logs.

        O código de pareamento nunca é logado, apenas seu tamanho.
        """
        return {
            "event": self.type.value,
            "reason": self.reason,
            "pairing_code_length": len(self.pairing_code) if self.pairing_code else 0,
            "timestamp": self.timestamp.isoformat(),
        }
