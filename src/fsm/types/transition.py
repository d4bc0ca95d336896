"""
Registros de transição da sessão.

StateTransition guarda uma mudança de estado já aplicada; TransitionResult
embrulha a resposta da FSM a um evento (aceito ou rejeitado).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.session import SessionState, is_ready_state
from fsm.types.event import LifecycleEventType


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Mudança de estado aplicada pela FSM.

    `metadata` é só auditoria (motivo da desconexão, origem); nunca
    carrega código de pareamento nem número de destino.
    """

    from_state: SessionState
    to_state: SessionState
    trigger: LifecycleEventType
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_self_loop(self) -> bool:
        """Evento aceito sem troca de estado (ex.: código de pareamento renovado)."""
        return self.from_state == self.to_state

    @property
    def gained_readiness(self) -> bool:
        return not is_ready_state(self.from_state) and is_ready_state(self.to_state)

    @property
    def lost_readiness(self) -> bool:
        return is_ready_state(self.from_state) and not is_ready_state(self.to_state)

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger.value,
            "ready": is_ready_state(self.to_state),
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Resposta da FSM: `transition` quando aceito, `error_reason` quando não."""

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição aceita deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Evento rejeitado deve incluir error_reason")

    @classmethod
    def accepted(cls, transition: StateTransition) -> "TransitionResult":
        return cls(success=True, transition=transition)

    @classmethod
    def rejected(cls, state: SessionState, trigger: LifecycleEventType) -> "TransitionResult":
        return cls(
            success=False,
            error_reason=f"Evento {trigger.value} não aceito em {state.name}",
        )
