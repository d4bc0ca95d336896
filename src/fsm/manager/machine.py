"""
Máquina de estados (FSMStateMachine) da sessão WhatsApp.

Este módulo implementa a FSM pura: resolve o destino de cada evento,
registra a transição e mantém um histórico curto para diagnóstico.
Efeitos colaterais (código de pareamento, prontidão, reconexão) ficam
a cargo de app/sessions/lifecycle.py.
"""

from collections import deque
from typing import Any

from fsm.states.session import (
    DEFAULT_INITIAL_STATE,
    SessionState,
    is_ready_state,
)
from fsm.transitions.rules import get_target, get_valid_events
from fsm.types.event import LifecycleEvent
from fsm.types.transition import StateTransition, TransitionResult

# Máximo de transições mantidas em memória
DEFAULT_HISTORY_SIZE = 50


class FSMStateMachine:
    """
    Máquina de estados da sessão externa.

    Attributes:
        current_state: Estado atual da máquina
        history: Últimas transições realizadas
    """

    __slots__ = ("_current_state", "_history", "_session_id")

    def __init__(
        self,
        initial_state: SessionState | None = None,
        session_id: str = "default",
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """
        Inicializa a máquina de estados.

        Args:
            initial_state: Estado inicial (usa DEFAULT_INITIAL_STATE se None)
            session_id: Identificador da sessão para logs
            history_size: Tamanho máximo do histórico
        """
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: deque[StateTransition] = deque(maxlen=history_size)
        self._session_id = session_id

    @property
    def current_state(self) -> SessionState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def session_id(self) -> str:
        """Identificador da sessão."""
        return self._session_id

    @property
    def is_ready(self) -> bool:
        return is_ready_state(self._current_state)

    def apply(
        self,
        event: LifecycleEvent,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta aplicar um evento ao estado atual.

        Args:
            event: Evento de ciclo de vida
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        target = get_target(self._current_state, event.type)
        if target is None:
            return TransitionResult.rejected(self._current_state, event.type)

        audit = dict(metadata or {})
        if event.reason:
            audit.setdefault("reason", event.reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=event.type,
            metadata=audit,
            timestamp=event.timestamp,
        )

        self._current_state = target
        self._history.append(transition)

        return TransitionResult.accepted(transition)

    def get_state_summary(self) -> dict[str, Any]:
        """
        Retorna resumo do estado atual para observability.

        Returns:
            Dict com informações do estado (seguro para logs)
        """
        return {
            "session_id": self._session_id,
            "current_state": self._current_state.name,
            "is_ready": self.is_ready,
            "transition_count": len(self._history),
            "accepted_events": sorted(e.value for e in get_valid_events(self._current_state)),
            "last_transition": self._history[-1].to_log_dict() if self._history else None,
        }


def create_fsm(
    session_id: str = "default",
    initial_state: SessionState | None = None,
) -> FSMStateMachine:
    """
    Factory function para criar uma FSM.

    Args:
        session_id: Identificador da sessão
        initial_state: Estado inicial (opcional)

    Returns:
        FSMStateMachine configurada
    """
    return FSMStateMachine(
        initial_state=initial_state,
        session_id=session_id,
    )
