"""
Módulo FSM — Máquina de Estados da sessão WhatsApp.

Este módulo implementa a FSM determinística que governa o ciclo de vida
da conexão com o motor externo: pareamento, autenticação, prontidão,
desconexão e reconexão.

Estrutura:
    - states/: Definições dos estados (SessionState enum)
    - types/: Eventos (LifecycleEvent) e registros (StateTransition)
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - manager/: Máquina de estados (FSMStateMachine)
"""

# Manager
from fsm.manager import (
    DEFAULT_HISTORY_SIZE,
    FSMStateMachine,
    create_fsm,
)

# Estados
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    SessionState,
    is_ready_state,
)

# Transições
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_target,
    get_valid_events,
    validate_transition_map,
)

# Types
from fsm.types import (
    LifecycleEvent,
    LifecycleEventType,
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "DEFAULT_INITIAL_STATE",
    # Transições
    "VALID_TRANSITIONS",
    # Manager
    "FSMStateMachine",
    # Types
    "LifecycleEvent",
    "LifecycleEventType",
    # Estados
    "SessionState",
    "StateTransition",
    "TransitionResult",
    "create_fsm",
    "get_target",
    "get_valid_events",
    "is_ready_state",
    "validate_transition_map",
]
