"""
Exports públicos do módulo fsm/types.

Eventos de ciclo de vida e registros de transição.
"""

from fsm.types.event import LifecycleEvent, LifecycleEventType
from fsm.types.transition import StateTransition, TransitionResult

__all__ = [
    "LifecycleEvent",
    "LifecycleEventType",
    "StateTransition",
    "TransitionResult",
]
