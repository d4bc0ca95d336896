"""
Exports públicos do módulo fsm/transitions.

Regras de transição entre estados da sessão.
"""

from fsm.transitions.rules import (
    VALID_TRANSITIONS,
    TransitionMap,
    get_target,
    get_valid_events,
    validate_transition_map,
)

__all__ = [
    "VALID_TRANSITIONS",
    "TransitionMap",
    "get_target",
    "get_valid_events",
    "validate_transition_map",
]
