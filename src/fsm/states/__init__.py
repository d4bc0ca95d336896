"""
Exports públicos do módulo fsm/states.

Estados canônicos da sessão externa.
"""

from fsm.states.session import (
    DEFAULT_INITIAL_STATE,
    SessionState,
    is_ready_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "SessionState",
    "is_ready_state",
]
