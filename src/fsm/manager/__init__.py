"""
Exports públicos do módulo fsm/manager.

Máquina de estados (FSMStateMachine) da sessão externa.
"""

from fsm.manager.machine import (
    DEFAULT_HISTORY_SIZE,
    FSMStateMachine,
    create_fsm,
)

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "FSMStateMachine",
    "create_fsm",
]
