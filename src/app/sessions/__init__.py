"""Sessão única com o motor WhatsApp.

Exporta contexto, ciclo de vida, gate de prontidão e políticas de reconexão.
"""

from app.sessions.context import SessionContext, create_session_context
from app.sessions.lifecycle import LifecycleStateMachine
from app.sessions.readiness import ReadinessGate
from app.sessions.reconnect import (
    ExponentialBackoffPolicy,
    ImmediatePolicy,
    ReconnectPolicy,
    policy_from_settings,
)

__all__ = [
    "ExponentialBackoffPolicy",
    "ImmediatePolicy",
    "LifecycleStateMachine",
    "ReadinessGate",
    "ReconnectPolicy",
    "SessionContext",
    "create_session_context",
    "policy_from_settings",
]
