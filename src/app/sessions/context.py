"""Contexto da sessão única — injetado na API e no shutdown.

Agrupa conector, gate de prontidão e máquina de ciclo de vida num único
objeto dono do estado, em vez de variáveis globais de módulo. A API só
lê estado e chama operações do conector; mutação é exclusiva do
LifecycleStateMachine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.sessions.lifecycle import LifecycleStateMachine
from app.sessions.readiness import ReadinessGate
from app.sessions.reconnect import ExponentialBackoffPolicy
from utils.errors import PairingCodeNotFoundError

if TYPE_CHECKING:
    from app.protocols.session_connector import SessionConnectorProtocol
    from app.sessions.reconnect import ReconnectPolicy
    from fsm import SessionState


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Dono do estado da sessão externa.

    Attributes:
        connector: Conector da sessão externa
        readiness: Gate de prontidão
        lifecycle: Único escritor de estado e código de pareamento
    """

    connector: SessionConnectorProtocol
    readiness: ReadinessGate
    lifecycle: LifecycleStateMachine

    @property
    def state(self) -> SessionState:
        return self.lifecycle.state

    @property
    def pairing_code(self) -> str | None:
        return self.lifecycle.pairing_code

    def is_ready(self) -> bool:
        return self.readiness.is_ready()

    def require_pairing_code(self) -> str:
        """Retorna o código atual.

        Raises:
            PairingCodeNotFoundError: Nenhum código emitido desde o último reset
        """
        code = self.pairing_code
        if code is None:
            raise PairingCodeNotFoundError("pairing code not available")
        return code

    def summary(self) -> dict[str, Any]:
        """Resumo seguro para logs/diagnóstico."""
        return {
            **self.lifecycle.machine.get_state_summary(),
            "gate_ready": self.readiness.is_ready(),
            "has_pairing_code": self.pairing_code is not None,
            "reconnect_attempt": self.lifecycle.reconnect_attempt,
        }


def create_session_context(
    connector: SessionConnectorProtocol,
    *,
    policy: ReconnectPolicy | None = None,
    reconnect_on_auth_failure: bool = False,
) -> SessionContext:
    """Monta o contexto com gate e ciclo de vida ligados ao conector.

    Args:
        connector: Conector da sessão externa
        policy: Política de reconexão (default: backoff exponencial)
        reconnect_on_auth_failure: Reconectar após auth-failed

    Returns:
        SessionContext pronto para start()
    """
    readiness = ReadinessGate()
    lifecycle = LifecycleStateMachine(
        connector,
        readiness,
        policy or ExponentialBackoffPolicy(),
        reconnect_on_auth_failure=reconnect_on_auth_failure,
    )
    return SessionContext(connector=connector, readiness=readiness, lifecycle=lifecycle)
