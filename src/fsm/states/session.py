"""
Estados canônicos da sessão WhatsApp (conexão com o motor externo).

Este módulo define os estados que a única sessão do processo pode assumir
durante seu ciclo de vida. A máquina cicla indefinidamente entre eles até o
shutdown do processo, portanto não existem estados terminais.
"""

from enum import StrEnum


class SessionState(StrEnum):
    """
    Estados da sessão externa.

    Estados:
        - UNPAIRED: Sessão iniciando do zero, sem código de pareamento
        - PAIRING_PENDING: Código emitido, aguardando leitura no celular
        - AUTHENTICATED: Pareamento aceito, motor sincronizando
        - READY: Sessão pronta para envio
        - DISCONNECTED: Sessão caiu ou falhou autenticação
    """

    UNPAIRED = "UNPAIRED"
    PAIRING_PENDING = "PAIRING_PENDING"
    AUTHENTICATED = "AUTHENTICATED"
    READY = "READY"
    DISCONNECTED = "DISCONNECTED"

    def __str__(self) -> str:
        return self.value


# Estado inicial no boot do processo (connect() é chamado no startup)
DEFAULT_INITIAL_STATE: SessionState = SessionState.UNPAIRED


def is_ready_state(state: SessionState) -> bool:
    """Retorna True apenas para o estado que aceita envios."""
    return state == SessionState.READY
