"""
Regras de transição da sessão.

Este módulo define o grafo de transições: para cada estado de origem,
qual evento leva a qual estado de destino. Eventos ausentes do mapa são
ignorados pela máquina.
"""

from fsm.states.session import SessionState
from fsm.types.event import LifecycleEventType

# Tipagem explícita do mapa de transições
TransitionMap = dict[SessionState, dict[LifecycleEventType, SessionState]]

_S = SessionState
_E = LifecycleEventType

# Mapa de transições válidas
# Chave: estado de origem
# Valor: evento -> estado de destino
VALID_TRANSITIONS: TransitionMap = {
    # UNPAIRED: motor iniciando; sessão restaurada pode autenticar sem código
    _S.UNPAIRED: {
        _E.PAIRING_CODE: _S.PAIRING_PENDING,
        _E.AUTHENTICATED: _S.AUTHENTICATED,
        _E.AUTH_FAILED: _S.DISCONNECTED,
        _E.DISCONNECTED: _S.DISCONNECTED,
    },

    # PAIRING_PENDING: código pode ser renovado enquanto não for lido
    _S.PAIRING_PENDING: {
        _E.PAIRING_CODE: _S.PAIRING_PENDING,
        _E.AUTHENTICATED: _S.AUTHENTICATED,
        _E.AUTH_FAILED: _S.DISCONNECTED,
        _E.DISCONNECTED: _S.DISCONNECTED,
    },

    # AUTHENTICATED: sincronizando até o evento ready
    _S.AUTHENTICATED: {
        _E.READY: _S.READY,
        _E.PAIRING_CODE: _S.PAIRING_PENDING,
        _E.AUTH_FAILED: _S.DISCONNECTED,
        _E.DISCONNECTED: _S.DISCONNECTED,
    },

    # READY: logout pelo celular faz o motor emitir novo código
    _S.READY: {
        _E.PAIRING_CODE: _S.PAIRING_PENDING,
        _E.AUTH_FAILED: _S.DISCONNECTED,
        _E.DISCONNECTED: _S.DISCONNECTED,
    },

    # DISCONNECTED: só sai pela reconexão agendada
    _S.DISCONNECTED: {
        _E.RECONNECT: _S.UNPAIRED,
        _E.DISCONNECTED: _S.DISCONNECTED,
    },
}


def get_valid_events(state: SessionState) -> frozenset[LifecycleEventType]:
    """
    Retorna os eventos aceitos a partir de um estado.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de eventos aceitos
    """
    return frozenset(VALID_TRANSITIONS.get(state, {}))


def get_target(
    from_state: SessionState,
    event: LifecycleEventType,
) -> SessionState | None:
    """
    Resolve o estado de destino para um evento.

    Args:
        from_state: Estado de origem
        event: Evento recebido

    Returns:
        Estado de destino, ou None se o evento não é aceito no estado
    """
    return VALID_TRANSITIONS.get(from_state, {}).get(event)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - disconnected é aceito em qualquer estado
    - Todos os destinos são estados válidos
    - RECONNECT só é aceito a partir de DISCONNECTED

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in SessionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")
            continue
        if LifecycleEventType.DISCONNECTED not in VALID_TRANSITIONS[state]:
            errors.append(f"Estado {state.name} não aceita disconnected")

    for from_state, edges in VALID_TRANSITIONS.items():
        for event, target in edges.items():
            if not isinstance(target, SessionState):
                errors.append(
                    f"Transição {from_state.name} --{event}--> {target}: destino inválido"
                )
            if event == LifecycleEventType.RECONNECT and from_state != SessionState.DISCONNECTED:
                errors.append(f"RECONNECT não deveria partir de {from_state.name}")

    return errors
