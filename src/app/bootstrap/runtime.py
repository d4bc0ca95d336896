"""Runtime do gateway — objetos de vida longa do processo.

Um único GatewayRuntime é criado por processo e pendurado em
app.state.runtime; rotas, lifespan e servidor leem dele.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.bootstrap.whatsapp_factory import (
    create_send_message_use_case,
    create_session_connector,
)
from app.sessions.context import create_session_context
from app.sessions.reconnect import policy_from_settings
from app.shutdown import ShutdownOrchestrator
from config.settings import (
    get_base_settings,
    get_session_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.session_connector import SessionConnectorProtocol
    from app.sessions.context import SessionContext
    from app.sessions.reconnect import ReconnectPolicy
    from app.use_cases.whatsapp.send_message import SendMessageUseCase
    from config.settings import BaseSettings, SessionSettings, WhatsAppSettings


@dataclass(frozen=True, slots=True)
class GatewayRuntime:
    """Dependências compartilhadas entre API, lifespan e shutdown."""

    base_settings: BaseSettings
    whatsapp_settings: WhatsAppSettings
    context: SessionContext
    send_message: SendMessageUseCase
    shutdown: ShutdownOrchestrator


def build_runtime(
    *,
    connector: SessionConnectorProtocol | None = None,
    base_settings: BaseSettings | None = None,
    session_settings: SessionSettings | None = None,
    whatsapp_settings: WhatsAppSettings | None = None,
    policy: ReconnectPolicy | None = None,
    hard_exit: Callable[[int], object] | None = None,
) -> GatewayRuntime:
    """Monta o runtime a partir das settings (ou dos overrides informados).

    Args:
        connector: Conector já construído (default: conforme settings)
        base_settings: Override de BaseSettings
        session_settings: Override de SessionSettings
        whatsapp_settings: Override de WhatsAppSettings
        policy: Override da política de reconexão
        hard_exit: Override da saída forçada do watchdog (testes)

    Returns:
        GatewayRuntime pronto para create_app()
    """
    base = base_settings or get_base_settings()
    session = session_settings or get_session_settings()
    whatsapp = whatsapp_settings or get_whatsapp_settings()

    context = create_session_context(
        connector or create_session_connector(whatsapp),
        policy=policy or policy_from_settings(session),
        reconnect_on_auth_failure=session.reconnect_on_auth_failure,
    )
    orchestrator_kwargs: dict[str, object] = {}
    if hard_exit is not None:
        orchestrator_kwargs["hard_exit"] = hard_exit

    return GatewayRuntime(
        base_settings=base,
        whatsapp_settings=whatsapp,
        context=context,
        send_message=create_send_message_use_case(context, whatsapp),
        shutdown=ShutdownOrchestrator(
            context,
            timeout_seconds=session.shutdown_timeout_seconds,
            **orchestrator_kwargs,  # type: ignore[arg-type]
        ),
    )
