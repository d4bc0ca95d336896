"""Factory de wiring para WhatsApp (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.payload_builders.whatsapp.chat_id import ChatIdBuilder
from api.validators.whatsapp.send import SendRequestValidator
from app.use_cases.whatsapp.send_message import SendMessageUseCase

if TYPE_CHECKING:
    from app.protocols.session_connector import SessionConnectorProtocol
    from app.sessions.context import SessionContext
    from config.settings import WhatsAppSettings


def create_session_connector(settings: WhatsAppSettings) -> SessionConnectorProtocol:
    """Cria o conector da sessão conforme WHATSAPP_CONNECTOR_BACKEND.

    A implementação concreta fica em app.infra e é importada localmente
    para respeitar boundaries (wiring no bootstrap).
    """
    if settings.connector_backend == "memory":
        from app.infra.whatsapp.memory_connector import MemorySessionConnector

        # Em memória a sessão "restaura" direto para READY
        return MemorySessionConnector(auto_ready=True)

    from app.infra.whatsapp.sidecar_connector import SidecarSessionConnector

    return SidecarSessionConnector(
        settings.sidecar_url,
        shared_secret=settings.sidecar_secret or None,
        poll_interval_seconds=settings.status_poll_seconds,
        timeout_seconds=settings.request_timeout_seconds,
    )


def create_send_message_use_case(
    context: SessionContext,
    settings: WhatsAppSettings,
) -> SendMessageUseCase:
    """Cria use case de envio com dependências injetadas."""
    return SendMessageUseCase(
        context=context,
        validator=SendRequestValidator(),
        chat_id_builder=ChatIdBuilder(settings.chat_id_suffix),
    )
