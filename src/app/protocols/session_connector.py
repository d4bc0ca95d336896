"""Protocolo do conector da sessão externa (motor WhatsApp Web)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from fsm.types.event import LifecycleEvent

    LifecycleEventSink = Callable[[LifecycleEvent], None]


@dataclass(frozen=True, slots=True)
class SentMessage:
    """Confirmação de envio devolvida pelo motor.

    Attributes:
        message_id: Identificador serializado da mensagem na rede
        chat_id: Chat de destino
    """

    message_id: str
    chat_id: str


class SessionConnectorProtocol(Protocol):
    """Contrato mínimo do conector da sessão única.

    O conector emite eventos de ciclo de vida pelo sink registrado em
    bind(), na ordem em que o motor os produz. Falhas de connect/send/destroy
    são levantadas como ConnectorError.
    """

    def bind(self, sink: LifecycleEventSink) -> None: ...

    async def connect(self) -> None: ...

    async def send(self, chat_id: str, body: str) -> SentMessage: ...

    async def destroy(self) -> None: ...
