"""Conector em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não conversa com a rede WhatsApp. Simula o motor emitindo
eventos de ciclo de vida e registra os envios em memória.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.protocols.session_connector import SentMessage
from fsm.types.event import LifecycleEvent
from utils.errors import ConnectorError

if TYPE_CHECKING:
    from app.protocols.session_connector import LifecycleEventSink

DEFAULT_MEMORY_PAIRING_CODE = "2@memory-pairing-code"


@dataclass(frozen=True, slots=True)
class RecordedMessage:
    """Envio registrado pelo conector em memória."""

    chat_id: str
    body: str
    message_id: str


class MemorySessionConnector:
    """Conector fake com controle explícito do ciclo de vida.

    Args:
        pairing_code: Código emitido a cada connect() quando auto_pair=True
        auto_pair: Emitir pairing-code ao conectar
        auto_ready: Emitir authenticated + ready ao conectar (sessão restaurada)
    """

    def __init__(
        self,
        *,
        pairing_code: str = DEFAULT_MEMORY_PAIRING_CODE,
        auto_pair: bool = True,
        auto_ready: bool = False,
    ) -> None:
        self._sink: LifecycleEventSink | None = None
        self.pairing_code = pairing_code
        self.auto_pair = auto_pair
        self.auto_ready = auto_ready

        # Controles de falha para testes
        self.fail_connect: bool = False
        self.send_error: str | None = None
        self.destroy_hangs: bool = False
        self.send_gate: asyncio.Event | None = None

        self.connect_calls = 0
        self.destroy_calls = 0
        self.sent: list[RecordedMessage] = []

    @property
    def destroyed(self) -> bool:
        return self.destroy_calls > 0

    def bind(self, sink: LifecycleEventSink) -> None:
        self._sink = sink

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise ConnectorError("connect_failed", detail="memory connector set to fail")
        if self.auto_ready:
            self.emit_authenticated()
            self.emit_ready()
        elif self.auto_pair:
            self.emit_pairing_code(self.pairing_code)

    async def send(self, chat_id: str, body: str) -> SentMessage:
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.send_error:
            raise ConnectorError("send_failed", detail=self.send_error)
        message_id = f"true_{chat_id}_{uuid.uuid4().hex[:20].upper()}"
        self.sent.append(RecordedMessage(chat_id=chat_id, body=body, message_id=message_id))
        return SentMessage(message_id=message_id, chat_id=chat_id)

    async def destroy(self) -> None:
        self.destroy_calls += 1
        if self.destroy_hangs:
            await asyncio.Event().wait()

    # Simulação do motor

    def emit(self, event: LifecycleEvent) -> None:
        if self._sink is None:
            raise RuntimeError("connector não vinculado (bind não chamado)")
        self._sink(event)

    def emit_pairing_code(self, code: str) -> None:
        self.emit(LifecycleEvent.pairing(code))

    def emit_authenticated(self) -> None:
        self.emit(LifecycleEvent.authenticated())

    def emit_auth_failed(self, reason: str | None = None) -> None:
        self.emit(LifecycleEvent.auth_failed(reason))

    def emit_ready(self) -> None:
        self.emit(LifecycleEvent.ready())

    def emit_disconnected(self, reason: str | None = None) -> None:
        self.emit(LifecycleEvent.disconnected(reason))
