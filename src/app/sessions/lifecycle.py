"""Lifecycle State Machine — consome eventos do conector e aplica a FSM.

Único escritor de SessionState, PairingCode e da flag de prontidão.
Eventos entram por submit() (chamado pelo conector, em ordem de emissão)
numa asyncio.Queue e são aplicados sequencialmente por uma única task
consumidora, de modo que duas transições nunca concorrem.

Efeitos colaterais por evento:
- pairing-code: guarda o código mais recente
- ready: libera o gate e zera o contador de reconexão
- disconnected: fecha o gate e agenda reconexão (backoff)
- reconnect: limpa o código e chama connector.connect()
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fsm import (
    FSMStateMachine,
    LifecycleEvent,
    LifecycleEventType,
    SessionState,
    TransitionResult,
    create_fsm,
)

if TYPE_CHECKING:
    from app.protocols.session_connector import SessionConnectorProtocol
    from app.sessions.readiness import ReadinessGate
    from app.sessions.reconnect import ReconnectPolicy
    from fsm import StateTransition

logger = logging.getLogger(__name__)

# Espera usada quando a política falha ao calcular o atraso
FALLBACK_RECONNECT_DELAY_SECONDS = 60.0


class LifecycleStateMachine:
    """Orquestra o ciclo de vida da sessão única.

    Args:
        connector: Conector da sessão externa
        readiness: Gate de prontidão consultado pela API
        policy: Política de reconexão
        reconnect_on_auth_failure: Agendar reconexão também após auth-failed
        machine: FSM a usar (default: nova FSM em UNPAIRED)
        fallback_delay_seconds: Espera se a política levantar erro
    """

    def __init__(
        self,
        connector: SessionConnectorProtocol,
        readiness: ReadinessGate,
        policy: ReconnectPolicy,
        *,
        reconnect_on_auth_failure: bool = False,
        machine: FSMStateMachine | None = None,
        fallback_delay_seconds: float = FALLBACK_RECONNECT_DELAY_SECONDS,
    ) -> None:
        self._connector = connector
        self._readiness = readiness
        self._policy = policy
        self._fallback_delay_seconds = fallback_delay_seconds
        self._reconnect_on_auth_failure = reconnect_on_auth_failure
        self._machine = machine or create_fsm()
        self._pairing_code: str | None = None
        self._queue: asyncio.Queue[LifecycleEvent] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._reconnect_task: asyncio.Task[None] | None = None
        self._connect_tasks: set[asyncio.Task[None]] = set()
        self._attempt = 0
        self._stopped = False
        connector.bind(self.submit)

    @property
    def state(self) -> SessionState:
        return self._machine.current_state

    @property
    def pairing_code(self) -> str | None:
        return self._pairing_code

    @property
    def reconnect_attempt(self) -> int:
        """Tentativas de reconexão desde o último ready."""
        return self._attempt

    @property
    def machine(self) -> FSMStateMachine:
        return self._machine

    # ──────────────────────────────────────────────────────────────────
    # Entrada de eventos
    # ──────────────────────────────────────────────────────────────────

    def submit(self, event: LifecycleEvent) -> None:
        """Enfileira um evento para aplicação sequencial.

        Pode ser chamado de outra thread (workers internos do conector).
        """
        loop = self._loop
        if loop is not None and not loop.is_closed():
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None
            if running is not loop:
                loop.call_soon_threadsafe(self._queue.put_nowait, event)
                return
        self._queue.put_nowait(event)

    async def start(self) -> None:
        """Inicia o consumidor de eventos e dispara o connect() inicial.

        Não aguarda o connect: a API precisa responder /health e /qr-code
        enquanto a sessão ainda está subindo.
        """
        self._loop = asyncio.get_running_loop()
        self._stopped = False
        self._consumer = asyncio.create_task(self._consume(), name="session-lifecycle")
        logger.info(
            "session_lifecycle_started",
            extra={"state": self.state.name},
        )
        self._spawn_connect(reason="startup")

    async def stop(self) -> None:
        """Interrompe consumidor, reconexões pendentes e connects em curso."""
        self._stopped = True
        tasks: list[asyncio.Task[None]] = list(self._connect_tasks)
        if self._reconnect_task is not None:
            tasks.append(self._reconnect_task)
        if self._consumer is not None:
            tasks.append(self._consumer)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._consumer = None
        self._reconnect_task = None
        logger.info("session_lifecycle_stopped", extra={"state": self.state.name})

    async def wait_idle(self) -> None:
        """Aguarda a fila de eventos esvaziar."""
        await self._queue.join()

    async def _consume(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                self.apply(event)
            except Exception:
                logger.exception(
                    "lifecycle_event_failed",
                    extra={"event": event.type.value},
                )
            finally:
                self._queue.task_done()

    # ──────────────────────────────────────────────────────────────────
    # Transições
    # ──────────────────────────────────────────────────────────────────

    def apply(self, event: LifecycleEvent) -> TransitionResult:
        """Aplica um evento à FSM e executa os efeitos colaterais.

        Eventos não aceitos no estado atual são logados e ignorados.
        """
        result = self._machine.apply(event)
        if not result.success:
            logger.warning(
                "lifecycle_event_ignored",
                extra={
                    "state": self.state.name,
                    "event": event.type.value,
                    "error": result.error_reason,
                },
            )
            return result

        transition = result.transition
        assert transition is not None
        self._readiness.set_ready(transition.to_state == SessionState.READY)
        if transition.gained_readiness or transition.lost_readiness:
            logger.info(
                "readiness_changed",
                extra={"ready": transition.gained_readiness, "trigger": transition.trigger.value},
            )
        self._run_side_effects(event, transition)

        logger.info("session_state_changed", extra=transition.to_log_dict())
        return result

    def _run_side_effects(self, event: LifecycleEvent, transition: StateTransition) -> None:
        kind = event.type

        if kind == LifecycleEventType.PAIRING_CODE:
            self._pairing_code = event.pairing_code
            logger.info(
                "pairing_code_received",
                extra={
                    "pairing_code_length": len(event.pairing_code or ""),
                    "hint": "scan the code from GET /qr-code with WhatsApp on your phone",
                },
            )

        elif kind == LifecycleEventType.AUTHENTICATED:
            logger.info("session_authenticated")

        elif kind == LifecycleEventType.AUTH_FAILED:
            logger.error(
                "session_auth_failed",
                extra={
                    "reason": event.reason,
                    "from_state": transition.from_state.name,
                    "hint": "stored session data may be corrupt; clear it and pair again",
                },
            )
            if self._reconnect_on_auth_failure:
                self._schedule_reconnect()

        elif kind == LifecycleEventType.READY:
            self._attempt = 0
            logger.info("session_ready", extra={"endpoint": "/send-message"})

        elif kind == LifecycleEventType.DISCONNECTED:
            logger.warning(
                "session_disconnected",
                extra={"reason": event.reason, "from_state": transition.from_state.name},
            )
            self._schedule_reconnect()

        elif kind == LifecycleEventType.RECONNECT:
            # Sessão nova do zero: código anterior deixa de valer
            self._pairing_code = None
            self._spawn_connect(reason="reconnect")

    # ──────────────────────────────────────────────────────────────────
    # Reconexão
    # ──────────────────────────────────────────────────────────────────

    def _schedule_reconnect(self) -> None:
        if self._stopped or self._readiness.is_latched:
            logger.info("session_reconnect_skipped", extra={"reason": "shutting_down"})
            return
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return

        self._attempt += 1
        try:
            delay = self._policy.delay_for(self._attempt)
        except (ArithmeticError, ValueError) as exc:
            delay = self._fallback_delay_seconds
            logger.error(
                "session_reconnect_policy_failed",
                extra={
                    "attempt": self._attempt,
                    "error_type": type(exc).__name__,
                    "fallback_delay_seconds": delay,
                },
            )
        if delay is None:
            logger.error(
                "session_reconnect_exhausted",
                extra={"attempts": self._attempt - 1},
            )
            return

        logger.info(
            "session_reconnect_scheduled",
            extra={"attempt": self._attempt, "delay_seconds": delay},
        )
        self._reconnect_task = asyncio.get_running_loop().create_task(
            self._reconnect_after(delay, self._attempt),
        )

    async def _reconnect_after(self, delay: float, attempt: int) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        self.submit(LifecycleEvent.reconnect(attempt))

    def _spawn_connect(self, reason: str) -> None:
        if self._stopped:
            return
        task = asyncio.get_running_loop().create_task(self._connect(reason))
        self._connect_tasks.add(task)
        task.add_done_callback(self._connect_tasks.discard)

    async def _connect(self, reason: str) -> None:
        """Chama connector.connect(); falha vira evento disconnected."""
        logger.info("session_connect_started", extra={"reason": reason})
        try:
            await self._connector.connect()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error(
                "session_connect_failed",
                extra={"reason": reason, "error_type": type(exc).__name__, "error": str(exc)},
            )
            self.submit(LifecycleEvent.disconnected(reason="connect_failed"))
