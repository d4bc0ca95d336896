"""Shutdown Orchestrator — encerramento gracioso com orçamento fixo.

Sequência disparada por SIGINT/SIGTERM:
1. Gate de prontidão travado em não-pronto (novos envios recebem 503)
2. Listener HTTP deixa de aceitar conexões; requisições em curso terminam
3. connector.destroy()
4. Código de saída 0

Um watchdog corre em paralelo cobrindo os passos 2–3: estourado o
orçamento, o processo termina na hora com código 1, seja pelo timeout
asyncio, seja por um threading.Timer quando o event loop está bloqueado.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.sessions.context import SessionContext

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FORCED = 1
DEFAULT_SHUTDOWN_TIMEOUT_SECONDS = 10.0


class ShutdownOrchestrator:
    """Coordena parada do listener e destruição da sessão.

    Args:
        context: Contexto da sessão (gate + conector)
        timeout_seconds: Orçamento total do shutdown
        hard_exit: Função de saída imediata usada quando o orçamento estoura
    """

    def __init__(
        self,
        context: SessionContext,
        *,
        timeout_seconds: float = DEFAULT_SHUTDOWN_TIMEOUT_SECONDS,
        hard_exit: Callable[[int], object] = os._exit,
    ) -> None:
        self._context = context
        self._timeout = timeout_seconds
        self._hard_exit = hard_exit
        self._started_at: float | None = None
        self._watchdog: threading.Timer | None = None
        self._destroyed = False
        self._exit_code: int | None = None
        self._force_lock = threading.Lock()
        self._forced = False

    @property
    def is_shutting_down(self) -> bool:
        return self._started_at is not None

    @property
    def exit_code(self) -> int | None:
        return self._exit_code

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def remaining_seconds(self) -> float:
        """Orçamento restante desde begin() (orçamento total se não iniciado)."""
        if self._started_at is None:
            return self._timeout
        return max(self._timeout - (time.monotonic() - self._started_at), 0.0)

    def begin(self, reason: str) -> bool:
        """Passo 1 + arma o watchdog. Idempotente.

        Seguro para chamar a partir de um signal handler.

        Returns:
            False se o shutdown já havia começado.
        """
        if self._started_at is not None:
            logger.info("shutdown_already_in_progress", extra={"reason": reason})
            return False

        self._started_at = time.monotonic()
        self._context.readiness.force_not_ready()

        self._watchdog = threading.Timer(self._timeout, self._on_watchdog_fired)
        self._watchdog.daemon = True
        self._watchdog.start()

        logger.info(
            "shutdown_started",
            extra={"reason": reason, "timeout_seconds": self._timeout},
        )
        return True

    async def run(
        self,
        stop_listener: Callable[[], Awaitable[None]],
        reason: str = "signal",
    ) -> int:
        """Executa os passos 1–4 dentro do orçamento.

        Args:
            stop_listener: Fecha o listener e aguarda requisições em curso
            reason: Origem do shutdown (ex: nome do sinal)

        Returns:
            EXIT_OK se concluído no prazo, EXIT_FORCED caso contrário.
        """
        if not self.is_shutting_down:
            self.begin(reason)
        try:
            await asyncio.wait_for(
                self._drain(stop_listener),
                timeout=self.remaining_seconds(),
            )
        except TimeoutError:
            logger.error(
                "shutdown_timeout",
                extra={"timeout_seconds": self._timeout},
            )
            self._disarm()
            self._force_exit()
            return EXIT_FORCED
        finally:
            self._disarm()

        self._exit_code = EXIT_OK
        logger.info("shutdown_completed", extra={"exit_code": EXIT_OK})
        return EXIT_OK

    async def _drain(self, stop_listener: Callable[[], Awaitable[None]]) -> None:
        await stop_listener()
        logger.info("http_listener_closed")
        await self.destroy_session()

    async def destroy_session(self) -> None:
        """Passo 3: destrói a sessão externa uma única vez.

        Erros do conector são logados; o shutdown segue como sucesso.
        """
        if self._destroyed:
            return
        self._destroyed = True
        logger.info("session_destroy_started")
        try:
            await self._context.connector.destroy()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error(
                "session_destroy_failed",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            return
        logger.info("session_destroyed")

    def _disarm(self) -> None:
        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None

    def _on_watchdog_fired(self) -> None:
        logger.critical(
            "shutdown_watchdog_fired",
            extra={"timeout_seconds": self._timeout, "exit_code": EXIT_FORCED},
        )
        self._force_exit()

    def _force_exit(self) -> None:
        # Timer e timeout asyncio podem disparar juntos; sai uma vez só
        with self._force_lock:
            if self._forced:
                return
            self._forced = True
        self._exit_code = EXIT_FORCED
        self._hard_exit(EXIT_FORCED)
