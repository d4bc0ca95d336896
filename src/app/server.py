"""Servidor HTTP com shutdown orquestrado.

O uvicorn é executado sem os handlers de sinal próprios; SIGINT/SIGTERM
são tratados aqui e entregues ao ShutdownOrchestrator, que fecha o
listener, aguarda requisições em curso e destrói a sessão dentro do
orçamento.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

import uvicorn

from app.shutdown import EXIT_FORCED

if TYPE_CHECKING:
    from fastapi import FastAPI

    from app.bootstrap.runtime import GatewayRuntime

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def serve(
    app: FastAPI,
    runtime: GatewayRuntime,
    *,
    host: str,
    port: int,
) -> int:
    """Serve até receber um sinal e devolve o código de saída.

    Returns:
        0 em shutdown gracioso; 1 se o watchdog estourou ou o listener
        terminou sem sinal (ex: falha no startup).
    """
    config = uvicorn.Config(app, host=host, port=port, log_config=None, lifespan="on")
    server = uvicorn.Server(config)
    orchestrator = runtime.shutdown
    loop = asyncio.get_running_loop()
    stop_requested = asyncio.Event()
    received: list[str] = []

    def _on_signal(sig: signal.Signals) -> None:
        logger.info("signal_received", extra={"signal": sig.name})
        if orchestrator.begin(sig.name):
            received.append(sig.name)
            stop_requested.set()

    for sig in HANDLED_SIGNALS:
        loop.add_signal_handler(sig, _on_signal, sig)

    serve_coro = server._serve() if hasattr(server, "_serve") else server.serve()
    serve_task = asyncio.create_task(serve_coro)
    stop_task = asyncio.create_task(stop_requested.wait())

    try:
        done, _ = await asyncio.wait(
            {serve_task, stop_task},
            return_when=asyncio.FIRST_COMPLETED,
        )

        if stop_task not in done:
            stop_task.cancel()
            _log_listener_exit(serve_task, started=server.started)
            await orchestrator.destroy_session()
            return EXIT_FORCED

        async def _stop_listener() -> None:
            server.should_exit = True
            try:
                await serve_task
            except Exception as exc:
                logger.error(
                    "http_listener_failed",
                    extra={"error_type": type(exc).__name__, "error": str(exc)},
                )

        return await orchestrator.run(_stop_listener, reason=received[0])
    finally:
        for sig in HANDLED_SIGNALS:
            loop.remove_signal_handler(sig)


def _log_listener_exit(serve_task: asyncio.Task[object], *, started: bool) -> None:
    error = None
    if not serve_task.cancelled() and serve_task.exception() is not None:
        error = repr(serve_task.exception())
    logger.error(
        "http_listener_exited",
        extra={"started": started, "error": error},
    )
