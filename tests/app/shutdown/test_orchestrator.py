"""Testes para ShutdownOrchestrator."""

from __future__ import annotations

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from app.infra.whatsapp.memory_connector import MemorySessionConnector
from app.sessions.context import create_session_context
from app.sessions.reconnect import ImmediatePolicy
from app.shutdown import EXIT_FORCED, EXIT_OK, ShutdownOrchestrator
from tests.fakes.gateway import FakeExit
from utils.errors import ConnectorError


def _build(timeout: float = 1.0) -> tuple[MemorySessionConnector, ShutdownOrchestrator, FakeExit]:
    connector = MemorySessionConnector()
    context = create_session_context(connector, policy=ImmediatePolicy())
    context.readiness.set_ready(True)
    fake_exit = FakeExit()
    orchestrator = ShutdownOrchestrator(context, timeout_seconds=timeout, hard_exit=fake_exit)
    return connector, orchestrator, fake_exit


@pytest.mark.asyncio
async def test_graceful_shutdown_closes_listener_then_destroys_session() -> None:
    connector, orchestrator, fake_exit = _build(timeout=0.3)
    calls: list[str] = []

    async def _stop_listener() -> None:
        calls.append(f"listener:destroyed={connector.destroyed}")

    code = await orchestrator.run(_stop_listener, reason="SIGTERM")

    assert code == EXIT_OK
    assert orchestrator.exit_code == EXIT_OK
    assert calls == ["listener:destroyed=False"]
    assert connector.destroy_calls == 1
    assert orchestrator.is_shutting_down

    # Watchdog desarmado: nada dispara depois do orçamento
    await asyncio.sleep(0.4)
    assert fake_exit.codes == []


@pytest.mark.asyncio
async def test_begin_latches_gate_and_is_idempotent() -> None:
    connector, orchestrator, _ = _build()
    context_gate = orchestrator._context.readiness

    assert orchestrator.begin("SIGINT") is True
    assert context_gate.is_ready() is False
    assert orchestrator.begin("SIGTERM") is False

    code = await orchestrator.run(AsyncMock(), reason="SIGINT")
    assert code == EXIT_OK
    assert connector.destroy_calls == 1


@pytest.mark.asyncio
async def test_destroy_failure_is_logged_and_shutdown_still_succeeds() -> None:
    connector, orchestrator, _ = _build()
    connector.destroy = AsyncMock(side_effect=ConnectorError("destroy_failed", detail="boom"))  # type: ignore[method-assign]

    code = await orchestrator.run(AsyncMock())

    assert code == EXIT_OK
    connector.destroy.assert_awaited_once()


@pytest.mark.asyncio
async def test_destroy_session_runs_once() -> None:
    connector, orchestrator, _ = _build()

    await orchestrator.destroy_session()
    await orchestrator.destroy_session()
    await orchestrator.run(AsyncMock())

    assert connector.destroy_calls == 1


@pytest.mark.asyncio
async def test_hanging_destroy_exceeds_budget_and_exits_with_1() -> None:
    connector, orchestrator, fake_exit = _build(timeout=0.2)
    connector.destroy_hangs = True

    started = time.monotonic()
    code = await orchestrator.run(AsyncMock())

    assert code == EXIT_FORCED
    assert orchestrator.exit_code == EXIT_FORCED
    assert fake_exit.codes == [EXIT_FORCED]
    assert time.monotonic() - started < 1.0

    # Timer já desarmado: nenhuma segunda saída forçada
    await asyncio.sleep(0.3)
    assert fake_exit.codes == [EXIT_FORCED]


@pytest.mark.asyncio
async def test_hanging_listener_exceeds_budget_and_skips_destroy() -> None:
    connector, orchestrator, _ = _build(timeout=0.2)

    async def _never_closes() -> None:
        await asyncio.Event().wait()

    code = await orchestrator.run(_never_closes)

    assert code == EXIT_FORCED
    assert connector.destroy_calls == 0


def test_watchdog_hard_exits_when_loop_is_blocked() -> None:
    _, orchestrator, fake_exit = _build(timeout=0.05)

    orchestrator.begin("SIGTERM")
    time.sleep(0.3)

    assert fake_exit.codes == [EXIT_FORCED]
    assert orchestrator.exit_code == EXIT_FORCED


@pytest.mark.asyncio
async def test_remaining_budget_shrinks_after_begin() -> None:
    _, orchestrator, _ = _build(timeout=5.0)
    assert orchestrator.remaining_seconds() == 5.0

    orchestrator.begin("SIGTERM")
    await asyncio.sleep(0.05)

    assert orchestrator.remaining_seconds() < 5.0
    await orchestrator.run(AsyncMock())
