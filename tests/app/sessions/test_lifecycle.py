"""Testes para LifecycleStateMachine com o conector em memória."""

from __future__ import annotations

import asyncio

import pytest

from app.infra.whatsapp.memory_connector import MemorySessionConnector
from app.sessions.context import SessionContext, create_session_context
from app.sessions.lifecycle import LifecycleStateMachine
from app.sessions.readiness import ReadinessGate
from app.sessions.reconnect import ExponentialBackoffPolicy, ImmediatePolicy
from fsm import LifecycleEvent, SessionState


async def _settle(context: SessionContext, rounds: int = 30) -> None:
    """Deixa connects/reconexões rodarem e a fila esvaziar."""
    for _ in range(rounds):
        await asyncio.sleep(0)
        await context.lifecycle.wait_idle()


def _build(
    connector: MemorySessionConnector | None = None,
    *,
    policy: object | None = None,
    reconnect_on_auth_failure: bool = False,
) -> tuple[MemorySessionConnector, SessionContext]:
    connector = connector or MemorySessionConnector()
    context = create_session_context(
        connector,
        policy=policy or ImmediatePolicy(),  # type: ignore[arg-type]
        reconnect_on_auth_failure=reconnect_on_auth_failure,
    )
    return connector, context


async def _pair_and_ready(connector: MemorySessionConnector, context: SessionContext) -> None:
    connector.emit_authenticated()
    connector.emit_ready()
    await _settle(context)


@pytest.mark.asyncio
async def test_startup_connects_and_stores_pairing_code() -> None:
    connector, context = _build(MemorySessionConnector(pairing_code="2@first"))

    await context.lifecycle.start()
    await _settle(context)

    assert connector.connect_calls == 1
    assert context.state == SessionState.PAIRING_PENDING
    assert context.pairing_code == "2@first"
    assert context.is_ready() is False
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_ready_opens_gate_and_pairing_code_survives() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)

    await _pair_and_ready(connector, context)

    assert context.state == SessionState.READY
    assert context.is_ready() is True
    assert context.pairing_code == connector.pairing_code
    assert context.lifecycle.reconnect_attempt == 0
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_restored_session_authenticates_without_code() -> None:
    connector, context = _build(MemorySessionConnector(auto_ready=True))

    await context.lifecycle.start()
    await _settle(context)

    assert context.state == SessionState.READY
    assert context.pairing_code is None
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_disconnect_clears_gate_then_reconnects_with_fresh_code() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)
    await _pair_and_ready(connector, context)

    connector.pairing_code = "2@second"
    connector.emit_disconnected("NAVIGATION")
    await _settle(context)

    assert connector.connect_calls == 2
    assert context.state == SessionState.PAIRING_PENDING
    assert context.pairing_code == "2@second"
    assert context.is_ready() is False

    visited = [t.to_state for t in context.lifecycle.machine.history]
    assert visited[-3:] == [
        SessionState.DISCONNECTED,
        SessionState.UNPAIRED,
        SessionState.PAIRING_PENDING,
    ]
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_reconnect_edge_clears_pairing_code() -> None:
    connector, context = _build(MemorySessionConnector(auto_pair=False))
    await context.lifecycle.start()
    await _settle(context)
    connector.emit_pairing_code("2@old")
    await _settle(context)

    connector.emit_disconnected("LOGOUT")
    await _settle(context)

    assert context.state == SessionState.UNPAIRED
    assert context.pairing_code is None
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_events_outside_the_table_are_ignored() -> None:
    connector, context = _build(MemorySessionConnector(auto_pair=False))
    await context.lifecycle.start()
    await _settle(context)

    connector.emit_ready()
    await _settle(context)

    assert context.state == SessionState.UNPAIRED
    assert context.is_ready() is False
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_auth_failure_keeps_code_and_does_not_reconnect_by_default() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)

    connector.emit_auth_failed("corrupt session")
    await _settle(context)

    assert context.state == SessionState.DISCONNECTED
    assert context.pairing_code == connector.pairing_code
    assert connector.connect_calls == 1
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_auth_failure_reconnects_when_enabled() -> None:
    connector, context = _build(reconnect_on_auth_failure=True)
    await context.lifecycle.start()
    await _settle(context)

    connector.emit_auth_failed("corrupt session")
    await _settle(context)

    assert connector.connect_calls == 2
    assert context.state == SessionState.PAIRING_PENDING
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_failing_connect_retries_until_policy_gives_up() -> None:
    connector = MemorySessionConnector()
    connector.fail_connect = True
    policy = ExponentialBackoffPolicy(
        initial_delay_seconds=0.0,
        max_delay_seconds=0.0,
        multiplier=1.0,
        max_attempts=2,
    )
    connector, context = _build(connector, policy=policy)

    await context.lifecycle.start()
    await _settle(context, rounds=60)

    assert connector.connect_calls == 3
    assert context.state == SessionState.DISCONNECTED
    assert context.is_ready() is False
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_ready_after_failures_resets_attempt_counter() -> None:
    connector = MemorySessionConnector(auto_ready=True)
    connector.fail_connect = True
    connector, context = _build(connector)
    await context.lifecycle.start()
    await _settle(context, rounds=3)

    connector.fail_connect = False
    await _settle(context, rounds=60)

    assert context.state == SessionState.READY
    assert context.lifecycle.reconnect_attempt == 0
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_events_are_applied_in_emission_order() -> None:
    connector, context = _build(MemorySessionConnector(auto_pair=False))
    await context.lifecycle.start()
    await _settle(context)

    connector.emit_pairing_code("2@a")
    connector.emit_pairing_code("2@b")
    connector.emit_authenticated()
    connector.emit_ready()
    await _settle(context)

    assert context.state == SessionState.READY
    assert context.pairing_code == "2@b"
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_events_from_worker_thread_are_applied_on_the_loop() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)

    await asyncio.to_thread(connector.emit_authenticated)
    await asyncio.to_thread(connector.emit_ready)
    await _settle(context)

    assert context.state == SessionState.READY
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_latched_gate_blocks_ready_and_reconnect() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)

    context.readiness.force_not_ready()
    await _pair_and_ready(connector, context)
    assert context.state == SessionState.READY
    assert context.is_ready() is False

    connector.emit_disconnected("shutdown")
    await _settle(context)

    assert context.state == SessionState.DISCONNECTED
    assert connector.connect_calls == 1
    await context.lifecycle.stop()


@pytest.mark.asyncio
async def test_stop_cancels_pending_reconnect() -> None:
    policy = ExponentialBackoffPolicy(initial_delay_seconds=30.0)
    connector, context = _build(policy=policy)
    await context.lifecycle.start()
    await _settle(context)

    connector.emit_disconnected("NAVIGATION")
    await _settle(context)
    assert context.lifecycle.reconnect_attempt == 1

    await context.lifecycle.stop()
    await asyncio.sleep(0)

    assert connector.connect_calls == 1
    assert context.state == SessionState.DISCONNECTED


@pytest.mark.asyncio
async def test_apply_returns_transition_result() -> None:
    _, context = _build()

    result = context.lifecycle.apply(LifecycleEvent.pairing("2@direct"))

    assert result.success
    assert context.pairing_code == "2@direct"
    assert context.summary()["current_state"] == "PAIRING_PENDING"
    assert context.summary()["has_pairing_code"] is True


@pytest.mark.asyncio
async def test_unlimited_backoff_keeps_reconnecting_after_many_attempts() -> None:
    """Sessão caída há muito tempo continua agendando reconexão no teto."""
    policy = ExponentialBackoffPolicy(initial_delay_seconds=0.001, max_delay_seconds=0.001)
    connector, context = _build(policy=policy)
    await context.lifecycle.start()
    await _settle(context)
    context.lifecycle._attempt = 5_000

    connector.emit_disconnected("NAVIGATION")
    await _settle(context)
    await asyncio.sleep(0.05)
    await _settle(context)

    assert connector.connect_calls == 2
    assert context.state == SessionState.PAIRING_PENDING
    assert context.lifecycle.reconnect_attempt == 5_001
    await context.lifecycle.stop()


class _BrokenPolicy:
    def delay_for(self, attempt: int) -> float | None:
        raise OverflowError("Numerical result out of range")


@pytest.mark.asyncio
async def test_policy_error_falls_back_to_fixed_delay() -> None:
    connector = MemorySessionConnector()
    readiness = ReadinessGate()
    lifecycle = LifecycleStateMachine(
        connector,
        readiness,
        _BrokenPolicy(),
        fallback_delay_seconds=0.0,
    )
    context = SessionContext(connector=connector, readiness=readiness, lifecycle=lifecycle)
    await lifecycle.start()
    await _settle(context)

    connector.emit_disconnected("NAVIGATION")
    await _settle(context)

    assert connector.connect_calls == 2
    assert context.state == SessionState.PAIRING_PENDING
    await lifecycle.stop()


@pytest.mark.asyncio
async def test_auth_failure_while_ready_closes_gate() -> None:
    connector, context = _build()
    await context.lifecycle.start()
    await _settle(context)
    await _pair_and_ready(connector, context)
    assert context.is_ready() is True

    connector.emit_auth_failed("session revoked")
    await _settle(context)

    assert context.state == SessionState.DISCONNECTED
    assert context.is_ready() is False
    assert connector.connect_calls == 1
    await context.lifecycle.stop()
