"""Testes para ReadinessGate."""

from __future__ import annotations

import threading

from app.sessions.readiness import ReadinessGate


def test_gate_starts_not_ready_and_follows_set_ready() -> None:
    gate = ReadinessGate()
    assert gate.is_ready() is False

    gate.set_ready(True)
    assert gate.is_ready() is True

    gate.set_ready(False)
    assert gate.is_ready() is False


def test_force_not_ready_latches_even_if_ready_arrives_later() -> None:
    gate = ReadinessGate()
    gate.set_ready(True)

    gate.force_not_ready()
    gate.set_ready(True)

    assert gate.is_latched is True
    assert gate.is_ready() is False


def test_concurrent_readers_and_writers_see_only_booleans() -> None:
    gate = ReadinessGate()
    seen: set[object] = set()

    def _writer() -> None:
        for i in range(2000):
            gate.set_ready(i % 2 == 0)

    def _reader() -> None:
        for _ in range(2000):
            seen.add(gate.is_ready())

    threads = [threading.Thread(target=_writer), threading.Thread(target=_reader)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert seen <= {True, False}
