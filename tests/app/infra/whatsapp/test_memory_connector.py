"""Testes para MemorySessionConnector."""

from __future__ import annotations

import pytest

from app.infra.whatsapp.memory_connector import MemorySessionConnector
from fsm import LifecycleEvent, LifecycleEventType
from utils.errors import ConnectorError


def _bound(connector: MemorySessionConnector) -> list[LifecycleEvent]:
    events: list[LifecycleEvent] = []
    connector.bind(events.append)
    return events


@pytest.mark.asyncio
async def test_connect_emits_pairing_code_by_default() -> None:
    connector = MemorySessionConnector(pairing_code="2@abc")
    events = _bound(connector)

    await connector.connect()

    assert connector.connect_calls == 1
    assert [e.pairing_code for e in events] == ["2@abc"]


@pytest.mark.asyncio
async def test_auto_ready_emits_authenticated_then_ready() -> None:
    connector = MemorySessionConnector(auto_ready=True)
    events = _bound(connector)

    await connector.connect()

    assert [e.type for e in events] == [LifecycleEventType.AUTHENTICATED, LifecycleEventType.READY]


@pytest.mark.asyncio
async def test_fail_connect_raises() -> None:
    connector = MemorySessionConnector()
    _bound(connector)
    connector.fail_connect = True

    with pytest.raises(ConnectorError):
        await connector.connect()


@pytest.mark.asyncio
async def test_send_records_message_and_send_error_raises() -> None:
    connector = MemorySessionConnector()

    sent = await connector.send("6281@c.us", "oi")
    assert sent.message_id.startswith("true_6281@c.us_")
    assert connector.sent[0].body == "oi"

    connector.send_error = "chat not found"
    with pytest.raises(ConnectorError) as exc_info:
        await connector.send("6281@c.us", "oi")
    assert exc_info.value.detail == "chat not found"


@pytest.mark.asyncio
async def test_destroy_is_counted() -> None:
    connector = MemorySessionConnector()
    await connector.destroy()
    assert connector.destroyed is True
    assert connector.destroy_calls == 1


def test_emit_without_bind_is_an_error() -> None:
    with pytest.raises(RuntimeError):
        MemorySessionConnector().emit_ready()
