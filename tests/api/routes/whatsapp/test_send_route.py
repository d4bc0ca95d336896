"""Testes do endpoint POST /send-message."""

from __future__ import annotations

import pytest

from api.routes.whatsapp.send import INVALID_JSON_MESSAGE, SENT_MESSAGE
from api.validators.whatsapp import INVALID_NUMBER_MESSAGE, MISSING_FIELDS_MESSAGE
from app.use_cases.whatsapp.send_message import NOT_READY_MESSAGE, SEND_FAILED_MESSAGE
from fsm import LifecycleEvent
from tests.fakes.gateway import TEST_SECRET, build_test_runtime, client_for, make_ready

AUTH = {"x-api-key": TEST_SECRET}


@pytest.mark.asyncio
async def test_send_success_returns_message_id() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "6281234567890", "message": "Hello there!"},
            headers=AUTH,
        )

    connector = runtime.context.connector
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": SENT_MESSAGE,
        "messageId": connector.sent[0].message_id,
    }
    assert connector.sent[0].chat_id == "6281234567890@c.us"


@pytest.mark.asyncio
async def test_send_not_ready_returns_503_even_with_invalid_number() -> None:
    runtime = build_test_runtime()

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "12ab", "message": "hi"},
            headers=AUTH,
        )

    assert response.status_code == 503
    assert response.json() == {"success": False, "error": NOT_READY_MESSAGE}
    assert runtime.context.connector.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "error"),
    [
        ({"message": "hi"}, MISSING_FIELDS_MESSAGE),
        ({"number": "6281234567890"}, MISSING_FIELDS_MESSAGE),
        ({"number": "", "message": "hi"}, MISSING_FIELDS_MESSAGE),
        ({"number": "12ab", "message": "hi"}, INVALID_NUMBER_MESSAGE),
        ({"number": "+6281234567890", "message": "hi"}, INVALID_NUMBER_MESSAGE),
    ],
)
async def test_send_validation_errors_return_400(body: dict, error: str) -> None:
    runtime = build_test_runtime()
    make_ready(runtime)

    async with client_for(runtime) as client:
        response = await client.post("/send-message", json=body, headers=AUTH)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error}
    assert runtime.context.connector.sent == []


@pytest.mark.asyncio
async def test_send_malformed_json_returns_400() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            content=b"{not json",
            headers={**AUTH, "content-type": "application/json"},
        )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": INVALID_JSON_MESSAGE}


@pytest.mark.asyncio
async def test_send_empty_body_is_missing_fields() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)

    async with client_for(runtime) as client:
        response = await client.post("/send-message", headers=AUTH)

    assert response.status_code == 400
    assert response.json()["error"] == MISSING_FIELDS_MESSAGE


@pytest.mark.asyncio
async def test_send_connector_failure_returns_500_with_details() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)
    runtime.context.connector.send_error = "Evaluation failed: chat not found"

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "6281234567890", "message": "hi"},
            headers=AUTH,
        )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": SEND_FAILED_MESSAGE,
        "details": "Evaluation failed: chat not found",
    }


@pytest.mark.asyncio
async def test_send_after_disconnect_returns_503() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)
    await runtime.context.lifecycle.stop()
    runtime.context.lifecycle.apply(LifecycleEvent.disconnected("NAVIGATION"))

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "6281234567890", "message": "hi"},
            headers=AUTH,
        )

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_send_echoes_client_correlation_id() -> None:
    runtime = build_test_runtime()
    make_ready(runtime)

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "6281234567890", "message": "hi"},
            headers={**AUTH, "x-correlation-id": "req-42"},
        )

    assert response.headers["x-correlation-id"] == "req-42"


@pytest.mark.asyncio
async def test_send_generates_correlation_id_on_error_response() -> None:
    runtime = build_test_runtime()

    async with client_for(runtime) as client:
        response = await client.post(
            "/send-message",
            json={"number": "6281234567890", "message": "hi"},
            headers=AUTH,
        )

    assert response.status_code == 503
    assert len(response.headers["x-correlation-id"]) == 36
