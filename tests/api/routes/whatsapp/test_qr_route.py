"""Testes do endpoint GET /qr-code."""

from __future__ import annotations

import pytest

from api.routes.whatsapp.qr_code import QR_NOT_AVAILABLE_MESSAGE
from fsm import LifecycleEvent
from tests.fakes.gateway import build_test_runtime, client_for


@pytest.mark.asyncio
async def test_qr_code_404_before_first_pairing_event() -> None:
    runtime = build_test_runtime()

    async with client_for(runtime) as client:
        response = await client.get("/qr-code")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": QR_NOT_AVAILABLE_MESSAGE}


@pytest.mark.asyncio
async def test_qr_code_returns_latest_code() -> None:
    runtime = build_test_runtime()
    runtime.context.lifecycle.apply(LifecycleEvent.pairing("2@first"))
    runtime.context.lifecycle.apply(LifecycleEvent.pairing("2@second"))

    async with client_for(runtime) as client:
        response = await client.get("/qr-code")

    assert response.status_code == 200
    assert response.json() == {"success": True, "qrCode": "2@second"}


@pytest.mark.asyncio
async def test_qr_code_still_served_after_ready() -> None:
    runtime = build_test_runtime()
    lifecycle = runtime.context.lifecycle
    lifecycle.apply(LifecycleEvent.pairing("2@code"))
    lifecycle.apply(LifecycleEvent.authenticated())
    lifecycle.apply(LifecycleEvent.ready())

    async with client_for(runtime) as client:
        response = await client.get("/qr-code")

    assert response.json()["qrCode"] == "2@code"
