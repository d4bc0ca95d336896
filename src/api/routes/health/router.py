"""Endpoint de health check — reflete a prontidão da sessão WhatsApp."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

READY_MESSAGE = "WhatsApp client is ready and API is operational."
NOT_READY_MESSAGE = "WhatsApp client is not ready. Please wait."


class HealthResponse(BaseModel):
    """Resposta do health check."""

    success: bool
    message: str
    state: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    """200 quando a sessão está pronta, 503 caso contrário."""
    context = request.app.state.runtime.context
    ready = context.is_ready()
    payload = HealthResponse(
        success=ready,
        message=READY_MESSAGE if ready else NOT_READY_MESSAGE,
        state=context.state.name,
    )
    return JSONResponse(
        content=payload.model_dump(),
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
