"""Endpoint de envio de mensagem.

Endpoint:
- POST /send-message: {"number": "5511...", "message": "texto"}

Respostas:
- 200: mensagem aceita pelo motor (messageId)
- 400: JSON inválido, campos ausentes ou número fora do formato
- 503: sessão WhatsApp não está pronta
- 500: falha do motor ao enviar (details)
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.observability import CORRELATION_HEADER, correlation_scope, get_correlation_id
from app.protocols.models import SendErrorKind

logger = logging.getLogger(__name__)

router = APIRouter()

SENT_MESSAGE = "Message sent successfully!"
INVALID_JSON_MESSAGE = "Invalid JSON in request body."

_STATUS_BY_KIND = {
    SendErrorKind.NOT_READY: status.HTTP_503_SERVICE_UNAVAILABLE,
    SendErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    SendErrorKind.CONNECTOR_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class SendMessageResponse(BaseModel):
    """Resposta de envio bem-sucedido."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = SENT_MESSAGE
    message_id: str = Field(alias="messageId")


class ErrorResponse(BaseModel):
    """Resposta de erro padrão da API."""

    success: bool = False
    error: str
    details: str | None = None


@router.post(
    "/send-message",
    response_model=SendMessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def send_message(request: Request) -> JSONResponse:
    """Envia texto para um número via sessão WhatsApp."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await _handle_send(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


async def _handle_send(request: Request) -> JSONResponse:
    raw_body = await request.body()
    try:
        payload = json.loads(raw_body) if raw_body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning(
            "send_request_json_invalid",
            extra={"correlation_id": get_correlation_id()},
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)

    if not isinstance(payload, dict):
        payload = {}

    use_case = request.app.state.runtime.send_message
    result = await use_case.execute(payload.get("number"), payload.get("message"))

    if result.success:
        body = SendMessageResponse(message_id=result.message_id)
        return JSONResponse(
            content=body.model_dump(by_alias=True),
            status_code=status.HTTP_200_OK,
        )

    return _error_response(
        _STATUS_BY_KIND[result.error_kind],
        result.error_message or "",
        details=result.details,
    )


def _error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        content=body.model_dump(exclude_none=True),
        status_code=status_code,
    )
