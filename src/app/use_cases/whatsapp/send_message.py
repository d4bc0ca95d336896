"""Use case de envio de mensagem pela sessão WhatsApp."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.protocols.models import SendErrorKind, SendResult
from config.logging import mask_destination
from utils.errors import ConnectorError, NotReadyError, SendValidationError

if TYPE_CHECKING:
    from app.protocols.payload_builder import ChatIdBuilderProtocol
    from app.protocols.validator import SendRequestValidatorProtocol
    from app.sessions.context import SessionContext

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "WhatsApp client is not ready. Please try again shortly."
SEND_FAILED_MESSAGE = "Failed to send message."


class SendMessageUseCase:
    """Orquestra prontidão, validação e envio.

    Ordem das verificações (falha rápida, sem tocar o conector):
    1. Readiness Gate
    2. Presença de número e mensagem
    3. Formato do número
    """

    def __init__(
        self,
        context: SessionContext,
        validator: SendRequestValidatorProtocol,
        chat_id_builder: ChatIdBuilderProtocol,
    ) -> None:
        self._context = context
        self._validator = validator
        self._chat_id_builder = chat_id_builder

    async def execute(self, destination: object, body: object) -> SendResult:
        """Executa o envio com tratamento de erro por categoria."""
        try:
            self._ensure_ready()
        except NotReadyError as exc:
            logger.info(
                "send_rejected_not_ready",
                extra={"state": self._context.state.name},
            )
            return SendResult.failed(SendErrorKind.NOT_READY, str(exc))

        try:
            request = self._validator.validate_send_request(destination, body)
        except SendValidationError as exc:
            logger.info("send_rejected_invalid", extra={"error": str(exc)})
            return SendResult.failed(SendErrorKind.VALIDATION, str(exc))

        chat_id = self._chat_id_builder.build_chat_id(request.destination)
        masked = mask_destination(request.destination)
        logger.info(
            "message_send_started",
            extra={"destination": masked, "body_length": len(request.body)},
        )

        started_at = time.perf_counter()
        try:
            sent = await self._context.connector.send(chat_id, request.body)
        except ConnectorError as exc:
            logger.error(
                "message_send_failed",
                extra={"destination": masked, "error": exc.detail},
            )
            return SendResult.failed(
                SendErrorKind.CONNECTOR_FAILURE,
                SEND_FAILED_MESSAGE,
                details=exc.detail,
            )
        except Exception as exc:
            logger.exception("message_send_failed", extra={"destination": masked})
            return SendResult.failed(
                SendErrorKind.CONNECTOR_FAILURE,
                SEND_FAILED_MESSAGE,
                details=str(exc) or type(exc).__name__,
            )

        logger.info(
            "message_sent",
            extra={
                "destination": masked,
                "latency_ms": round((time.perf_counter() - started_at) * 1000, 2),
            },
        )
        return SendResult.ok(sent.message_id)

    def _ensure_ready(self) -> None:
        if not self._context.is_ready():
            raise NotReadyError(NOT_READY_MESSAGE)
