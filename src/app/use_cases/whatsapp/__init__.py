"""Use cases específicos de WhatsApp."""

from .send_message import (
    NOT_READY_MESSAGE,
    SEND_FAILED_MESSAGE,
    SendMessageUseCase,
)

__all__ = [
    "NOT_READY_MESSAGE",
    "SEND_FAILED_MESSAGE",
    "SendMessageUseCase",
]
