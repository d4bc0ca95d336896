"""Protocolos e contratos do core da aplicação."""

from .models import SendErrorKind, SendRequest, SendResult
from .payload_builder import ChatIdBuilderProtocol
from .session_connector import SentMessage, SessionConnectorProtocol
from .validator import SendRequestValidatorProtocol

__all__ = [
    "ChatIdBuilderProtocol",
    "SendErrorKind",
    "SendRequest",
    "SendRequestValidatorProtocol",
    "SendResult",
    "SentMessage",
    "SessionConnectorProtocol",
]
