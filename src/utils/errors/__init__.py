"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConnectorError,
    GatewayError,
    NotReadyError,
    PairingCodeNotFoundError,
    SendValidationError,
    UnauthorizedError,
)

__all__ = [
    "ConnectorError",
    "GatewayError",
    "NotReadyError",
    "PairingCodeNotFoundError",
    "SendValidationError",
    "UnauthorizedError",
]
