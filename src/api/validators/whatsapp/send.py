"""Validador do corpo de POST /send-message."""

from __future__ import annotations

import re

from app.protocols.models import SendRequest
from utils.errors import SendValidationError

# DDI + número, somente dígitos (ex: 6281234567890)
DESTINATION_PATTERN = re.compile(r"^\d+$")

MISSING_FIELDS_MESSAGE = "Missing 'number' or 'message' in request body."
INVALID_NUMBER_MESSAGE = (
    "Invalid 'number' format. Should be digits only (country code + number)."
)


class SendRequestValidator:
    """Valida número e mensagem na ordem: presença, depois formato."""

    def validate_send_request(self, destination: object, body: object) -> SendRequest:
        """Valida campos brutos do corpo JSON.

        Args:
            destination: Valor de "number"
            body: Valor de "message"

        Returns:
            SendRequest normalizado

        Raises:
            SendValidationError: Campo ausente/vazio ou número fora do padrão
        """
        # Número JSON (ex: 6281234567890) vale como texto
        if isinstance(destination, int) and not isinstance(destination, bool):
            destination = str(destination)

        if not _is_filled_string(destination) or not _is_filled_string(body):
            raise SendValidationError(MISSING_FIELDS_MESSAGE)

        assert isinstance(destination, str) and isinstance(body, str)
        if not is_valid_destination(destination):
            raise SendValidationError(INVALID_NUMBER_MESSAGE)

        return SendRequest(destination=destination, body=body)


def is_valid_destination(destination: str) -> bool:
    """True se o número contém apenas dígitos ASCII."""
    return bool(DESTINATION_PATTERN.fullmatch(destination)) and destination.isascii()


def _is_filled_string(value: object) -> bool:
    return isinstance(value, str) and value != ""
