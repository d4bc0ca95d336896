"""Validação de pedidos de envio WhatsApp.

Uso:
    from api.validators.whatsapp import SendRequestValidator

    validator = SendRequestValidator()
    request = validator.validate_send_request(number, message)
"""

from api.validators.whatsapp.send import (
    INVALID_NUMBER_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    SendRequestValidator,
    is_valid_destination,
)

__all__ = [
    "INVALID_NUMBER_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
    "SendRequestValidator",
    "is_valid_destination",
]
