"""Protocolos de validação do pedido de envio."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import SendRequest


class SendRequestValidatorProtocol(Protocol):
    """Contrato mínimo para validar o corpo bruto de um envio.

    Levanta SendValidationError em caso de entrada inválida.
    """

    def validate_send_request(self, destination: object, body: object) -> SendRequest: ...
