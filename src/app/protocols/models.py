"""Modelos de envio compartilhados entre API e use cases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SendErrorKind(StrEnum):
    """Categorias de falha de envio (mapeadas para status HTTP na rota)."""

    NOT_READY = "not_ready"
    VALIDATION = "validation"
    CONNECTOR_FAILURE = "connector_failure"


@dataclass(frozen=True, slots=True)
class SendRequest:
    """Pedido de envio já validado.

    Attributes:
        destination: Número apenas com dígitos (DDI + número)
        body: Texto da mensagem
    """

    destination: str
    body: str


@dataclass(frozen=True, slots=True)
class SendResult:
    """Resultado de um envio.

    Attributes:
        success: Se a mensagem foi aceita pelo motor
        message_id: Identificador da mensagem (sucesso)
        error_kind: Categoria da falha (erro)
        error_message: Mensagem de erro para o caller
        details: Detalhe técnico da falha do conector
    """

    success: bool
    message_id: str | None = None
    error_kind: SendErrorKind | None = None
    error_message: str | None = None
    details: str | None = None

    def __post_init__(self) -> None:
        if self.success and not self.message_id:
            raise ValueError("Envio bem-sucedido deve incluir message_id")
        if not self.success and self.error_kind is None:
            raise ValueError("Envio com falha deve incluir error_kind")

    @classmethod
    def ok(cls, message_id: str) -> SendResult:
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(
        cls,
        kind: SendErrorKind,
        message: str,
        details: str | None = None,
    ) -> SendResult:
        return cls(success=False, error_kind=kind, error_message=message, details=details)
