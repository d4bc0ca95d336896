"""Exceções de domínio do gateway de envio."""

from __future__ import annotations


class GatewayError(RuntimeError):
    """Base para falhas tratadas na borda do gateway."""


class NotReadyError(GatewayError):
    """Sessão WhatsApp fora do estado READY (caller pode tentar novamente)."""


class SendValidationError(GatewayError):
    """Requisição de envio malformada (caller deve corrigir antes de reenviar)."""


class ConnectorError(GatewayError):
    """Falha na sessão externa ao conectar, enviar ou destruir.

    Args:
        message: Descrição curta da falha.
        detail: Detalhe técnico para diagnóstico (sem PII).
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail or message


class UnauthorizedError(GatewayError):
    """Credencial ausente ou inválida."""


class PairingCodeNotFoundError(GatewayError):
    """Código de pareamento solicitado antes de ser emitido."""
