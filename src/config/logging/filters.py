"""Filters de logging para injeção de contexto e redação.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: whatsapp_send_gateway)

Campos sensíveis (segredo, código de pareamento, corpo da mensagem)
passados por engano via `extra` são substituídos por REDACTED.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTED = "[redacted]"

# Atributos de LogRecord que nunca devem chegar ao output
SENSITIVE_FIELDS = frozenset(
    {
        "secret",
        "secret_key",
        "api_key",
        "pairing_code",
        "qr_code",
        "message_body",
    }
)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Substitui campos sensíveis do `extra` por REDACTED.

    Não filtra records, apenas higieniza.
    """

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields:
            if getattr(record, name, None):
                setattr(record, name, REDACTED)
        return True
