"""correlation_id por requisição de envio.

Cada POST /send-message roda dentro de um escopo com correlation_id
próprio, herdado do header `x-correlation-id` quando válido. O valor é
injetado nos logs pelo CorrelationIdFilter e devolvido no header da
resposta.

Uso:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as cid:
        ...
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

CORRELATION_HEADER = "x-correlation-id"
MAX_CORRELATION_ID_LENGTH = 64

_ALLOWED = re.compile(r"^[A-Za-z0-9._:-]+$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio fora de requisição)."""
    return _correlation_id.get()


def normalize_correlation_id(candidate: str | None) -> str:
    """Aceita o id do cliente se for curto e sem caracteres de controle.

    Valores ausentes, longos demais ou com caracteres fora de
    [A-Za-z0-9._:-] são substituídos por um UUID novo.
    """
    if candidate:
        value = candidate.strip()
        if value and len(value) <= MAX_CORRELATION_ID_LENGTH and _ALLOWED.match(value):
            return value
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id normalizado no contexto atual."""
    return _correlation_id.set(normalize_correlation_id(correlation_id))


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(candidate: str | None = None) -> Iterator[str]:
    """Escopo com correlation_id ativo; restaura o anterior na saída."""
    token = set_correlation_id(candidate)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
