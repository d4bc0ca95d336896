"""Observabilidade — correlation_id para logs estruturados.

Uso:
    from app.observability import correlation_scope, get_correlation_id
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    get_correlation_id,
    normalize_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "CORRELATION_HEADER",
    "correlation_scope",
    "get_correlation_id",
    "normalize_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
