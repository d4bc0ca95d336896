"""Formatter JSON do gateway.

Uma linha JSON por record, com os campos de REQUIRED_LOG_FIELDS sempre
presentes (levelname/name renomeados para level/logger) e timestamp
ISO-8601 com offset. correlation_id e service vêm do CorrelationIdFilter.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

# frozenset não tem ordem; o output segue esta
_FIELD_ORDER = ("asctime", "levelname", "name", "message", "correlation_id", "service")

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

ISO_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def create_json_formatter(datefmt: str = ISO_DATEFMT) -> JsonFormatter:
    """Cria o formatter JSON usado pelo handler raiz.

    Exemplo de linha:
        {"asctime": "2026-10-19T10:30:00+0000", "level": "INFO",
         "logger": "app.sessions.lifecycle", "message": "session_state_changed",
         "correlation_id": "", "service": "whatsapp_send_gateway",
         "from_state": "AUTHENTICATED", "to_state": "READY"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in _FIELD_ORDER),
        rename_fields=FIELD_RENAME_MAP,
        datefmt=datefmt,
        json_ensure_ascii=False,
    )
