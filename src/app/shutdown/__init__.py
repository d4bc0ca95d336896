"""Encerramento gracioso do processo."""

from app.shutdown.orchestrator import (
    DEFAULT_SHUTDOWN_TIMEOUT_SECONDS,
    EXIT_FORCED,
    EXIT_OK,
    ShutdownOrchestrator,
)

__all__ = [
    "DEFAULT_SHUTDOWN_TIMEOUT_SECONDS",
    "EXIT_FORCED",
    "EXIT_OK",
    "ShutdownOrchestrator",
]
