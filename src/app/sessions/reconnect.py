"""Políticas de reconexão da sessão externa.

A reconexão é uma aresta explícita da FSM (DISCONNECTED -> UNPAIRED);
a política decide apenas quanto esperar e quando desistir.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from config.settings.base.session import SessionSettings


class ReconnectPolicy(Protocol):
    """Contrato de política de reconexão."""

    def delay_for(self, attempt: int) -> float | None:
        """Retorna a espera (s) antes da tentativa `attempt` (1-based).

        None indica que não há mais tentativas.
        """
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoffPolicy:
    """Backoff exponencial limitado.

    Attributes:
        initial_delay_seconds: Espera antes da primeira tentativa
        max_delay_seconds: Teto da espera
        multiplier: Fator entre tentativas consecutivas
        max_attempts: Máximo de tentativas seguidas (0 = ilimitado)
    """

    initial_delay_seconds: float = 1.0
    max_delay_seconds: float = 60.0
    multiplier: float = 2.0
    max_attempts: int = 0

    def delay_for(self, attempt: int) -> float | None:
        if attempt < 1:
            raise ValueError(f"attempt deve ser >= 1, recebido: {attempt}")
        if self.max_attempts and attempt > self.max_attempts:
            return None
        delay = self.initial_delay_seconds
        if self.multiplier > 1 and delay > 0:
            # Cresce só até o teto; tentativa alta não estoura float
            for _ in range(attempt - 1):
                delay *= self.multiplier
                if delay >= self.max_delay_seconds:
                    break
        elif attempt > 1:
            delay *= self.multiplier ** (attempt - 1)
        return min(delay, self.max_delay_seconds)


@dataclass(frozen=True, slots=True)
class ImmediatePolicy:
    """Reconecta imediatamente, sem limite (comportamento legado)."""

    def delay_for(self, attempt: int) -> float | None:
        return 0.0


def policy_from_settings(settings: SessionSettings) -> ExponentialBackoffPolicy:
    """Cria a política padrão a partir de SessionSettings."""
    return ExponentialBackoffPolicy(
        initial_delay_seconds=settings.reconnect_initial_delay_seconds,
        max_delay_seconds=settings.reconnect_max_delay_seconds,
        multiplier=settings.reconnect_multiplier,
        max_attempts=settings.reconnect_max_attempts,
    )
