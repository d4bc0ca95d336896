"""Readiness Gate — predicado de prontidão consultado pela API."""

from __future__ import annotations

import threading


class ReadinessGate:
    """Flag booleana de prontidão da sessão.

    Escrita apenas pelo LifecycleStateMachine (set_ready) e pelo
    ShutdownOrchestrator (force_not_ready). Leitura sem efeitos colaterais.

    Após force_not_ready() o gate fica travado em False, mesmo que um
    evento ready chegue durante o shutdown.
    """

    __slots__ = ("_latched", "_lock", "_ready")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = False
        self._latched = False

    def is_ready(self) -> bool:
        """Retorna True sse a sessão está READY e não há shutdown em curso."""
        with self._lock:
            return self._ready and not self._latched

    def set_ready(self, ready: bool) -> None:
        with self._lock:
            self._ready = ready

    def force_not_ready(self) -> None:
        """Trava o gate em não-pronto (usado no início do shutdown)."""
        with self._lock:
            self._ready = False
            self._latched = True

    @property
    def is_latched(self) -> bool:
        with self._lock:
            return self._latched
