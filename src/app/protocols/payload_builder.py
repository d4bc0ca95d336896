"""Protocolos de construção de identificadores da rede."""

from __future__ import annotations

from typing import Protocol


class ChatIdBuilderProtocol(Protocol):
    """Contrato mínimo para derivar o chat id a partir do número."""

    def build_chat_id(self, destination: str) -> str: ...
