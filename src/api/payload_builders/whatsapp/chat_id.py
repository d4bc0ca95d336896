"""Construção do identificador de chat (chat id) da rede WhatsApp."""

from __future__ import annotations

from config.settings.whatsapp import CHAT_ID_SUFFIX


class ChatIdBuilder:
    """Anexa o sufixo fixo da rede ao número.

    Exemplo:
        ChatIdBuilder().build_chat_id("6281234567890") -> "6281234567890@c.us"
    """

    def __init__(self, suffix: str = CHAT_ID_SUFFIX) -> None:
        self._suffix = suffix

    @property
    def suffix(self) -> str:
        return self._suffix

    def build_chat_id(self, destination: str) -> str:
        return f"{destination}{self._suffix}"
