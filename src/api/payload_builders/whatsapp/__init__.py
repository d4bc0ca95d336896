"""Builders para o motor WhatsApp Web."""

from api.payload_builders.whatsapp.chat_id import ChatIdBuilder

__all__ = ["ChatIdBuilder"]
