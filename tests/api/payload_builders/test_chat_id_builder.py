"""Testes para ChatIdBuilder."""

from __future__ import annotations

from api.payload_builders.whatsapp import ChatIdBuilder


def test_default_suffix_is_individual_chat() -> None:
    builder = ChatIdBuilder()
    assert builder.suffix == "@c.us"
    assert builder.build_chat_id("6281234567890") == "6281234567890@c.us"


def test_custom_suffix() -> None:
    assert ChatIdBuilder(suffix="@g.us").build_chat_id("120363") == "120363@g.us"
