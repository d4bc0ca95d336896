"""Payload builders — construção de identificadores para o motor de sessão.

Estrutura:
- whatsapp/: chat id (número + sufixo do canal)
"""

__all__: list[str] = []
