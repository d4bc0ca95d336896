"""Validators — validação de pedidos recebidos pela API.

Estrutura:
- whatsapp/: pedidos de envio de mensagem
"""

__all__: list[str] = []
