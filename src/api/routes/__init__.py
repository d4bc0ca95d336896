"""Rotas HTTP da API.

Responsabilidades:
- Definir endpoints HTTP (envio, código de pareamento, health)
- Leitura inicial do request (headers, JSON)
- Delegação para use cases / contexto da sessão
- Respostas HTTP apropriadas

Estrutura:
- routes/whatsapp/: /send-message e /qr-code
- routes/health/: /health

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
