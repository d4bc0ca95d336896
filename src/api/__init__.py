"""API — camada de borda HTTP do gateway.

Responsabilidades:
- Receber requests HTTP (envio, código de pareamento, health)
- Filtrar acesso pelo segredo compartilhado
- Validar payloads de envio
- Construir identificadores de chat para o motor

Subpastas:
- middleware/: filtro de acesso (ASGI)
- payload_builders/: construção do chat id
- validators/: validação de pedidos de envio
- routes/: endpoints HTTP (health, whatsapp)

NÃO PODE conter: FSM, regras de sessão, orquestração de use cases.
"""
