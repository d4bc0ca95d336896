"""App — coração do gateway: ciclo de vida da sessão, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (settings, logging, wiring do runtime)
- use_cases/: casos de uso (envio de mensagem)
- infra/: conectores concretos da sessão WhatsApp (sidecar, memória)
- protocols/: contratos/interfaces
- sessions/: ciclo de vida, gate de prontidão, reconexão e contexto
- shutdown/: encerramento gracioso com watchdog
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
