"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: carrega .env, configura logging e
valida settings. O wiring de conector, contexto e use cases fica em
runtime.py / whatsapp_factory.py.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_session_settings,
    get_whatsapp_settings,
)
from fsm import validate_transition_map

# Nome do serviço para logs
SERVICE_NAME = "whatsapp_send_gateway"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Variáveis de ambiente a partir de .env (sem sobrescrever as existentes)
    - Logging estruturado JSON com correlation_id
    """
    load_dotenv()
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local
    (sem SECRET_KEY as rotas protegidas apenas rejeitam tudo).
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"session: {error}" for error in get_session_settings().validate())
    errors.extend(f"whatsapp: {error}" for error in get_whatsapp_settings().validate())
    errors.extend(f"fsm: {error}" for error in validate_transition_map())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
