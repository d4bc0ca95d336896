"""Entrypoint do WhatsApp Send Gateway.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção, com shutdown orquestrado):
    python -m app.app

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

import asyncio
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from api.middleware import AccessControlMiddleware
from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.runtime import build_runtime
from app.server import serve
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap.runtime import GatewayRuntime

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

INDEX_FILE = "index.html"
STATIC_MOUNTS = ("/static", "/frontend")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicia o ciclo de vida da sessão (connect em background)

    Shutdown:
    - Para o consumidor de eventos e reconexões pendentes
    - Destrói a sessão quando o shutdown não é orquestrado (uvicorn puro)
    """
    runtime: GatewayRuntime = app.state.runtime
    service = runtime.base_settings.service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()
    await runtime.context.lifecycle.start()

    yield

    logger.info("app_shutting_down", extra={"service": service, **runtime.context.summary()})
    await runtime.context.lifecycle.stop()
    if not runtime.shutdown.is_shutting_down:
        await runtime.shutdown.destroy_session()


def create_app(runtime: GatewayRuntime | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        runtime: Runtime já montado (default: a partir das settings)

    Returns:
        Aplicação FastAPI configurada.
    """
    runtime = runtime or build_runtime()

    fastapi_app = FastAPI(
        title="WhatsApp Send Gateway",
        description="Envio de mensagens WhatsApp via HTTP sobre uma sessão pareada",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.runtime = runtime

    fastapi_app.add_middleware(
        AccessControlMiddleware,
        secret_key=runtime.whatsapp_settings.secret_key,
        static_dir=runtime.base_settings.static_dir,
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())
    _mount_frontend(fastapi_app, Path(runtime.base_settings.static_dir))

    logger.info(
        "app_configured",
        extra={
            "service": runtime.base_settings.service_name,
            "connector_backend": runtime.whatsapp_settings.connector_backend,
        },
    )

    return fastapi_app


def _mount_frontend(fastapi_app: FastAPI, static_dir: Path) -> None:
    index_path = static_dir / INDEX_FILE

    @fastapi_app.get("/", include_in_schema=False, response_model=None)
    async def index() -> FileResponse | JSONResponse:
        if not index_path.is_file():
            return JSONResponse(
                content={"success": False, "error": "Frontend not available."},
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return FileResponse(index_path)

    if not static_dir.is_dir():
        logger.warning("static_dir_missing", extra={"static_dir": str(static_dir)})
        return

    for prefix in STATIC_MOUNTS:
        fastapi_app.mount(prefix, StaticFiles(directory=static_dir), name=prefix.strip("/"))
    # Raiz por último: rotas da API e / têm precedência
    fastapi_app.mount("/", StaticFiles(directory=static_dir, html=True), name="frontend_root")


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Serve a aplicação com shutdown orquestrado por sinais."""
    runtime: GatewayRuntime = app.state.runtime
    settings = runtime.base_settings
    logger.info(
        "server_starting",
        extra={"host": settings.host, "port": settings.port},
    )
    sys.exit(asyncio.run(serve(app, runtime, host=settings.host, port=settings.port)))


if __name__ == "__main__":
    main()
