"""Filtro de acesso por segredo compartilhado.

Rotas públicas: /health, /qr-code, / e arquivos estáticos (sob /static,
/frontend ou na raiz, quando o GET aponta para um arquivo do frontend).
Demais rotas exigem credencial igual a SECRET_KEY, buscada nesta ordem:
1. Header x-api-key
2. Query param secret
3. Campo secret do corpo JSON

Sem SECRET_KEY configurada, toda rota protegida é rejeitada.
"""

from __future__ import annotations

import hmac
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils.errors import UnauthorizedError

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
SECRET_FIELD = "secret"
PUBLIC_PATHS = frozenset({"/", "/health", "/qr-code"})
PUBLIC_PREFIXES = ("/static", "/frontend")
UNAUTHORIZED_MESSAGE = "Unauthorized: invalid or missing secret key."
STATIC_METHODS = frozenset({"GET", "HEAD"})


def is_public_path(path: str) -> bool:
    """Retorna True se o path dispensa credencial."""
    if path in PUBLIC_PATHS:
        return True
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in PUBLIC_PREFIXES)


def is_static_asset(path: str, static_dir: Path | None) -> bool:
    """Retorna True se o path da raiz resolve para um arquivo dentro de static_dir."""
    relative = path.lstrip("/")
    if static_dir is None or not relative or "\x00" in relative:
        return False
    root = static_dir.resolve()
    candidate = (root / relative).resolve()
    return candidate.is_file() and root in candidate.parents


class AccessControlMiddleware(BaseHTTPMiddleware):
    """Rejeita com 401 requests sem o segredo compartilhado.

    Args:
        app: Aplicação ASGI downstream
        secret_key: Segredo esperado (vazio = nada protegido passa)
        static_dir: Diretório do frontend servido na raiz (opcional)
    """

    def __init__(
        self,
        app: ASGIApp,
        secret_key: str = "",
        static_dir: str | Path | None = None,
    ) -> None:
        super().__init__(app)
        self._secret_key = secret_key.encode("utf-8")
        self._static_dir = Path(static_dir) if static_dir else None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_public_path(path) or self._is_public_asset(request):
            return await call_next(request)

        credential, source = await _extract_credential(request)
        try:
            self._authorize(credential)
        except UnauthorizedError as exc:
            logger.warning(
                "access_denied",
                extra={
                    "path": path,
                    "method": request.method,
                    "credential_source": source,
                    "secret_configured": bool(self._secret_key),
                },
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"success": False, "error": str(exc)},
            )
        return await call_next(request)

    def _is_public_asset(self, request: Request) -> bool:
        # Só leitura: um arquivo homônimo nunca libera POST /send-message
        if request.method not in STATIC_METHODS:
            return False
        return is_static_asset(request.url.path, self._static_dir)

    def _authorize(self, credential: str | None) -> None:
        if not self._secret_key or not credential:
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
        if not hmac.compare_digest(credential.encode("utf-8"), self._secret_key):
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)


async def _extract_credential(request: Request) -> tuple[str | None, str]:
    header_value = request.headers.get(API_KEY_HEADER)
    if header_value:
        return header_value, "header"

    query_value = request.query_params.get(SECRET_FIELD)
    if query_value:
        return query_value, "query"

    body_value = _secret_from_body(await request.body())
    if body_value:
        return body_value, "body"
    return None, "missing"


def _secret_from_body(raw_body: bytes) -> str | None:
    # Corpo inválido não é erro aqui: a rota responde 400 se passar do filtro
    if not raw_body:
        return None
    try:
        payload = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    value = payload.get(SECRET_FIELD)
    return value if isinstance(value, str) else None
