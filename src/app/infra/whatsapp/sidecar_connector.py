"""Conector da sessão via sidecar HTTP do motor WhatsApp Web.

O motor (navegador headless + WhatsApp Web, com sessão persistida em
disco) roda num processo sidecar. Este conector:

- POST /session/start   inicia (ou restaura) a sessão
- GET  /session/status  consultado em polling; mudanças viram eventos
- POST /messages        envia {"chatId", "body"} -> {"id"}
- POST /session/destroy encerra o motor

Status reportados pelo sidecar: starting, qr, authenticated,
auth_failure, ready, disconnected.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from app.protocols.session_connector import SentMessage
from fsm.types.event import LifecycleEvent
from utils.errors import ConnectorError

if TYPE_CHECKING:
    from app.protocols.session_connector import LifecycleEventSink

logger = logging.getLogger(__name__)

SECRET_HEADER = "x-sidecar-secret"


class SidecarSessionConnector:
    """Conector httpx para o sidecar do motor WhatsApp Web.

    Args:
        base_url: URL base do sidecar
        shared_secret: Segredo enviado em x-sidecar-secret (opcional)
        poll_interval_seconds: Intervalo do polling de status
        timeout_seconds: Timeout das requisições HTTP
        transport: Transport httpx alternativo (testes)
    """

    def __init__(
        self,
        base_url: str,
        *,
        shared_secret: str | None = None,
        poll_interval_seconds: float = 2.0,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._shared_secret = shared_secret
        self._poll_interval = poll_interval_seconds
        self._timeout = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._sink: LifecycleEventSink | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._last_status: str | None = None
        self._last_code: str | None = None

    def bind(self, sink: LifecycleEventSink) -> None:
        self._sink = sink

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers: dict[str, str] = {}
            if self._shared_secret:
                headers[SECRET_HEADER] = self._shared_secret
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def connect(self) -> None:
        """Inicia a sessão no sidecar e (re)inicia o polling de status."""
        await self._stop_polling()
        self._last_status = None
        self._last_code = None
        await self._post("/session/start", {}, operation="connect")
        self._poll_task = asyncio.create_task(self._poll_loop(), name="sidecar-status-poll")
        logger.info("sidecar_session_started", extra={"sidecar_url": self._base_url})

    async def send(self, chat_id: str, body: str) -> SentMessage:
        payload = await self._post(
            "/messages",
            {"chatId": chat_id, "body": body},
            operation="send",
        )
        message_id = payload.get("id")
        if isinstance(message_id, dict):
            message_id = message_id.get("_serialized")
        if not message_id:
            raise ConnectorError("send_failed", detail="sidecar response without message id")
        return SentMessage(message_id=str(message_id), chat_id=chat_id)

    async def destroy(self) -> None:
        """Encerra o polling, o motor no sidecar e o cliente HTTP."""
        await self._stop_polling()
        try:
            await self._post("/session/destroy", {}, operation="destroy")
        finally:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    # ──────────────────────────────────────────────────────────────────
    # HTTP
    # ──────────────────────────────────────────────────────────────────

    async def _post(self, path: str, body: dict[str, Any], *, operation: str) -> dict[str, Any]:
        try:
            response = await self._get_client().post(path, json=body)
        except httpx.HTTPError as exc:
            raise ConnectorError(
                f"{operation}_failed",
                detail=f"{type(exc).__name__}: {exc}",
            ) from exc
        return _decode_response(response, operation)

    async def fetch_status(self) -> dict[str, Any]:
        try:
            response = await self._get_client().get("/session/status")
        except httpx.HTTPError as exc:
            raise ConnectorError(
                "status_failed",
                detail=f"{type(exc).__name__}: {exc}",
            ) from exc
        return _decode_response(response, "status")

    # ──────────────────────────────────────────────────────────────────
    # Polling de status -> eventos
    # ──────────────────────────────────────────────────────────────────

    async def _poll_loop(self) -> None:
        while True:
            try:
                status = await self.fetch_status()
            except ConnectorError as exc:
                logger.warning(
                    "sidecar_status_unreachable",
                    extra={"error": exc.detail},
                )
                self._emit(LifecycleEvent.disconnected(reason="sidecar_unreachable"))
                return
            if not self._translate(status):
                return
            await asyncio.sleep(self._poll_interval)

    def _translate(self, status: dict[str, Any]) -> bool:
        """Converte um snapshot de status em eventos.

        Returns:
            False quando o polling deve parar (sessão desconectada).
        """
        current = str(status.get("status") or "").lower()
        code = status.get("qr")
        reason = status.get("reason")
        previous = self._last_status

        if current == "qr":
            if code and code != self._last_code:
                self._last_code = code
                self._emit(LifecycleEvent.pairing(code))
        elif current == previous:
            pass
        elif current == "authenticated":
            self._emit(LifecycleEvent.authenticated())
        elif current == "ready":
            # authenticated pode ter ocorrido entre dois polls
            if previous not in ("authenticated", "ready"):
                self._emit(LifecycleEvent.authenticated())
            self._emit(LifecycleEvent.ready())
        elif current == "auth_failure":
            self._emit(LifecycleEvent.auth_failed(reason))
        elif current == "disconnected":
            self._last_status = current
            self._emit(LifecycleEvent.disconnected(reason))
            return False
        elif current not in ("starting", ""):
            logger.warning("sidecar_status_unknown", extra={"status": current})

        self._last_status = current
        return True

    def _emit(self, event: LifecycleEvent) -> None:
        if self._sink is None:
            logger.warning("sidecar_event_dropped", extra={"event": event.type.value})
            return
        self._sink(event)

    async def _stop_polling(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


def _decode_response(response: httpx.Response, operation: str) -> dict[str, Any]:
    try:
        payload = response.json() if response.content else {}
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    if response.status_code >= 400:
        detail = payload.get("error") or payload.get("message") or response.reason_phrase
        raise ConnectorError(
            f"{operation}_failed",
            detail=f"sidecar {response.status_code}: {detail}",
        )
    return payload
