"""Relay session between one browser WebSocket and one upstream realtime socket."""

from __future__ import annotations

import uuid
import asyncio
import logging
import contextlib
from typing import Any

import orjson
from fastapi import WebSocket
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, ConnectionClosedError

from s2s_gateway.state import RelayState
from s2s_gateway.errors import UpstreamConfigError
from s2s_gateway.state.settings import UpstreamSettings
from s2s_gateway.handlers.websocket.parser import parse_client_message
from s2s_gateway.handlers.websocket.errors import safe_send_json
from s2s_gateway.config.websocket import (
    WS_QUEUED_NOTICE,
    WS_CLOSE_CONFIG_REASON,
    WS_ERROR_INVALID_MESSAGE,
    WS_CLOSE_INTERNAL_ERROR_CODE,
)

from .upstream import UpstreamConnector, connect_upstream
from .protocol import MSG_QUEUED, MSG_CONNECTED, MSG_DISCONNECTED, error_message, status_message

logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _frame_text(message: dict[str, Any]) -> str | None:
    """Text of a client frame; binary frames carry UTF-8 JSON."""
    text = message.get("text")
    if text is not None:
        return text
    try:
        return (message.get("bytes") or b"").decode("utf-8")
    except UnicodeDecodeError:
        return None


class RelaySession:
    """Bridge one client connection to exactly one upstream connection.

    The upstream link is opened in a background task as soon as the session
    starts. Client frames that arrive before it is ready are queued and acked
    with ``queued``; once it opens the client gets ``connected`` and the queue
    is flushed in arrival order. Upstream frames are forwarded unchanged.
    """

    def __init__(
        self,
        *,
        client: WebSocket,
        upstream_settings: UpstreamSettings,
        connector: UpstreamConnector = connect_upstream,
        session_id: str | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._settings = upstream_settings
        self._connector = connector
        self._state = RelayState(session_id=session_id or uuid.uuid4().hex[:12])
        self._log = log or logger

        self._upstream: Any | None = None
        self._upstream_task: asyncio.Task | None = None

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def upstream_ready(self) -> bool:
        return self._state.upstream_ready

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._state.pending)

    def start(self) -> asyncio.Task:
        if self._upstream_task is None:
            self._upstream_task = asyncio.create_task(self._run_upstream())
        return self._upstream_task

    async def run(self) -> None:
        """Pump client frames until the client goes away, then tear down."""
        self.start()
        try:
            while True:
                message = await self._client.receive()
                if message["type"] == "websocket.disconnect":
                    self._log.info("relay %s: client closed", self.session_id)
                    break
                raw = _frame_text(message)
                if raw is None:
                    self._log.warning("relay %s: rejecting non UTF-8 binary frame", self.session_id)
                    await safe_send_json(self._client, error_message(WS_ERROR_INVALID_MESSAGE))
                    continue
                await self.handle_client_message(raw)
        except Exception:
            self._log.warning("relay %s: client socket error", self.session_id, exc_info=True)
        finally:
            await self.close()

    async def handle_client_message(self, raw: str) -> None:
        try:
            parse_client_message(raw)
        except ValueError as exc:
            self._log.warning("relay %s: rejecting client frame: %s", self.session_id, exc)
            await safe_send_json(self._client, error_message(WS_ERROR_INVALID_MESSAGE))
            return

        if self._state.upstream_ready and self._upstream is not None:
            try:
                await self._upstream.send(raw)
            except ConnectionClosed as exc:
                # The upstream reader reports the close to the client.
                self._log.warning("relay %s: upstream closed while forwarding: %s", self.session_id, exc)
            return

        self._log.info("relay %s: upstream not ready, queuing message", self.session_id)
        self._state.pending.append(raw)
        await safe_send_json(self._client, status_message(MSG_QUEUED, message=WS_QUEUED_NOTICE))

    async def close(self) -> None:
        self._state.upstream_ready = False
        task = self._upstream_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        upstream = self._upstream
        self._upstream = None
        if upstream is not None:
            with contextlib.suppress(Exception):
                await upstream.close()
            self._log.info("relay %s: upstream closed", self.session_id)

    async def _run_upstream(self) -> None:
        try:
            upstream = await self._connector(self._settings)
        except UpstreamConfigError as exc:
            self._log.error("relay %s: %s", self.session_id, exc)
            await safe_send_json(self._client, error_message(str(exc)))
            with contextlib.suppress(Exception):
                await self._client.close(code=WS_CLOSE_INTERNAL_ERROR_CODE, reason=WS_CLOSE_CONFIG_REASON)
            return
        except Exception as exc:
            self._log.error("relay %s: failed to connect upstream: %s", self.session_id, _describe(exc))
            await self._on_upstream_error(exc)
            await self._on_upstream_close()
            return

        self._upstream = upstream
        try:
            await self._on_upstream_open(upstream)
            async for raw in upstream:
                await self._on_upstream_message(raw)
        except ConnectionClosedError as exc:
            await self._on_upstream_error(exc)
        except ConnectionClosedOK:
            self._log.debug("relay %s: upstream closed during flush", self.session_id)
        await self._on_upstream_close()

    async def _on_upstream_open(self, upstream: Any) -> None:
        self._log.info("relay %s: connected to upstream realtime API", self.session_id)
        await safe_send_json(self._client, status_message(MSG_CONNECTED))

        # Frames queued during the flush land on the same deque, so order holds.
        pending = self._state.pending
        while pending:
            message = pending.popleft()
            self._log.debug("relay %s: sending pending message upstream", self.session_id)
            await upstream.send(message)
        self._state.upstream_ready = True

    async def _on_upstream_message(self, raw: str | bytes) -> None:
        try:
            message = orjson.loads(raw)
        except orjson.JSONDecodeError:
            self._log.warning("relay %s: dropping unparseable upstream frame", self.session_id)
            return
        await safe_send_json(self._client, message)

    async def _on_upstream_error(self, exc: BaseException) -> None:
        self._state.upstream_ready = False
        self._log.error("relay %s: upstream error: %s", self.session_id, _describe(exc))
        await safe_send_json(self._client, error_message(_describe(exc)))

    async def _on_upstream_close(self) -> None:
        self._state.upstream_ready = False
        self._log.info("relay %s: upstream socket closed", self.session_id)
        await safe_send_json(self._client, status_message(MSG_DISCONNECTED))


__all__ = ["RelaySession"]
