"""Asyncio client for the realtime relay endpoint."""

from __future__ import annotations

import json
import asyncio
import inspect
import logging
import contextlib
from typing import Any
from collections.abc import Callable

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedError

from s2s_gateway.errors import InvalidStateError
from s2s_gateway.state.settings import ClientSettings
from s2s_gateway.config.upstream import REALTIME_MAX_MESSAGE_BYTES
from s2s_gateway.runtime.settings_loader import load_client_settings
from s2s_gateway.realtime.protocol import (
    MSG_ERROR,
    MSG_QUEUED,
    MSG_CONNECTED,
    MSG_DISCONNECTED,
    response_create,
    input_text_part,
    input_audio_part,
    conversation_item_create,
    is_assistant_audio_message,
)

from .status import ConnectionStatus

logger = logging.getLogger(__name__)

MessageCallback = Callable[[Any], Any]
ErrorCallback = Callable[[BaseException], Any]
StatusCallback = Callable[[ConnectionStatus], Any]


class RealtimeClient:
    """Drive one relay connection: audio in, assistant messages out.

    Lifecycle is ``connect`` -> ``start_processing`` -> ``send_audio``* ->
    ``stop_processing`` -> ``disconnect``. Each observer slot holds one
    callback; registering again replaces it. Callbacks may be plain functions
    or coroutine functions.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: ClientSettings | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or load_client_settings()
        self.url = url or self._settings.relay_url
        self._log = log or logger

        self.is_connected = False
        self.is_processing = False
        self.status = ConnectionStatus.IDLE

        self._ws: websockets.ClientConnection | None = None
        self._recv_task: asyncio.Task | None = None
        self._connected_waiter: asyncio.Future | None = None
        self._connect_attempted = False

        self._on_message: MessageCallback | None = None
        self._on_error: ErrorCallback | None = None
        self._on_status_change: StatusCallback | None = None

    # ---- observers ----

    def on_message(self, callback: MessageCallback) -> MessageCallback:
        self._on_message = callback
        return callback

    def on_error(self, callback: ErrorCallback) -> ErrorCallback:
        self._on_error = callback
        return callback

    def on_status_change(self, callback: StatusCallback) -> StatusCallback:
        self._on_status_change = callback
        return callback

    # ---- lifecycle ----

    async def connect(self) -> None:
        """Open the relay connection and wait until the upstream link is live."""
        if self._connect_attempted:
            raise InvalidStateError("connect() may only be called once per client")
        self._connect_attempted = True

        loop = asyncio.get_running_loop()
        self._connected_waiter = loop.create_future()
        try:
            ws = await websockets.connect(
                self.url,
                open_timeout=self._settings.connect_timeout_s,
                max_size=REALTIME_MAX_MESSAGE_BYTES,
            )
        except Exception as exc:
            self._log.error("relay connection to %s failed: %s", self.url, exc)
            await self._report_error(exc)
            raise

        self._ws = ws
        self.is_connected = True
        self._recv_task = asyncio.create_task(self._recv_loop(ws))
        self._log.info("connected to relay %s", self.url)

        try:
            await asyncio.wait_for(self._connected_waiter, timeout=self._settings.connect_timeout_s)
        except TimeoutError as exc:
            self._log.error("relay did not report an upstream connection within %.1fs", self._settings.connect_timeout_s)
            await self._report_error(exc)
            await self.disconnect()
            raise
        except Exception:
            await self.disconnect()
            raise

    async def start_processing(self) -> None:
        if not self.is_connected:
            raise InvalidStateError("WebSocket not connected")
        self.is_processing = True
        await self._set_status(ConnectionStatus.PROCESSING)

    async def send_audio(self, pcm: bytes) -> None:
        """Send one PCM16 chunk as a user ``conversation.item.create``."""
        await self._send_user_content(input_audio_part(pcm), size=len(pcm))

    async def send_text(self, text: str) -> None:
        await self._send_user_content(input_text_part(text), size=len(text))

    async def stop_processing(self) -> None:
        """Ask for a response; always returns to ``idle`` even if the send fails."""
        try:
            ws = self._ws
            if ws is not None and self.is_connected:
                await ws.send(json.dumps(response_create(self._settings.instructions)))
                self._log.debug("sent response.create")
        finally:
            self.is_processing = False
            await self._set_status(ConnectionStatus.IDLE)

    async def disconnect(self) -> None:
        ws, self._ws = self._ws, None
        task, self._recv_task = self._recv_task, None

        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task

        self.is_connected = False
        self.is_processing = False
        self._fail_connect_waiter(ConnectionError("client disconnected"))
        if ws is not None:
            await self._set_status(ConnectionStatus.DISCONNECTED)

    async def __aenter__(self) -> RealtimeClient:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    # ---- internals ----

    async def _send_user_content(self, part: dict[str, Any], *, size: int) -> None:
        ws = self._ws
        if ws is None or not (self.is_connected and self.is_processing):
            raise InvalidStateError("WebSocket not connected or not processing")
        await ws.send(json.dumps(conversation_item_create([part])))
        self._log.debug("sent %s part (%d)", part.get("type"), size)

    async def _recv_loop(self, ws: websockets.ClientConnection) -> None:
        error: BaseException | None = None
        try:
            async for raw in ws:
                await self._handle_raw(raw)
        except ConnectionClosedError as exc:
            error = exc
        except ConnectionClosed:
            pass

        waiter = self._connected_waiter
        if error is None and waiter is not None and not waiter.done():
            error = ConnectionError("relay closed before the upstream connection opened")
        if error is not None:
            self._log.warning("relay connection closed abnormally: %s", error)
            await self._report_error(error)
            self._fail_connect_waiter(error)

        if self._ws is ws:
            self._ws = None
            self._recv_task = None
            self.is_connected = False
            self.is_processing = False
            await self._set_status(ConnectionStatus.DISCONNECTED)

    async def _handle_raw(self, raw: str | bytes) -> None:
        try:
            msg = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            self._log.warning("dropping unparseable relay frame")
            return

        msg_type = msg.get("type") if isinstance(msg, dict) else None
        if msg_type == MSG_CONNECTED:
            waiter = self._connected_waiter
            if waiter is not None and not waiter.done():
                waiter.set_result(None)
            await self._set_status(ConnectionStatus.CONNECTED)
        elif msg_type == MSG_QUEUED:
            self._log.info("relay queued message: %s", msg.get("message", ""))
        elif msg_type == MSG_ERROR and self._connect_pending():
            await self._abort_connect(ConnectionError(msg.get("message") or "upstream connection failed"))
        elif msg_type == MSG_DISCONNECTED:
            if self._connect_pending():
                await self._abort_connect(ConnectionError("upstream disconnected before the relay connected"))
            await self._set_status(ConnectionStatus.DISCONNECTED)
        elif isinstance(msg, dict) and is_assistant_audio_message(msg):
            self._log.debug("assistant audio message received; stopping processing")
            try:
                await self.stop_processing()
            except Exception as exc:
                self._log.warning("implicit stop failed: %s", exc)
                await self._report_error(exc)

        await self._emit(self._on_message, msg)

    def _connect_pending(self) -> bool:
        waiter = self._connected_waiter
        return waiter is not None and not waiter.done()

    async def _abort_connect(self, exc: ConnectionError) -> None:
        self._log.error("relay reported a failed upstream connection: %s", exc)
        await self._report_error(exc)
        self._fail_connect_waiter(exc)

    def _fail_connect_waiter(self, exc: BaseException) -> None:
        waiter = self._connected_waiter
        if waiter is not None and not waiter.done():
            waiter.set_exception(exc)

    async def _report_error(self, exc: BaseException) -> None:
        await self._set_status(ConnectionStatus.ERROR)
        await self._emit(self._on_error, exc)

    async def _set_status(self, status: ConnectionStatus) -> None:
        self.status = status
        await self._emit(self._on_status_change, status)

    async def _emit(self, callback: Callable[[Any], Any] | None, arg: Any) -> None:
        if callback is None:
            return
        try:
            result = callback(arg)
            if inspect.isawaitable(result):
                await result
        except Exception:
            self._log.exception("realtime client callback failed")


__all__ = ["RealtimeClient"]
