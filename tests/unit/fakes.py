"""In-memory WebSocket doubles and settings builders for unit tests."""

from __future__ import annotations

import json
import asyncio
from typing import Any

from s2s_gateway.state.settings import (
    AppSettings,
    ClientSettings,
    ServerSettings,
    ModularSettings,
    UpstreamSettings,
)

_CLOSED = object()


def upstream_settings(api_key: str = "sk-test") -> UpstreamSettings:
    return UpstreamSettings(
        api_key=api_key,
        url="wss://upstream.invalid/v1/realtime",
        model="test-model",
        beta_header="realtime=v1",
        connect_timeout_s=1.0,
    )


class FakeClientSocket:
    """Browser side: frames pushed with ``feed`` are returned by ``receive``."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    def feed(self, raw: str | bytes) -> None:
        self._inbox.put_nowait(raw)

    def hang_up(self) -> None:
        self._inbox.put_nowait(_CLOSED)

    async def receive(self) -> dict[str, Any]:
        item = await self._inbox.get()
        if item is _CLOSED:
            return {"type": "websocket.disconnect", "code": 1000}
        if isinstance(item, bytes):
            return {"type": "websocket.receive", "bytes": item}
        return {"type": "websocket.receive", "text": item}

    async def send_text(self, text: str) -> None:
        self.sent.append(text)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code
        self.close_reason = reason

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(raw) for raw in self.sent]

    @property
    def types(self) -> list[str]:
        return [msg.get("type") for msg in self.messages]


class FakeUpstream:
    """Upstream side: iterates frames pushed with ``push`` until closed."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self._inbox: asyncio.Queue[Any] = asyncio.Queue()

    def push(self, item: str | BaseException) -> None:
        self._inbox.put_nowait(item)

    def finish(self) -> None:
        self._inbox.put_nowait(_CLOSED)

    async def send(self, message: str) -> None:
        self.sent.append(message)

    async def close(self) -> None:
        self.closed = True
        self._inbox.put_nowait(_CLOSED)

    def __aiter__(self) -> FakeUpstream:
        return self

    async def __anext__(self) -> str:
        item = await self._inbox.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            raise item
        return item


def gated_connector(upstream: Any, gate: asyncio.Event):
    async def _connect(settings: UpstreamSettings) -> Any:
        await gate.wait()
        return upstream

    return _connect


async def eventually(predicate, *, timeout: float = 1.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


def app_settings(api_key: str = "") -> AppSettings:
    return AppSettings(
        upstream=upstream_settings(api_key=api_key),
        modular=ModularSettings(
            api_key=api_key,
            base_url="https://openai.invalid/v1",
            request_timeout_s=1.0,
            parts_timeout_s=1.0,
            stt_model="whisper-1",
            llm_model="gpt-4o",
            tts_model="tts-1",
            tts_voice="nova",
        ),
        client=ClientSettings(
            relay_url="ws://127.0.0.1:3001/ws/openai-realtime",
            response_timeout_s=0.5,
            sample_rate_hz=24000,
            instructions="Assist the user via voice.",
            connect_timeout_s=1.0,
        ),
        server=ServerSettings(
            host="127.0.0.1",
            port=3001,
            ws_endpoint_path="/ws/openai-realtime",
            cors_allow_origins=("*",),
        ),
    )
