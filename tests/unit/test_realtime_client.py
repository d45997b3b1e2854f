from __future__ import annotations

import json
import base64
import asyncio
import contextlib

import pytest
import websockets

from s2s_gateway.client import RealtimeClient, ConnectionStatus
from s2s_gateway.errors import InvalidStateError
from s2s_gateway.state.settings import ClientSettings
from tests.unit.fakes import eventually


def _settings(url: str = "ws://127.0.0.1:9/ws/openai-realtime") -> ClientSettings:
    return ClientSettings(
        relay_url=url,
        response_timeout_s=0.5,
        sample_rate_hz=24000,
        instructions="Assist the user via voice.",
        connect_timeout_s=2.0,
    )


class _FakeRelay:
    def __init__(
        self,
        *,
        greet: bool = True,
        close_code: int | None = None,
        opening: list[dict] | None = None,
    ) -> None:
        self.greet = greet
        self.opening = opening
        self.close_code = close_code
        self.received: list[dict] = []
        self.peers: list = []

    async def handler(self, ws) -> None:
        self.peers.append(ws)
        if self.close_code is not None:
            await ws.close(self.close_code, "refused")
            return
        if self.opening is not None:
            for message in self.opening:
                await ws.send(json.dumps(message))
        elif self.greet:
            await ws.send(json.dumps({"type": "connected"}))
        with contextlib.suppress(websockets.exceptions.ConnectionClosed):
            async for raw in ws:
                self.received.append(json.loads(raw))

    async def push(self, message: dict) -> None:
        for ws in self.peers:
            await ws.send(json.dumps(message))


@contextlib.asynccontextmanager
async def _serve(relay: _FakeRelay):
    async with websockets.serve(relay.handler, "127.0.0.1", 0) as server:
        port = next(iter(server.sockets)).getsockname()[1]
        yield f"ws://127.0.0.1:{port}/ws/openai-realtime"


@pytest.mark.asyncio
async def test_operations_before_connect_raise_invalid_state() -> None:
    client = RealtimeClient(settings=_settings())

    with pytest.raises(InvalidStateError):
        await client.start_processing()
    with pytest.raises(InvalidStateError):
        await client.send_audio(b"\x00\x00")
    assert client.status is ConnectionStatus.IDLE


@pytest.mark.asyncio
async def test_full_turn_sends_item_then_response_create() -> None:
    relay = _FakeRelay()
    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        statuses: list[ConnectionStatus] = []
        client.on_status_change(statuses.append)

        await client.connect()
        assert client.is_connected
        with pytest.raises(InvalidStateError):
            await client.send_audio(b"\x01\x02")

        await client.start_processing()
        await client.send_audio(b"\x01\x02\x03\x04")
        await client.stop_processing()
        await eventually(lambda: len(relay.received) == 2)
        await client.disconnect()

    item, response = relay.received
    assert item["type"] == "conversation.item.create"
    assert item["item"]["role"] == "user"
    assert item["item"]["content"] == [
        {"type": "input_audio", "audio": base64.b64encode(b"\x01\x02\x03\x04").decode("ascii")}
    ]
    assert response == {
        "type": "response.create",
        "response": {"modalities": ["audio", "text"], "instructions": "Assist the user via voice."},
    }
    assert statuses == [
        ConnectionStatus.CONNECTED,
        ConnectionStatus.PROCESSING,
        ConnectionStatus.IDLE,
        ConnectionStatus.DISCONNECTED,
    ]
    assert not client.is_connected
    assert not client.is_processing


@pytest.mark.asyncio
async def test_assistant_audio_message_triggers_implicit_stop() -> None:
    relay = _FakeRelay()
    assistant = {
        "type": "message",
        "message": {"role": "assistant", "content": [{"type": "audio", "audio": "AAA="}]},
    }
    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        seen: list[dict] = []
        client.on_message(seen.append)

        await client.connect()
        await client.start_processing()
        await relay.push(assistant)

        await eventually(lambda: assistant in seen)
        await eventually(lambda: any(m["type"] == "response.create" for m in relay.received))
        assert client.status is ConnectionStatus.IDLE
        assert not client.is_processing
        await client.disconnect()

    assert seen[0] == {"type": "connected"}


@pytest.mark.asyncio
async def test_callbacks_are_last_registration_wins_and_may_be_async() -> None:
    relay = _FakeRelay()
    first: list[dict] = []
    second: list[dict] = []

    async def _async_sink(msg: dict) -> None:
        second.append(msg)

    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        client.on_message(first.append)
        client.on_message(_async_sink)

        await client.connect()
        await relay.push({"type": "response.audio.delta", "delta": "AA=="})
        await eventually(lambda: len(second) == 2)
        await client.disconnect()

    assert first == []
    assert second[1] == {"type": "response.audio.delta", "delta": "AA=="}


@pytest.mark.asyncio
async def test_second_connect_raises_invalid_state() -> None:
    relay = _FakeRelay()
    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        await client.connect()
        with pytest.raises(InvalidStateError):
            await client.connect()
        await client.disconnect()


@pytest.mark.asyncio
async def test_relay_refusal_fails_connect_and_reports_error() -> None:
    relay = _FakeRelay(close_code=1011)
    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        errors: list[BaseException] = []
        statuses: list[ConnectionStatus] = []
        client.on_error(errors.append)
        client.on_status_change(statuses.append)

        with pytest.raises(websockets.exceptions.ConnectionClosedError):
            await client.connect()

    assert len(errors) == 1
    assert statuses == [ConnectionStatus.ERROR, ConnectionStatus.DISCONNECTED]
    assert not client.is_connected


@pytest.mark.asyncio
async def test_relay_error_before_connected_fails_connect_without_waiting() -> None:
    relay = _FakeRelay(opening=[{"type": "error", "message": "upstream refused"}, {"type": "disconnected"}])
    async with _serve(relay) as url:
        client = RealtimeClient(url, settings=_settings())
        errors: list[BaseException] = []
        client.on_error(errors.append)

        with pytest.raises(ConnectionError, match="upstream refused"):
            await asyncio.wait_for(client.connect(), timeout=1.0)

    assert len(errors) == 1
    assert client.status is ConnectionStatus.DISCONNECTED
    assert not client.is_connected


@pytest.mark.asyncio
async def test_connect_times_out_when_relay_never_confirms() -> None:
    relay = _FakeRelay(greet=False)
    async with _serve(relay) as url:
        settings = ClientSettings(
            relay_url=url,
            response_timeout_s=0.5,
            sample_rate_hz=24000,
            instructions="x",
            connect_timeout_s=0.1,
        )
        client = RealtimeClient(settings=settings)
        with pytest.raises(asyncio.TimeoutError):
            await client.connect()

    assert client.status is ConnectionStatus.DISCONNECTED
    assert not client.is_connected
