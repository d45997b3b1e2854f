"""Collect one realtime response into a WAV payload and transcript."""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

from s2s_gateway.audio import AudioAccumulator
from s2s_gateway.config.client import (
    REALTIME_DONE_TRANSCRIPT,
    REALTIME_TIMEOUT_TRANSCRIPT,
    DEFAULT_REALTIME_SAMPLE_RATE_HZ,
    DEFAULT_REALTIME_RESPONSE_TIMEOUT_S,
)
from s2s_gateway.realtime.protocol import (
    MSG_ERROR,
    MSG_RESPONSE_AUDIO_DONE,
    MSG_RESPONSE_AUDIO_DELTA,
    MSG_RESPONSE_AUDIO_TRANSCRIPT_DELTA,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RealtimeResult:
    audio_wav: bytes | None
    transcript: str
    timed_out: bool
    processing_time_ms: float
    error: str | None = None


class ResponseCollector:
    """Message callback that turns streamed assistant output into a result.

    Register ``handle_message`` as the client's message callback, call
    ``arm()`` once the request is sent, then ``await wait()``. If
    ``response.audio.done`` never arrives the fallback timer resolves the
    result as timed out with no audio.
    """

    def __init__(
        self,
        *,
        sample_rate: int = DEFAULT_REALTIME_SAMPLE_RATE_HZ,
        timeout_s: float = DEFAULT_REALTIME_RESPONSE_TIMEOUT_S,
        clock: Callable[[], float] = time.perf_counter,
        log: logging.Logger | None = None,
    ) -> None:
        self._accumulator = AudioAccumulator(sample_rate=sample_rate)
        self._transcript: list[str] = []
        self._timeout_s = timeout_s
        self._clock = clock
        self._log = log or logger
        self._started_at = clock()
        self._timer: asyncio.TimerHandle | None = None
        self._result: asyncio.Future[RealtimeResult] | None = None

    @property
    def done(self) -> bool:
        return self._result is not None and self._result.done()

    @property
    def transcript(self) -> str:
        return "".join(self._transcript)

    def arm(self) -> None:
        """Start (or restart) the fallback timer."""
        loop = asyncio.get_running_loop()
        self._ensure_future()
        self._cancel_timer()
        if not self.done:
            self._timer = loop.call_later(self._timeout_s, self._on_timeout)

    def handle_message(self, msg: Any) -> None:
        if not isinstance(msg, dict) or self.done:
            return
        msg_type = msg.get("type")

        if msg_type == MSG_RESPONSE_AUDIO_DELTA:
            delta = msg.get("delta")
            if isinstance(delta, str) and delta:
                self._accumulator.append(delta)
        elif msg_type == MSG_RESPONSE_AUDIO_TRANSCRIPT_DELTA:
            delta = msg.get("delta")
            if isinstance(delta, str):
                self._transcript.append(delta)
        elif msg_type == MSG_RESPONSE_AUDIO_DONE:
            self._cancel_timer()
            audio = self._accumulator.to_wav() if len(self._accumulator) else None
            self._resolve(
                RealtimeResult(
                    audio_wav=audio,
                    transcript=self.transcript or REALTIME_DONE_TRANSCRIPT,
                    timed_out=False,
                    processing_time_ms=self._elapsed_ms(),
                )
            )
        elif msg_type == MSG_ERROR:
            self._cancel_timer()
            error = msg.get("message") or msg.get("error") or "unknown error"
            self._resolve(
                RealtimeResult(
                    audio_wav=None,
                    transcript=self.transcript,
                    timed_out=False,
                    processing_time_ms=self._elapsed_ms(),
                    error=error if isinstance(error, str) else str(error),
                )
            )

    async def wait(self) -> RealtimeResult:
        return await self._ensure_future()

    def cancel(self) -> None:
        self._cancel_timer()

    def _on_timeout(self) -> None:
        self._timer = None
        if self.done:
            return
        self._log.warning("no response.audio.done within %.1fs; using fallback result", self._timeout_s)
        self._accumulator.drain()
        self._resolve(
            RealtimeResult(
                audio_wav=None,
                transcript=REALTIME_TIMEOUT_TRANSCRIPT,
                timed_out=True,
                processing_time_ms=self._elapsed_ms(),
            )
        )

    def _ensure_future(self) -> asyncio.Future[RealtimeResult]:
        if self._result is None:
            self._result = asyncio.get_running_loop().create_future()
        return self._result

    def _resolve(self, result: RealtimeResult) -> None:
        future = self._ensure_future()
        if not future.done():
            future.set_result(result)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _elapsed_ms(self) -> float:
        return (self._clock() - self._started_at) * 1000.0


__all__ = ["RealtimeResult", "ResponseCollector"]
