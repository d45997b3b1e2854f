"""Google speech providers. Not wired to a real API yet."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

PLACEHOLDER_TRANSCRIPT = "[Transcript from Google STT]"


class GooglePlaceholderProvider:
    """Stands in for Google STT and TTS: fixed transcript, empty audio."""

    def __init__(self, *, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    async def transcribe(self, audio: bytes, filename: str) -> str:
        self._log.info("google stt placeholder: ignoring %d bytes", len(audio))
        return PLACEHOLDER_TRANSCRIPT

    async def synthesize(self, text: str) -> bytes:
        self._log.info("google tts placeholder: no audio for %d chars", len(text))
        return b""


__all__ = ["GooglePlaceholderProvider", "PLACEHOLDER_TRANSCRIPT"]
