"""Modular STT -> LLM -> TTS chain selected per request by provider set."""

from __future__ import annotations

import time
import logging
from typing import Protocol
from dataclasses import dataclass
from collections.abc import Mapping, Sequence

from s2s_gateway.errors import ModularFlowError
from s2s_gateway.state.settings import ModularSettings
from s2s_gateway.config.modular import (
    SET_GOOGLE,
    SET_OPENAI,
    TTS_CONTENT_TYPE,
    ERROR_INVALID_SET,
    EMPTY_TRANSCRIPT_FALLBACK,
)

from .openai import OpenAIProvider
from .google import GooglePlaceholderProvider

logger = logging.getLogger(__name__)


class SpeechToText(Protocol):
    async def transcribe(self, audio: bytes, filename: str) -> str: ...


class ReplyModel(Protocol):
    async def complete(self, prompt: str) -> str: ...


class TextToSpeech(Protocol):
    async def synthesize(self, text: str) -> bytes: ...


class Closeable(Protocol):
    async def aclose(self) -> None: ...


@dataclass(frozen=True, slots=True)
class ProviderChain:
    stt: SpeechToText
    llm: ReplyModel
    tts: TextToSpeech


@dataclass(slots=True)
class ModularResult:
    transcript: str
    reply: str
    audio: bytes
    audio_content_type: str = TTS_CONTENT_TYPE


class ModularPipeline:
    def __init__(
        self,
        chains: Mapping[str, ProviderChain],
        *,
        resources: Sequence[Closeable] = (),
        log: logging.Logger | None = None,
    ) -> None:
        self._chains = dict(chains)
        self._resources = tuple(resources)
        self._log = log or logger

    @property
    def sets(self) -> tuple[str, ...]:
        return tuple(self._chains)

    def has_set(self, name: str) -> bool:
        return name in self._chains

    async def run(self, set_name: str, audio: bytes, filename: str) -> ModularResult:
        """Transcribe, reply and synthesize. Provider failures propagate as ``ProviderError``."""
        chain = self._chains.get(set_name)
        if chain is None:
            raise ModularFlowError(400, ERROR_INVALID_SET, "Invalid set", f"unknown set {set_name!r}")

        started = time.perf_counter()
        transcript = await chain.stt.transcribe(audio, filename)
        if not transcript.strip():
            self._log.warning("modular[%s]: empty transcript, using fallback", set_name)
            transcript = EMPTY_TRANSCRIPT_FALLBACK
        stt_done = time.perf_counter()

        reply = await chain.llm.complete(transcript)
        llm_done = time.perf_counter()

        speech = await chain.tts.synthesize(reply)
        tts_done = time.perf_counter()

        self._log.info(
            "modular[%s]: stt=%.0fms llm=%.0fms tts=%.0fms audio=%dB",
            set_name,
            (stt_done - started) * 1000.0,
            (llm_done - stt_done) * 1000.0,
            (tts_done - llm_done) * 1000.0,
            len(speech),
        )
        return ModularResult(transcript=transcript, reply=reply, audio=speech)

    async def aclose(self) -> None:
        for resource in self._resources:
            await resource.aclose()


def build_modular_pipeline(settings: ModularSettings) -> ModularPipeline:
    openai = OpenAIProvider(settings)
    google = GooglePlaceholderProvider()
    chains = {
        SET_OPENAI: ProviderChain(stt=openai, llm=openai, tts=openai),
        SET_GOOGLE: ProviderChain(stt=google, llm=openai, tts=google),
    }
    return ModularPipeline(chains, resources=(openai,))


__all__ = [
    "ModularPipeline",
    "ModularResult",
    "ProviderChain",
    "build_modular_pipeline",
]
