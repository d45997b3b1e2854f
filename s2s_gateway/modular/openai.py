"""OpenAI HTTP providers for the modular flow (Whisper, chat completions, TTS)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from s2s_gateway.errors import ProviderError
from s2s_gateway.state.settings import ModularSettings
from s2s_gateway.config.modular import LLM_SYSTEM_PROMPT, TTS_RESPONSE_FORMAT

logger = logging.getLogger(__name__)

TRANSCRIPTIONS_ENDPOINT = "/audio/transcriptions"
CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"
SPEECH_ENDPOINT = "/audio/speech"


def whisper_mime_type(filename: str) -> str:
    return "audio/ogg" if filename.lower().endswith(".ogg") else "audio/webm"


class OpenAIProvider:
    """Speech-to-text, reply generation and speech synthesis over the OpenAI REST API.

    One pooled ``httpx.AsyncClient`` is shared by all three calls; every call is
    bounded by ``request_timeout_s``. Failures of any kind surface as
    ``ProviderError``. No retries.
    """

    def __init__(
        self,
        settings: ModularSettings,
        *,
        client: httpx.AsyncClient | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._log = log or logger
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout_s,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @property
    def enabled(self) -> bool:
        return bool(self._settings.api_key)

    async def transcribe(self, audio: bytes, filename: str) -> str:
        mime_type = whisper_mime_type(filename)
        self._log.info("whisper: sending %d bytes (%s, %s)", len(audio), filename, mime_type)
        response = await self._post(
            TRANSCRIPTIONS_ENDPOINT,
            files={"file": (filename, audio, mime_type)},
            data={"model": self._settings.stt_model},
        )
        text = self._json(response, TRANSCRIPTIONS_ENDPOINT).get("text") or ""
        self._log.info("whisper: transcript length=%d", len(text))
        return text

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self._settings.llm_model,
            "messages": [
                {"role": "system", "content": LLM_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }
        response = await self._post(CHAT_COMPLETIONS_ENDPOINT, json=payload)
        data = self._json(response, CHAT_COMPLETIONS_ENDPOINT)
        try:
            reply = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            reply = ""
        self._log.info("llm: reply length=%d", len(reply))
        return reply

    async def synthesize(self, text: str) -> bytes:
        payload = {
            "model": self._settings.tts_model,
            "input": text,
            "voice": self._settings.tts_voice,
            "response_format": TTS_RESPONSE_FORMAT,
        }
        response = await self._post(SPEECH_ENDPOINT, json=payload)
        self._log.info("tts: received %d bytes", len(response.content))
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        if not self.enabled:
            raise ProviderError("Missing OPENAI_API_KEY")
        headers = {"Authorization": f"Bearer {self._settings.api_key}"}
        try:
            response = await self._client.post(path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            self._log.error("%s timed out after %.1fs", path, self._settings.request_timeout_s)
            raise ProviderError(f"{path} timed out") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self._log.error("%s failed with status %d", path, status)
            raise ProviderError(f"{path} failed: {status} {exc.response.reason_phrase}") from exc
        except httpx.HTTPError as exc:
            self._log.error("%s request error: %s", path, exc)
            raise ProviderError(f"{path} request failed: {exc}") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response, path: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(f"{path} returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise ProviderError(f"{path} returned unexpected payload")
        return data


__all__ = ["OpenAIProvider", "whisper_mime_type"]
