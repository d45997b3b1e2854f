"""Modular STT -> LLM -> TTS flow configuration (env names and defaults only)."""

from __future__ import annotations

ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"
ENV_MODULAR_REQUEST_TIMEOUT_S = "MODULAR_REQUEST_TIMEOUT_S"
ENV_MODULAR_PARTS_TIMEOUT_S = "MODULAR_PARTS_TIMEOUT_S"
ENV_STT_MODEL = "STT_MODEL"
ENV_LLM_MODEL = "LLM_MODEL"
ENV_TTS_MODEL = "TTS_MODEL"
ENV_TTS_VOICE = "TTS_VOICE"

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODULAR_REQUEST_TIMEOUT_S = 15.0
DEFAULT_MODULAR_PARTS_TIMEOUT_S = 30.0
DEFAULT_STT_MODEL = "whisper-1"
DEFAULT_LLM_MODEL = "gpt-4o"
DEFAULT_TTS_MODEL = "tts-1"
DEFAULT_TTS_VOICE = "nova"

LLM_SYSTEM_PROMPT = "You are a helpful voice assistant."
TTS_RESPONSE_FORMAT = "mp3"
TTS_CONTENT_TYPE = "audio/mpeg"
TTS_FILENAME = "assistant.mp3"

MODULAR_ENDPOINT_PATH = "/api/modular"
AUDIO_QUERY_PARAM = "audio"

DEFAULT_AUDIO_FILENAME = "audio.webm"
EMPTY_TRANSCRIPT_FALLBACK = "[No speech detected]"

# Provider chains selectable through the "set" form field.
SET_OPENAI = "set1"
SET_GOOGLE = "set2"

# Error codes (response body "code" values)
ERROR_INVALID_MULTIPART = "invalid_multipart"
ERROR_PARSE_TIMEOUT = "parse_timeout"
ERROR_MISSING_FIELDS = "missing_fields"
ERROR_INVALID_SET = "invalid_set"
ERROR_DOWNSTREAM_FAILURE = "downstream_failure"

__all__ = [
    "ENV_OPENAI_BASE_URL",
    "ENV_MODULAR_REQUEST_TIMEOUT_S",
    "ENV_MODULAR_PARTS_TIMEOUT_S",
    "ENV_STT_MODEL",
    "ENV_LLM_MODEL",
    "ENV_TTS_MODEL",
    "ENV_TTS_VOICE",
    "DEFAULT_OPENAI_BASE_URL",
    "DEFAULT_MODULAR_REQUEST_TIMEOUT_S",
    "DEFAULT_MODULAR_PARTS_TIMEOUT_S",
    "DEFAULT_STT_MODEL",
    "DEFAULT_LLM_MODEL",
    "DEFAULT_TTS_MODEL",
    "DEFAULT_TTS_VOICE",
    "LLM_SYSTEM_PROMPT",
    "TTS_RESPONSE_FORMAT",
    "TTS_CONTENT_TYPE",
    "TTS_FILENAME",
    "MODULAR_ENDPOINT_PATH",
    "AUDIO_QUERY_PARAM",
    "DEFAULT_AUDIO_FILENAME",
    "EMPTY_TRANSCRIPT_FALLBACK",
    "SET_OPENAI",
    "SET_GOOGLE",
    "ERROR_INVALID_MULTIPART",
    "ERROR_PARSE_TIMEOUT",
    "ERROR_MISSING_FIELDS",
    "ERROR_INVALID_SET",
    "ERROR_DOWNSTREAM_FAILURE",
]
