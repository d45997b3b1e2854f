"""Upstream realtime service configuration (env names and defaults only)."""

from __future__ import annotations

ENV_REALTIME_URL = "REALTIME_URL"
ENV_REALTIME_MODEL = "REALTIME_MODEL"
ENV_REALTIME_BETA_HEADER = "REALTIME_BETA_HEADER"
ENV_REALTIME_CONNECT_TIMEOUT_S = "REALTIME_CONNECT_TIMEOUT_S"

DEFAULT_REALTIME_URL = "wss://api.openai.com/v1/realtime"
DEFAULT_REALTIME_MODEL = "gpt-4o-realtime-preview-2024-12-17"
DEFAULT_REALTIME_BETA_HEADER = "realtime=v1"
DEFAULT_REALTIME_CONNECT_TIMEOUT_S = 10.0

# Realtime frames carry base64 audio; keep well above the websockets default (1 MiB).
REALTIME_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

HEADER_AUTHORIZATION = "Authorization"
HEADER_OPENAI_BETA = "OpenAI-Beta"

__all__ = [
    "ENV_REALTIME_URL",
    "ENV_REALTIME_MODEL",
    "ENV_REALTIME_BETA_HEADER",
    "ENV_REALTIME_CONNECT_TIMEOUT_S",
    "DEFAULT_REALTIME_URL",
    "DEFAULT_REALTIME_MODEL",
    "DEFAULT_REALTIME_BETA_HEADER",
    "DEFAULT_REALTIME_CONNECT_TIMEOUT_S",
    "REALTIME_MAX_MESSAGE_BYTES",
    "HEADER_AUTHORIZATION",
    "HEADER_OPENAI_BETA",
]
