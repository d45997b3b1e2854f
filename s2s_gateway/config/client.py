"""Realtime client configuration (env names and defaults only)."""

from __future__ import annotations

ENV_RELAY_URL = "RELAY_URL"
ENV_REALTIME_RESPONSE_TIMEOUT_S = "REALTIME_RESPONSE_TIMEOUT_S"
ENV_REALTIME_SAMPLE_RATE_HZ = "REALTIME_SAMPLE_RATE_HZ"
ENV_REALTIME_INSTRUCTIONS = "REALTIME_INSTRUCTIONS"
ENV_CLIENT_CONNECT_TIMEOUT_S = "CLIENT_CONNECT_TIMEOUT_S"

DEFAULT_RELAY_URL = "ws://localhost:3001/ws/openai-realtime"
# Fallback window after which a missing response.audio.done is treated as done.
DEFAULT_REALTIME_RESPONSE_TIMEOUT_S = 5.0
# Realtime PCM16 in/out rate. Kept configurable: not every upstream model uses 24kHz.
DEFAULT_REALTIME_SAMPLE_RATE_HZ = 24000
DEFAULT_REALTIME_INSTRUCTIONS = "Assist the user via voice."
DEFAULT_CLIENT_CONNECT_TIMEOUT_S = 15.0

REALTIME_TIMEOUT_TRANSCRIPT = "Timeout: No response from upstream"
REALTIME_DONE_TRANSCRIPT = "Realtime processing completed"

__all__ = [
    "ENV_RELAY_URL",
    "ENV_REALTIME_RESPONSE_TIMEOUT_S",
    "ENV_REALTIME_SAMPLE_RATE_HZ",
    "ENV_REALTIME_INSTRUCTIONS",
    "ENV_CLIENT_CONNECT_TIMEOUT_S",
    "DEFAULT_RELAY_URL",
    "DEFAULT_REALTIME_RESPONSE_TIMEOUT_S",
    "DEFAULT_REALTIME_SAMPLE_RATE_HZ",
    "DEFAULT_REALTIME_INSTRUCTIONS",
    "DEFAULT_CLIENT_CONNECT_TIMEOUT_S",
    "REALTIME_TIMEOUT_TRANSCRIPT",
    "REALTIME_DONE_TRANSCRIPT",
]
