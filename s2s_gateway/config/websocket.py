"""WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
DEFAULT_WS_ENDPOINT_PATH = "/ws/openai-realtime"

# Message keys
WS_KEY_TYPE = "type"

# Close codes
WS_CLOSE_INTERNAL_ERROR_CODE = 1011

WS_CLOSE_CONFIG_REASON = "upstream not configured"

# Error messages sent to browser clients
WS_ERROR_INVALID_MESSAGE = "Invalid message format"
WS_ERROR_MISSING_API_KEY = "OpenAI API key not configured"
WS_QUEUED_NOTICE = "Message queued, waiting for OpenAI connection"

__all__ = [
    "ENV_WS_ENDPOINT_PATH",
    "DEFAULT_WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_CONFIG_REASON",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_MISSING_API_KEY",
    "WS_QUEUED_NOTICE",
]
