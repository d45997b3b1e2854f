"""Configuration module exports (env names and defaults only)."""

from .websocket import DEFAULT_WS_ENDPOINT_PATH
from .upstream import DEFAULT_REALTIME_URL, DEFAULT_REALTIME_MODEL

__all__ = [
    "DEFAULT_REALTIME_MODEL",
    "DEFAULT_REALTIME_URL",
    "DEFAULT_WS_ENDPOINT_PATH",
]
