"""Connection status values reported by the realtime client."""

from __future__ import annotations

from enum import Enum


class ConnectionStatus(str, Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    PROCESSING = "processing"
    DISCONNECTED = "disconnected"
    ERROR = "error"


__all__ = ["ConnectionStatus"]
