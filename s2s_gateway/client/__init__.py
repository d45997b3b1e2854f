"""Client side of the realtime relay."""

from .status import ConnectionStatus
from .realtime import RealtimeClient
from .collector import RealtimeResult, ResponseCollector

__all__ = ["ConnectionStatus", "RealtimeClient", "RealtimeResult", "ResponseCollector"]
