from s2s_gateway.state import RelayState

from .bridge import RealtimeRelay
from .session import RelaySession

__all__ = ["RealtimeRelay", "RelaySession", "RelayState"]
