from .runtime import RuntimeDeps
from .session import RelayState
from .settings import AppSettings

__all__ = ["AppSettings", "RelayState", "RuntimeDeps"]
