"""Per-connection relay state."""

from __future__ import annotations

from collections import deque
from dataclasses import field, dataclass


@dataclass(slots=True)
class RelayState:
    session_id: str
    upstream_ready: bool = False
    # Raw client frames received before the upstream link opened, in arrival order.
    pending: deque[str] = field(default_factory=deque)


__all__ = ["RelayState"]
