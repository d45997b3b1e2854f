"""Factory for per-connection relay sessions."""

from __future__ import annotations

from fastapi import WebSocket

from s2s_gateway.state.settings import UpstreamSettings

from .session import RelaySession
from .upstream import UpstreamConnector, connect_upstream


class RealtimeRelay:
    def __init__(self, *, upstream: UpstreamSettings, connector: UpstreamConnector = connect_upstream) -> None:
        self._upstream = upstream
        self._connector = connector

    def new_session(self, ws: WebSocket) -> RelaySession:
        return RelaySession(client=ws, upstream_settings=self._upstream, connector=self._connector)


__all__ = ["RealtimeRelay"]
