"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging

from fastapi import WebSocket

from s2s_gateway.state import RuntimeDeps

logger = logging.getLogger(__name__)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    await ws.accept()
    session = runtime_deps.realtime_relay.new_session(ws)
    logger.info("WebSocket relay session %s accepted", session.session_id)
    try:
        await session.run()
    finally:
        logger.info("WebSocket relay session %s closed", session.session_id)


__all__ = ["handle_websocket_connection"]
