"""Send helpers for the browser-facing WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, message: Any) -> bool:
    return await safe_send_text(ws, orjson.dumps(message).decode("utf-8"))


__all__ = ["safe_send_text", "safe_send_json"]
