"""Client message validation for the relay."""

from __future__ import annotations

import json
from typing import Any

from s2s_gateway.config.websocket import WS_KEY_TYPE


def parse_client_message(raw: str) -> dict[str, Any]:
    try:
        msg = json.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")

    return msg


__all__ = ["parse_client_message"]
