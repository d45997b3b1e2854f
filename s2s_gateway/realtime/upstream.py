"""Companion connection to the upstream realtime voice service."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable, Awaitable

import websockets

from s2s_gateway.errors import UpstreamConfigError
from s2s_gateway.state.settings import UpstreamSettings
from s2s_gateway.config.websocket import WS_ERROR_MISSING_API_KEY
from s2s_gateway.config.upstream import HEADER_OPENAI_BETA, HEADER_AUTHORIZATION, REALTIME_MAX_MESSAGE_BYTES

UpstreamConnector = Callable[[UpstreamSettings], Awaitable[Any]]


def build_upstream_headers(settings: UpstreamSettings) -> dict[str, str]:
    if not settings.api_key:
        raise UpstreamConfigError(WS_ERROR_MISSING_API_KEY)
    return {
        HEADER_AUTHORIZATION: f"Bearer {settings.api_key}",
        HEADER_OPENAI_BETA: settings.beta_header,
    }


async def connect_upstream(settings: UpstreamSettings) -> websockets.ClientConnection:
    """Open the upstream realtime socket; the credential is checked before any I/O."""
    headers = build_upstream_headers(settings)
    return await websockets.connect(
        settings.endpoint,
        additional_headers=headers,
        open_timeout=settings.connect_timeout_s,
        max_size=REALTIME_MAX_MESSAGE_BYTES,
    )


__all__ = ["UpstreamConnector", "build_upstream_headers", "connect_upstream"]
