"""Runtime dependency construction (relay + modular pipeline)."""

from __future__ import annotations

import logging

from s2s_gateway.state import RuntimeDeps
from s2s_gateway.state.settings import AppSettings
from s2s_gateway.realtime.bridge import RealtimeRelay
from s2s_gateway.modular.pipeline import build_modular_pipeline

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    if not settings.upstream.api_key:
        # Not fatal: each relay session reports the missing credential to its own client.
        logger.warning("runtime: OPENAI_API_KEY is not set; realtime sessions will be refused")

    realtime_relay = RealtimeRelay(upstream=settings.upstream)
    modular_pipeline = build_modular_pipeline(settings.modular)

    return RuntimeDeps(
        settings=settings,
        realtime_relay=realtime_relay,
        modular_pipeline=modular_pipeline,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
