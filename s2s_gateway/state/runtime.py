"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from s2s_gateway.state.settings import AppSettings
    from s2s_gateway.realtime.bridge import RealtimeRelay
    from s2s_gateway.modular.pipeline import ModularPipeline


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    realtime_relay: RealtimeRelay
    modular_pipeline: ModularPipeline

    async def shutdown(self) -> None:
        try:
            await self.modular_pipeline.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
