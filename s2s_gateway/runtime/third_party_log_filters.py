"""Log noise filters for third-party libraries."""

from __future__ import annotations

import os
import logging

from s2s_gateway.config.logging import THIRD_PARTY_LOGGERS, ENV_SHOW_THIRD_PARTY_LOGS


def configure() -> None:
    # websockets logs every frame at DEBUG and httpx logs every request at INFO.
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure"]
