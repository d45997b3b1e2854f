"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ENV_SHOW_THIRD_PARTY_LOGS = "SHOW_THIRD_PARTY_LOGS"
THIRD_PARTY_LOGGERS = ("websockets", "httpx", "httpcore", "multipart")

__all__ = ["LOG_LEVEL", "LOG_FORMAT", "ENV_SHOW_THIRD_PARTY_LOGS", "THIRD_PARTY_LOGGERS"]
