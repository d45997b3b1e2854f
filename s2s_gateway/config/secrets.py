"""Secrets configuration."""

from __future__ import annotations

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"

__all__ = ["ENV_OPENAI_API_KEY"]
