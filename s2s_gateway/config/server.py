"""HTTP server configuration (env names and defaults only)."""

from __future__ import annotations

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 3001
DEFAULT_CORS_ALLOW_ORIGINS = ("*",)

__all__ = [
    "ENV_HOST",
    "ENV_PORT",
    "ENV_CORS_ALLOW_ORIGINS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_CORS_ALLOW_ORIGINS",
]
