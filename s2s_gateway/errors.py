"""Shared error types for the speech-to-speech gateway."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidStateError(RuntimeError):
    """Raised when a realtime client operation is invoked in the wrong state."""


class UpstreamConfigError(RuntimeError):
    """Raised when a relay session cannot open its upstream link due to configuration."""


class ProviderError(Exception):
    """Raised when a downstream STT/LLM/TTS call fails or times out."""


@dataclass(frozen=True, slots=True)
class ModularFlowError(Exception):
    """Request-level failure of the modular flow, rendered as a JSON error body."""

    status_code: int
    code: str
    message: str
    details: str = ""

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


__all__ = ["InvalidStateError", "ModularFlowError", "ProviderError", "UpstreamConfigError"]
