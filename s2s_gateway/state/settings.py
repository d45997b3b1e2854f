"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    url: str
    model: str
    beta_header: str
    connect_timeout_s: float

    @property
    def endpoint(self) -> str:
        sep = "&" if "?" in self.url else "?"
        return f"{self.url}{sep}model={self.model}"


@dataclass(frozen=True, slots=True)
class ModularSettings:
    api_key: str
    base_url: str
    request_timeout_s: float
    parts_timeout_s: float
    stt_model: str
    llm_model: str
    tts_model: str
    tts_voice: str


@dataclass(frozen=True, slots=True)
class ClientSettings:
    relay_url: str
    response_timeout_s: float
    sample_rate_hz: int
    instructions: str
    connect_timeout_s: float


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    ws_endpoint_path: str
    cors_allow_origins: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AppSettings:
    upstream: UpstreamSettings
    modular: ModularSettings
    client: ClientSettings
    server: ServerSettings


__all__ = [
    "AppSettings",
    "ClientSettings",
    "ModularSettings",
    "ServerSettings",
    "UpstreamSettings",
]
