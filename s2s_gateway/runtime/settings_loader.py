"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from s2s_gateway.config.secrets import ENV_OPENAI_API_KEY
from s2s_gateway.config.websocket import ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH
from s2s_gateway.config.server import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_CORS_ALLOW_ORIGINS,
    DEFAULT_CORS_ALLOW_ORIGINS,
)
from s2s_gateway.state.settings import (
    AppSettings,
    ClientSettings,
    ServerSettings,
    ModularSettings,
    UpstreamSettings,
)
from s2s_gateway.config.upstream import (
    ENV_REALTIME_URL,
    ENV_REALTIME_MODEL,
    DEFAULT_REALTIME_URL,
    DEFAULT_REALTIME_MODEL,
    ENV_REALTIME_BETA_HEADER,
    DEFAULT_REALTIME_BETA_HEADER,
    ENV_REALTIME_CONNECT_TIMEOUT_S,
    DEFAULT_REALTIME_CONNECT_TIMEOUT_S,
)
from s2s_gateway.config.client import (
    ENV_RELAY_URL,
    DEFAULT_RELAY_URL,
    ENV_REALTIME_INSTRUCTIONS,
    ENV_REALTIME_SAMPLE_RATE_HZ,
    ENV_CLIENT_CONNECT_TIMEOUT_S,
    DEFAULT_REALTIME_INSTRUCTIONS,
    DEFAULT_REALTIME_SAMPLE_RATE_HZ,
    ENV_REALTIME_RESPONSE_TIMEOUT_S,
    DEFAULT_CLIENT_CONNECT_TIMEOUT_S,
    DEFAULT_REALTIME_RESPONSE_TIMEOUT_S,
)
from s2s_gateway.config.modular import (
    ENV_LLM_MODEL,
    ENV_STT_MODEL,
    ENV_TTS_MODEL,
    ENV_TTS_VOICE,
    DEFAULT_LLM_MODEL,
    DEFAULT_STT_MODEL,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_VOICE,
    ENV_OPENAI_BASE_URL,
    DEFAULT_OPENAI_BASE_URL,
    ENV_MODULAR_PARTS_TIMEOUT_S,
    ENV_MODULAR_REQUEST_TIMEOUT_S,
    DEFAULT_MODULAR_PARTS_TIMEOUT_S,
    DEFAULT_MODULAR_REQUEST_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _positive_float_env(name: str, default: float) -> float:
    value = _float_env(name, default)
    return value if value > 0 else default


def _csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


def _load_upstream_settings() -> UpstreamSettings:
    return UpstreamSettings(
        api_key=(os.getenv(ENV_OPENAI_API_KEY) or "").strip(),
        url=_str_env(ENV_REALTIME_URL, DEFAULT_REALTIME_URL),
        model=_str_env(ENV_REALTIME_MODEL, DEFAULT_REALTIME_MODEL),
        beta_header=_str_env(ENV_REALTIME_BETA_HEADER, DEFAULT_REALTIME_BETA_HEADER),
        connect_timeout_s=_positive_float_env(ENV_REALTIME_CONNECT_TIMEOUT_S, DEFAULT_REALTIME_CONNECT_TIMEOUT_S),
    )


def _load_modular_settings() -> ModularSettings:
    return ModularSettings(
        api_key=(os.getenv(ENV_OPENAI_API_KEY) or "").strip(),
        base_url=_str_env(ENV_OPENAI_BASE_URL, DEFAULT_OPENAI_BASE_URL).rstrip("/"),
        request_timeout_s=_positive_float_env(ENV_MODULAR_REQUEST_TIMEOUT_S, DEFAULT_MODULAR_REQUEST_TIMEOUT_S),
        parts_timeout_s=_positive_float_env(ENV_MODULAR_PARTS_TIMEOUT_S, DEFAULT_MODULAR_PARTS_TIMEOUT_S),
        stt_model=_str_env(ENV_STT_MODEL, DEFAULT_STT_MODEL),
        llm_model=_str_env(ENV_LLM_MODEL, DEFAULT_LLM_MODEL),
        tts_model=_str_env(ENV_TTS_MODEL, DEFAULT_TTS_MODEL),
        tts_voice=_str_env(ENV_TTS_VOICE, DEFAULT_TTS_VOICE),
    )


def _load_client_settings() -> ClientSettings:
    sample_rate = _int_env(ENV_REALTIME_SAMPLE_RATE_HZ, DEFAULT_REALTIME_SAMPLE_RATE_HZ)
    return ClientSettings(
        relay_url=_str_env(ENV_RELAY_URL, DEFAULT_RELAY_URL),
        response_timeout_s=_positive_float_env(ENV_REALTIME_RESPONSE_TIMEOUT_S, DEFAULT_REALTIME_RESPONSE_TIMEOUT_S),
        sample_rate_hz=sample_rate if sample_rate > 0 else DEFAULT_REALTIME_SAMPLE_RATE_HZ,
        instructions=_str_env(ENV_REALTIME_INSTRUCTIONS, DEFAULT_REALTIME_INSTRUCTIONS),
        connect_timeout_s=_positive_float_env(ENV_CLIENT_CONNECT_TIMEOUT_S, DEFAULT_CLIENT_CONNECT_TIMEOUT_S),
    )


def _load_server_settings() -> ServerSettings:
    path = _str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)
    if not path.startswith("/"):
        path = f"/{path}"
    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
        ws_endpoint_path=path,
        cors_allow_origins=_csv_env(ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        upstream=_load_upstream_settings(),
        modular=_load_modular_settings(),
        client=_load_client_settings(),
        server=_load_server_settings(),
    )


def load_client_settings() -> ClientSettings:
    return _load_client_settings()


__all__ = ["load_client_settings", "load_settings"]
