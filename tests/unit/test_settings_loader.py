from __future__ import annotations

import pytest

from s2s_gateway.runtime.settings_loader import load_settings, load_client_settings
from s2s_gateway.config import DEFAULT_REALTIME_URL, DEFAULT_REALTIME_MODEL, DEFAULT_WS_ENDPOINT_PATH

_ENV_NAMES = (
    "OPENAI_API_KEY",
    "REALTIME_URL",
    "REALTIME_MODEL",
    "REALTIME_CONNECT_TIMEOUT_S",
    "WS_ENDPOINT_PATH",
    "CORS_ALLOW_ORIGINS",
    "MODULAR_REQUEST_TIMEOUT_S",
    "OPENAI_BASE_URL",
    "TTS_VOICE",
    "RELAY_URL",
    "REALTIME_RESPONSE_TIMEOUT_S",
    "REALTIME_SAMPLE_RATE_HZ",
    "CLIENT_CONNECT_TIMEOUT_S",
    "PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.upstream.api_key == ""
    assert settings.upstream.url == DEFAULT_REALTIME_URL
    assert settings.upstream.endpoint == f"{DEFAULT_REALTIME_URL}?model={DEFAULT_REALTIME_MODEL}"
    assert settings.upstream.beta_header == "realtime=v1"
    assert settings.server.ws_endpoint_path == DEFAULT_WS_ENDPOINT_PATH
    assert settings.server.port == 3001
    assert settings.server.cors_allow_origins == ("*",)
    assert settings.modular.request_timeout_s == 15.0
    assert settings.modular.parts_timeout_s == 30.0
    assert (settings.modular.stt_model, settings.modular.llm_model, settings.modular.tts_model) == (
        "whisper-1",
        "gpt-4o",
        "tts-1",
    )
    assert settings.modular.tts_voice == "nova"
    assert settings.client.response_timeout_s == 5.0
    assert settings.client.sample_rate_hz == 24000
    assert settings.client.instructions == "Assist the user via voice."
    assert settings.client.connect_timeout_s == 15.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-abc  ")
    monkeypatch.setenv("REALTIME_MODEL", "gpt-realtime")
    monkeypatch.setenv("WS_ENDPOINT_PATH", "relay")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://proxy.test/v1/")
    monkeypatch.setenv("TTS_VOICE", "alloy")
    monkeypatch.setenv("PORT", "8080")

    settings = load_settings()

    assert settings.upstream.api_key == "sk-abc"
    assert settings.modular.api_key == "sk-abc"
    assert settings.upstream.endpoint.endswith("?model=gpt-realtime")
    assert settings.server.ws_endpoint_path == "/relay"
    assert settings.server.cors_allow_origins == ("http://a.test", "http://b.test")
    assert settings.modular.base_url == "http://proxy.test/v1"
    assert settings.modular.tts_voice == "alloy"
    assert settings.server.port == 8080


@pytest.mark.parametrize("raw", ["abc", "-3", "0"])
def test_invalid_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("REALTIME_RESPONSE_TIMEOUT_S", raw)
    monkeypatch.setenv("REALTIME_SAMPLE_RATE_HZ", raw)
    monkeypatch.setenv("MODULAR_REQUEST_TIMEOUT_S", raw)

    client = load_client_settings()
    settings = load_settings()

    assert client.response_timeout_s == 5.0
    assert client.sample_rate_hz == 24000
    assert settings.modular.request_timeout_s == 15.0


def test_relay_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELAY_URL", "wss://gateway.test/ws/openai-realtime")
    assert load_client_settings().relay_url == "wss://gateway.test/ws/openai-realtime"


def test_client_connect_timeout_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLIENT_CONNECT_TIMEOUT_S", "2.5")
    assert load_client_settings().connect_timeout_s == 2.5
