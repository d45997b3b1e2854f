from __future__ import annotations

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from s2s_gateway.server import create_app
from s2s_gateway.config.websocket import WS_ERROR_MISSING_API_KEY, WS_CLOSE_INTERNAL_ERROR_CODE
from tests.unit.fakes import app_settings


@pytest.mark.parametrize("path", ["/", "/health", "/healthz"])
def test_health_endpoints(path: str) -> None:
    with TestClient(create_app(app_settings())) as client:
        resp = client.get(path)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_relay_without_api_key_reports_error_and_closes() -> None:
    with TestClient(create_app(app_settings(api_key=""))) as client:
        with client.websocket_connect("/ws/openai-realtime") as ws:
            assert ws.receive_json() == {"type": "error", "message": WS_ERROR_MISSING_API_KEY}
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_text()
            assert exc_info.value.code == WS_CLOSE_INTERNAL_ERROR_CODE

        assert client.get("/health").status_code == 200


def test_cors_preflight_is_allowed() -> None:
    with TestClient(create_app(app_settings())) as client:
        resp = client.options(
            "/api/modular",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
        )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
