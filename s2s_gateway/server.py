"""Main FastAPI server for the speech-to-speech gateway."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

import uvicorn
from fastapi import FastAPI, Request, Response, WebSocket
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from s2s_gateway.state import RuntimeDeps
from s2s_gateway.state.settings import AppSettings
from s2s_gateway.config.modular import MODULAR_ENDPOINT_PATH
from s2s_gateway.runtime.logging import configure_logging
from s2s_gateway.handlers.modular import handle_modular_request
from s2s_gateway.runtime.dependencies import build_runtime_deps
from s2s_gateway.runtime.settings_loader import load_settings
from s2s_gateway.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()

DepsBuilder = Callable[[AppSettings], Awaitable[RuntimeDeps]]


def _runtime_deps(app: FastAPI) -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def create_app(settings: AppSettings | None = None, *, deps_builder: DepsBuilder = build_runtime_deps) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.runtime_deps = await deps_builder(settings)
        logger.info("runtime: ready (relay at %s)", settings.server.ws_endpoint_path)
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(settings.server.ws_endpoint_path)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await handle_websocket_connection(websocket, _runtime_deps(app))

    @app.post(MODULAR_ENDPOINT_PATH)
    async def modular_endpoint(request: Request) -> Response:
        return await handle_modular_request(request, _runtime_deps(app))

    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "s2s_gateway.server:app",
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
