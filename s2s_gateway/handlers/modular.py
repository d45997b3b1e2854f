"""HTTP handler for the modular STT -> LLM -> TTS flow."""

from __future__ import annotations

import time
import base64
import asyncio
import logging

from fastapi import Request, Response
from fastapi.responses import ORJSONResponse
from starlette.datastructures import FormData, UploadFile

from s2s_gateway.state import RuntimeDeps
from s2s_gateway.modular import ModularResult
from s2s_gateway.errors import ProviderError, ModularFlowError
from s2s_gateway.config.modular import (
    TTS_FILENAME,
    AUDIO_QUERY_PARAM,
    ERROR_INVALID_SET,
    ERROR_PARSE_TIMEOUT,
    ERROR_MISSING_FIELDS,
    DEFAULT_AUDIO_FILENAME,
    ERROR_INVALID_MULTIPART,
    ERROR_DOWNSTREAM_FAILURE,
)

logger = logging.getLogger(__name__)


def wants_audio(request: Request) -> bool:
    if request.query_params.get(AUDIO_QUERY_PARAM) == "1":
        return True
    return "audio" in request.headers.get("accept", "")


def error_response(exc: ModularFlowError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code, "details": exc.details},
    )


def result_payload(set_name: str, result: ModularResult) -> dict[str, str]:
    return {
        "transcript": f"User: {result.transcript} | AI Reply: {result.reply}",
        "userTranscript": result.transcript,
        "aiReply": result.reply,
        "audioData": base64.b64encode(result.audio).decode("ascii"),
        "message": f"[{set_name}] Transcript: {result.transcript} | Reply: {result.reply}",
    }


async def _parse_form(request: Request) -> FormData:
    return await request.form()


async def _read_form(request: Request, timeout_s: float) -> FormData:
    try:
        return await asyncio.wait_for(_parse_form(request), timeout=timeout_s)
    except TimeoutError as exc:
        raise ModularFlowError(
            408, ERROR_PARSE_TIMEOUT, "Multipart parsing timed out", f"no complete body within {timeout_s:.1f}s"
        ) from exc
    except Exception as exc:
        raise ModularFlowError(400, ERROR_INVALID_MULTIPART, "Invalid multipart body", str(exc)) from exc


async def _run_flow(request: Request, runtime_deps: RuntimeDeps) -> tuple[str, ModularResult]:
    pipeline = runtime_deps.modular_pipeline
    form = await _read_form(request, runtime_deps.settings.modular.parts_timeout_s)
    try:
        upload = form.get("audio")
        set_name = form.get("set")
        if not isinstance(upload, UploadFile) or not isinstance(set_name, str) or not set_name:
            raise ModularFlowError(400, ERROR_MISSING_FIELDS, "Missing audio or set")
        if not pipeline.has_set(set_name):
            raise ModularFlowError(400, ERROR_INVALID_SET, "Invalid set", f"expected one of {', '.join(pipeline.sets)}")
        audio = await upload.read()
        filename = upload.filename or DEFAULT_AUDIO_FILENAME
    finally:
        await form.close()

    logger.info("modular[%s]: received %d bytes (%s)", set_name, len(audio), filename)
    try:
        result = await pipeline.run(set_name, audio, filename)
    except ModularFlowError:
        raise
    except ProviderError as exc:
        raise ModularFlowError(500, ERROR_DOWNSTREAM_FAILURE, "Internal server error", str(exc)) from exc
    except Exception as exc:
        logger.exception("modular[%s]: unexpected failure", set_name)
        raise ModularFlowError(500, ERROR_DOWNSTREAM_FAILURE, "Internal server error", str(exc)) from exc
    return set_name, result


async def handle_modular_request(request: Request, runtime_deps: RuntimeDeps) -> Response:
    started = time.perf_counter()
    try:
        set_name, result = await _run_flow(request, runtime_deps)
    except ModularFlowError as exc:
        logger.warning("modular: %s -> %d %s (%s)", request.url.path, exc.status_code, exc.code, exc.details)
        return error_response(exc)

    logger.info("modular[%s]: completed in %.0fms", set_name, (time.perf_counter() - started) * 1000.0)
    if wants_audio(request):
        return Response(
            content=result.audio,
            media_type=result.audio_content_type,
            headers={"Content-Disposition": f'inline; filename="{TTS_FILENAME}"'},
        )
    return ORJSONResponse(content=result_payload(set_name, result))


__all__ = ["handle_modular_request", "result_payload", "wants_audio"]
