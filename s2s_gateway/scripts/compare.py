#!/usr/bin/env python3
"""Run the modular and realtime flows on the same audio file and compare them."""

from __future__ import annotations

import time
import base64
import asyncio
import logging
import argparse
from pathlib import Path
from urllib.parse import urlsplit
from dataclasses import dataclass

import httpx

from s2s_gateway.client import RealtimeClient, RealtimeResult, ResponseCollector
from s2s_gateway.audio.pcm import file_to_pcm16, pcm16_duration_seconds
from s2s_gateway.config.modular import SET_OPENAI, SET_GOOGLE, MODULAR_ENDPOINT_PATH
from s2s_gateway.runtime.settings_loader import load_client_settings

logger = logging.getLogger("s2s_gateway.compare")


@dataclass(slots=True)
class FlowReport:
    name: str
    wall_ms: float
    transcript: str = ""
    reply: str = ""
    audio_path: Path | None = None
    error: str | None = None


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Compare modular vs realtime speech-to-speech flows")
    p.add_argument("--file", required=True, help="Input audio file (any format soundfile can read)")
    p.add_argument("--server", default="localhost:3001", help="host:port or http(s)://host:port")
    p.add_argument("--set", dest="provider_set", default=SET_OPENAI, choices=[SET_OPENAI, SET_GOOGLE])
    p.add_argument("--out-dir", default="out", help="Directory for modular.mp3 / realtime.wav")
    p.add_argument("--timeout", type=float, default=60.0, help="Modular HTTP timeout in seconds")
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


def _http_base(server: str) -> str:
    if server.startswith(("http://", "https://")):
        return server.rstrip("/")
    return f"http://{server.rstrip('/')}"


def _ws_url(server: str, path: str) -> str:
    base = _http_base(server)
    scheme = "wss" if base.startswith("https://") else "ws"
    return f"{scheme}://{base.split('://', 1)[1]}{path}"


async def run_modular(args: argparse.Namespace, out_dir: Path) -> FlowReport:
    path = Path(args.file)
    started = time.perf_counter()
    try:
        async with httpx.AsyncClient(base_url=_http_base(args.server), timeout=args.timeout) as client:
            files = {"audio": (path.name, path.read_bytes(), "application/octet-stream")}
            response = await client.post(MODULAR_ENDPOINT_PATH, files=files, data={"set": args.provider_set})
            response.raise_for_status()
            body = response.json()
            audio = base64.b64decode(body.get("audioData") or "")
    except (httpx.HTTPError, OSError, ValueError) as exc:
        return FlowReport("modular", (time.perf_counter() - started) * 1000.0, error=str(exc) or type(exc).__name__)

    wall_ms = (time.perf_counter() - started) * 1000.0
    report = FlowReport(
        "modular",
        wall_ms,
        transcript=body.get("userTranscript", ""),
        reply=body.get("aiReply", ""),
    )
    if audio:
        report.audio_path = out_dir / "modular.mp3"
        report.audio_path.write_bytes(audio)
    return report


async def run_realtime(args: argparse.Namespace, out_dir: Path) -> FlowReport:
    settings = load_client_settings()
    started = time.perf_counter()
    try:
        pcm = await asyncio.to_thread(file_to_pcm16, args.file, target_sr=settings.sample_rate_hz)
        logger.info("realtime: %.2fs of PCM16 @ %dHz", pcm16_duration_seconds(pcm, settings.sample_rate_hz), settings.sample_rate_hz)

        collector = ResponseCollector(sample_rate=settings.sample_rate_hz, timeout_s=settings.response_timeout_s)
        client = RealtimeClient(_ws_url(args.server, _relay_path(settings.relay_url)), settings=settings)
        client.on_message(collector.handle_message)
        async with client:
            await client.start_processing()
            await client.send_audio(pcm)
            await client.stop_processing()
            collector.arm()
            result: RealtimeResult = await collector.wait()
    except Exception as exc:
        return FlowReport("realtime", (time.perf_counter() - started) * 1000.0, error=str(exc) or type(exc).__name__)

    report = FlowReport(
        "realtime",
        (time.perf_counter() - started) * 1000.0,
        transcript=result.transcript,
        error=result.error,
    )
    if result.audio_wav:
        report.audio_path = out_dir / "realtime.wav"
        report.audio_path.write_bytes(result.audio_wav)
    return report


def _relay_path(relay_url: str) -> str:
    return urlsplit(relay_url).path or "/"


def print_report(report: FlowReport) -> None:
    print(f"[{report.name}] {report.wall_ms:.0f} ms")
    if report.error:
        print(f"  error: {report.error}")
    if report.transcript:
        print(f"  transcript: {report.transcript}")
    if report.reply:
        print(f"  reply: {report.reply}")
    if report.audio_path is not None:
        print(f"  audio: {report.audio_path}")


async def run(args: argparse.Namespace) -> int:
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    modular, realtime = await asyncio.gather(run_modular(args, out_dir), run_realtime(args, out_dir))
    for report in (modular, realtime):
        print_report(report)
    if modular.error is None and realtime.error is None:
        faster = "modular" if modular.wall_ms < realtime.wall_ms else "realtime"
        print(f"faster: {faster} by {abs(modular.wall_ms - realtime.wall_ms):.0f} ms")
        return 0
    return 1


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format="%(levelname)s: %(message)s")
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
