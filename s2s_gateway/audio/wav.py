"""Minimal RIFF/WAVE container for mono PCM16 audio."""

from __future__ import annotations

import base64
import struct
from collections.abc import Iterable

WAV_MIME_TYPE = "audio/wav"
WAV_HEADER_BYTES = 44

PCM_FORMAT_TAG = 1
CHANNELS = 1
BITS_PER_SAMPLE = 16
BLOCK_ALIGN = CHANNELS * BITS_PER_SAMPLE // 8

# RIFF, size, WAVE, "fmt ", 16, format, channels, rate, byte rate, block align, bits, "data", size
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def build_wav_header(data_len: int, sample_rate: int) -> bytes:
    if data_len < 0:
        raise ValueError("data_len must be >= 0")
    if sample_rate <= 0:
        raise ValueError("sample_rate must be > 0")
    return _HEADER.pack(
        b"RIFF",
        36 + data_len,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        CHANNELS,
        sample_rate,
        sample_rate * BLOCK_ALIGN,
        BLOCK_ALIGN,
        BITS_PER_SAMPLE,
        b"data",
        data_len,
    )


def pcm16_to_wav(pcm: bytes, sample_rate: int) -> bytes:
    return build_wav_header(len(pcm), sample_rate) + pcm


def decode_pcm16_chunks(base64_chunks: Iterable[str]) -> bytes:
    """Decode base64 fragments and join them in the order given."""
    return b"".join(base64.b64decode(chunk) for chunk in base64_chunks)


def pcm16_chunks_to_wav(base64_chunks: Iterable[str], sample_rate: int) -> bytes:
    return pcm16_to_wav(decode_pcm16_chunks(base64_chunks), sample_rate)


def wav_data_length(wav: bytes) -> int:
    """Read the data sub-chunk length from a container built by this module."""
    if len(wav) < WAV_HEADER_BYTES:
        raise ValueError("buffer shorter than a WAV header")
    return _HEADER.unpack_from(wav)[-1]


__all__ = [
    "WAV_MIME_TYPE",
    "WAV_HEADER_BYTES",
    "build_wav_header",
    "pcm16_to_wav",
    "decode_pcm16_chunks",
    "pcm16_chunks_to_wav",
    "wav_data_length",
]
