"""PCM16 conversion for realtime uploads (file -> mono PCM16 at a target rate)."""

from __future__ import annotations

import numpy as np
import soxr
import soundfile as sf


def float_to_pcm16(x: np.ndarray) -> bytes:
    """Clip float samples to [-1, 1] and convert to little-endian PCM16 bytes."""
    x = np.clip(np.asarray(x, dtype=np.float32), -1.0, 1.0)
    pcm = np.where(x < 0, x * 32768.0, x * 32767.0).astype("<i2")
    return pcm.tobytes()


def to_mono(x: np.ndarray) -> np.ndarray:
    if getattr(x, "ndim", 1) > 1:
        return x.mean(axis=1)
    return x


def resample(x: np.ndarray, sr: int, target_sr: int) -> np.ndarray:
    if sr == target_sr:
        return x
    y = soxr.resample(x.astype(np.float32, copy=False), sr, target_sr)
    return y.astype(np.float32, copy=False)


def file_to_pcm16(path: str, *, target_sr: int) -> bytes:
    """Load an audio file and return PCM16 mono bytes at ``target_sr``."""
    x, sr = sf.read(path, dtype="float32", always_2d=False)
    x = resample(to_mono(x), int(sr), int(target_sr))
    return float_to_pcm16(x)


def pcm16_duration_seconds(pcm: bytes, sample_rate: int) -> float:
    if sample_rate <= 0:
        return 0.0
    return (len(pcm) / 2) / float(sample_rate)


__all__ = ["file_to_pcm16", "float_to_pcm16", "pcm16_duration_seconds", "resample", "to_mono"]
