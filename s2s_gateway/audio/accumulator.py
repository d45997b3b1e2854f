"""Ordered buffer of streamed audio deltas."""

from __future__ import annotations

from .wav import pcm16_chunks_to_wav


class AudioAccumulator:
    """Collect base64 PCM16 fragments and wrap them into one WAV clip.

    Fragments are kept in arrival order; out-of-order delivery is not corrected.
    """

    def __init__(self, *, sample_rate: int) -> None:
        self.sample_rate = int(sample_rate)
        self._chunks: list[str] = []

    def __len__(self) -> int:
        return len(self._chunks)

    def append(self, chunk: str) -> None:
        self._chunks.append(chunk)

    def drain(self) -> list[str]:
        chunks, self._chunks = self._chunks, []
        return chunks

    def to_wav(self) -> bytes:
        """Drain all fragments into a WAV container. Empty input yields a header-only clip."""
        return pcm16_chunks_to_wav(self.drain(), self.sample_rate)


__all__ = ["AudioAccumulator"]
