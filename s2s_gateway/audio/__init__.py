from .wav import WAV_MIME_TYPE, WAV_HEADER_BYTES, pcm16_to_wav, pcm16_chunks_to_wav
from .accumulator import AudioAccumulator

__all__ = ["AudioAccumulator", "WAV_HEADER_BYTES", "WAV_MIME_TYPE", "pcm16_chunks_to_wav", "pcm16_to_wav"]
