"""Modular speech-to-speech flow: STT, LLM and TTS providers chained per request."""

from .pipeline import ModularResult, ProviderChain, ModularPipeline, build_modular_pipeline

__all__ = ["ModularPipeline", "ModularResult", "ProviderChain", "build_modular_pipeline"]
