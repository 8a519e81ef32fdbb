"""
TTS (Text-to-Speech) backends.
"""

from storefront_assistant.tts.base import SynthesisError, SynthesisResult, TTSBackend, Voice
from storefront_assistant.tts.cache import TTSCache
from storefront_assistant.tts.registry import get_tts_backend, list_tts_backends, register_tts_backend

__all__ = [
    "TTSBackend",
    "Voice",
    "SynthesisResult",
    "SynthesisError",
    "TTSCache",
    "register_tts_backend",
    "get_tts_backend",
    "list_tts_backends",
]
