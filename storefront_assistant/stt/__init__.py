"""
STT (Speech-to-Text) backends.
"""

from storefront_assistant.stt.base import (
    STTBackend,
    TranscriptionError,
    TranscriptionResult,
    TranscriptionSegment,
)
from storefront_assistant.stt.registry import get_stt_backend, list_stt_backends, register_stt_backend

__all__ = [
    "STTBackend",
    "TranscriptionError",
    "TranscriptionResult",
    "TranscriptionSegment",
    "register_stt_backend",
    "get_stt_backend",
    "list_stt_backends",
]
