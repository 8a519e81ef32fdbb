"""
Core utilities for query normalization, audio processing, and the speech engine.
"""

from storefront_assistant.core.audio import decode_audio, parse_data_uri, to_data_uri
from storefront_assistant.core.text import normalize
from storefront_assistant.core.engine import SpeechEngine

__all__ = [
    "SpeechEngine",
    "normalize",
    "decode_audio",
    "to_data_uri",
    "parse_data_uri",
]
