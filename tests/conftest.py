"""
Shared fixtures: in-memory speech backends and a fresh server state.
"""

import io

import numpy as np
import pytest
from scipy.io import wavfile

from storefront_assistant.config import Config, set_config
from storefront_assistant.stt.base import STTBackend, TranscriptionError, TranscriptionResult
from storefront_assistant.stt.registry import register_stt_backend
from storefront_assistant.tts.base import SynthesisError, SynthesisResult, TTSBackend, Voice
from storefront_assistant.tts.registry import register_tts_backend


@register_tts_backend("fake")
class FakeTTSBackend(TTSBackend):
    """Returns the text itself as the "audio"; can be told to fail."""

    mime_type = "audio/mpeg"

    def __init__(self, fail: bool = False):
        super().__init__()
        self.fail = fail
        self.calls: list[str] = []

    def load(self, **kwargs) -> None:
        self._loaded = True

    def synthesize(self, text, voice="default", language="en", **kwargs):
        self.calls.append(text)
        if self.fail:
            raise SynthesisError("synthesizer offline")
        return SynthesisResult(audio=text.encode(), mime_type=self.mime_type, voice=voice, text=text)

    def get_voices(self):
        return [Voice(id="default", name="Default", language="en")]


@register_stt_backend("fake")
class FakeSTTBackend(STTBackend):
    """Returns a canned transcript; can be told to fail."""

    def __init__(self, text: str = "sort by price", confidence: float | None = 0.9, fail: bool = False):
        super().__init__()
        self.text = text
        self.confidence = confidence
        self.fail = fail
        self.calls = 0

    def load(self, **kwargs) -> None:
        self._loaded = True

    def transcribe(self, audio, sample_rate, **kwargs):
        self.calls += 1
        if self.fail:
            raise TranscriptionError("recognizer crashed")
        return TranscriptionResult(text=self.text, confidence=self.confidence)


@pytest.fixture(autouse=True)
def default_config():
    """Use default settings for every test."""
    set_config(Config())
    yield
    set_config(Config())


@pytest.fixture
def wav_bytes():
    """Half a second of silence as a 16 kHz WAV file."""
    buffer = io.BytesIO()
    wavfile.write(buffer, 16000, np.zeros(8000, dtype=np.int16))
    return buffer.getvalue()
