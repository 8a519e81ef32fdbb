"""
Tests for STT backends.
"""

import pytest

from storefront_assistant.stt.base import TranscriptionResult, TranscriptionSegment
from storefront_assistant.stt.registry import get_stt_backend, list_stt_backends


class TestSTTBase:
    """Test base STT classes."""

    def test_transcription_result_to_dict(self):
        result = TranscriptionResult(
            text="show cart",
            segments=[TranscriptionSegment(text="show", start=0.0, end=0.4, confidence=0.9)],
            confidence=0.9,
        )

        d = result.to_dict()
        assert d["text"] == "show cart"
        assert d["segments"][0]["end"] == 0.4
        assert d["confidence"] == 0.9


class TestSTTRegistry:
    """Test STT backend registry."""

    def test_list_backends(self):
        backends = {b["name"]: b for b in list_stt_backends()}
        assert "vosk" in backends
        assert backends["vosk"]["sample_rate"] == 16000

    def test_get_unknown_backend(self):
        with pytest.raises(ValueError, match="not found. Available"):
            get_stt_backend("nonexistent")


class TestVoskResultParsing:
    """Test conversion of Vosk's final-result JSON."""

    @pytest.fixture
    def vosk_backend(self):
        from storefront_assistant.stt.vosk import VoskBackend

        return VoskBackend

    def test_words_and_confidence(self, vosk_backend):
        raw = {
            "result": [
                {"word": "sort", "start": 0.1, "end": 0.4, "conf": 1.0},
                {"word": "by", "start": 0.4, "end": 0.5, "conf": 0.8},
                {"word": "price", "start": 0.5, "end": 0.9, "conf": 0.6},
            ],
            "text": "sort by price",
        }

        result = vosk_backend._parse_result(raw, duration=1.5)

        assert result.text == "sort by price"
        assert [s.text for s in result.segments] == ["sort", "by", "price"]
        assert result.confidence == pytest.approx(0.8)
        assert result.duration == 1.5

    def test_silence(self, vosk_backend):
        result = vosk_backend._parse_result({"text": ""}, duration=0.5)

        assert result.text == ""
        assert result.segments == []
        assert result.confidence is None

    def test_transcribe_requires_load(self, vosk_backend):
        import numpy as np

        with pytest.raises(RuntimeError, match="not loaded"):
            vosk_backend().transcribe(np.zeros(160, dtype=np.int16), 16000)
