"""
Tests for audio utilities and the synthesis cache.
"""

import io

import numpy as np
import pytest
from scipy.io import wavfile

from storefront_assistant.core.audio import (
    decode_audio,
    parse_data_uri,
    resample_audio,
    to_data_uri,
    to_mono_int16,
)
from storefront_assistant.tts.base import SynthesisResult
from storefront_assistant.tts.cache import TTSCache


class TestDataUri:
    """Test data URI encoding."""

    def test_to_data_uri(self):
        assert to_data_uri(b"abc", "audio/mpeg") == "data:audio/mpeg;base64,YWJj"

    def test_parse_data_uri(self):
        assert parse_data_uri("data:audio/mpeg;base64,YWJj") == ("audio/mpeg", b"abc")

    def test_parse_rejects_plain_string(self):
        with pytest.raises(ValueError):
            parse_data_uri("https://example.com/a.mp3")

    def test_synthesis_result_uri(self):
        result = SynthesisResult(audio=b"abc", mime_type="audio/wav")
        assert result.to_data_uri() == "data:audio/wav;base64,YWJj"


class TestDecode:
    """Test audio decoding for recognition."""

    def test_decode_wav_resamples(self):
        buffer = io.BytesIO()
        wavfile.write(buffer, 8000, np.zeros(8000, dtype=np.int16))

        pcm = decode_audio(buffer.getvalue(), sample_rate=16000)

        assert pcm.dtype == np.int16
        assert len(pcm) == 16000

    def test_decode_wav_same_rate(self, wav_bytes):
        pcm = decode_audio(wav_bytes, sample_rate=16000)
        assert len(pcm) == 8000

    def test_to_mono_int16_from_float(self):
        audio = np.array([0.0, 0.5, -1.0], dtype=np.float32)
        assert to_mono_int16(audio).tolist() == [0, 16383, -32767]

    def test_to_mono_int16_downmixes(self):
        audio = np.array([[100, 300], [-200, -400]], dtype=np.int16)
        assert to_mono_int16(audio).tolist() == [200, -300]

    def test_resample_noop(self):
        audio = np.ones(10, dtype=np.int16)
        assert resample_audio(audio, 16000, 16000) is audio


def _clip(text: str) -> SynthesisResult:
    return SynthesisResult(audio=text.encode(), text=text)


class TestTTSCache:
    """Test the LRU synthesis cache."""

    def test_miss_returns_none(self):
        assert TTSCache().get("hello", "com", "en") is None

    def test_hit(self):
        cache = TTSCache()
        cache.put("hello", "com", "en", _clip("hello"))
        assert cache.get("hello", "com", "en").audio == b"hello"

    def test_evicts_least_recently_used(self):
        cache = TTSCache(max_entries=2)
        cache.put("one", "com", "en", _clip("one"))
        cache.put("two", "com", "en", _clip("two"))
        cache.get("one", "com", "en")
        cache.put("three", "com", "en", _clip("three"))  # evicts "two"

        assert cache.get("one", "com", "en") is not None
        assert cache.get("two", "com", "en") is None
        assert len(cache) == 2

    def test_skips_long_text(self):
        cache = TTSCache(max_text_len=10)
        cache.put("x" * 20, "com", "en", _clip("x"))
        assert len(cache) == 0

    def test_voice_and_language_are_part_of_key(self):
        cache = TTSCache()
        cache.put("hi", "com", "en", _clip("us"))
        cache.put("hi", "co.uk", "en", _clip("uk"))

        assert cache.get("hi", "com", "en").audio == b"us"
        assert cache.get("hi", "co.uk", "en").audio == b"uk"
        assert cache.get("hi", "com", "fr") is None

    def test_clear(self):
        cache = TTSCache()
        cache.put("hi", "com", "en", _clip("hi"))
        cache.clear()
        assert len(cache) == 0
