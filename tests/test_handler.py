"""
Tests for the query handler and speech engine.
"""

import asyncio
import base64

import pytest

from conftest import FakeSTTBackend, FakeTTSBackend
from storefront_assistant.assistant.handler import NOT_RECOGNIZED, QueryHandler
from storefront_assistant.core.engine import SpeechEngine
from storefront_assistant.tts.cache import TTSCache


@pytest.fixture
def tts():
    return FakeTTSBackend()


@pytest.fixture
def stt():
    return FakeSTTBackend()


@pytest.fixture
def engine(tts, stt):
    engine = SpeechEngine()
    engine.load_tts_backend(tts)
    engine.load_stt_backend(stt)
    return engine


@pytest.fixture
def handler(engine):
    return QueryHandler(engine)


class TestHandle:
    """Test QueryHandler.handle()."""

    def test_show_cart(self, handler):
        result = asyncio.run(handler.handle("open my cart"))

        assert result.action == "show_cart"
        assert result.params is None
        assert result.response_text == "Opening your shopping cart."
        expected = base64.b64encode(b"Opening your shopping cart.").decode()
        assert result.audio == f"data:audio/mpeg;base64,{expected}"

    def test_speaks_response_text(self, handler, tts):
        result = asyncio.run(handler.handle("sort by price descending"))

        assert result.params == {"sortBy": "price", "order": "desc"}
        assert tts.calls == ["Sorting products by price high to low."]

    def test_unknown(self, handler):
        result = asyncio.run(handler.handle("tell me a joke"))

        assert result.action == "unknown"
        assert result.params == {"query": "tell me a joke"}
        assert result.response_text == "I am not sure how to help with that request."
        assert result.has_audio

    def test_synthesis_failure_gives_empty_audio(self, handler, tts, caplog):
        tts.fail = True

        result = asyncio.run(handler.handle("sort by name"))

        assert result.action == "sort_and_filter"
        assert result.response_text == "Sorting products by name A to Z."
        assert result.audio == ""
        assert "Failed to generate TTS audio" in caplog.text

    def test_no_tts_backend_gives_empty_audio(self):
        handler = QueryHandler(SpeechEngine())
        result = asyncio.run(handler.handle("hello"))

        assert result.action == "greeting"
        assert result.audio == ""


class TestHandleSpeech:
    """Test QueryHandler.handle_speech()."""

    def test_recognized(self, handler, wav_bytes):
        voice = asyncio.run(handler.handle_speech(wav_bytes))

        assert voice.text == "sort by price"
        assert voice.confidence == 0.9
        assert voice.error is None
        assert voice.result.params == {"sortBy": "price", "order": "asc"}

    def test_empty_transcript_skips_query(self, handler, stt, tts, wav_bytes):
        stt.text = "   "

        voice = asyncio.run(handler.handle_speech(wav_bytes))

        assert voice.text == ""
        assert voice.error == NOT_RECOGNIZED
        assert voice.result is None
        assert tts.calls == []

    def test_recognizer_failure(self, handler, stt, tts, wav_bytes):
        stt.fail = True

        voice = asyncio.run(handler.handle_speech(wav_bytes))

        assert voice.error == NOT_RECOGNIZED
        assert voice.result is None
        assert tts.calls == []

    def test_transcribe_only(self, handler, tts, wav_bytes):
        voice = asyncio.run(handler.transcribe(wav_bytes))

        assert voice.recognized
        assert voice.result is None
        assert tts.calls == []


class TestSpeechEngine:
    """Test SpeechEngine backend management and caching."""

    def test_synthesize_without_backend(self):
        with pytest.raises(RuntimeError, match="No TTS backend loaded"):
            SpeechEngine().synthesize("hello")

    def test_transcribe_without_backend(self, wav_bytes):
        with pytest.raises(RuntimeError, match="No STT backend loaded"):
            SpeechEngine().transcribe(wav_bytes)

    def test_load_by_name(self):
        engine = SpeechEngine()
        engine.load_tts_backend("fake")
        assert engine.get_tts_info()["name"] == "fake"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="not found"):
            SpeechEngine().load_tts_backend("nope")

    def test_synthesis_is_cached(self, engine, tts):
        engine.synthesize("Opening your shopping cart.")
        engine.synthesize("Opening your shopping cart.")

        assert tts.calls == ["Opening your shopping cart."]
        assert engine.get_tts_info()["cached_clips"] == 1

    def test_cache_disabled(self, tts):
        engine = SpeechEngine(cache=TTSCache(max_entries=0))
        engine.load_tts_backend(tts)

        engine.synthesize("hi")
        engine.synthesize("hi")

        assert tts.calls == ["hi", "hi"]

    def test_unload_clears_state(self, engine):
        engine.unload_tts_backend()
        engine.unload_stt_backend()

        assert engine.get_info() == {"tts": {"loaded": False}, "stt": {"loaded": False}}
