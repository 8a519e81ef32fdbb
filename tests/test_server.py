"""
Tests for the FastAPI server.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeSTTBackend, FakeTTSBackend
from storefront_assistant.server import app as app_module


@pytest.fixture
def engine():
    """Fresh engine per test."""
    app_module._engine = None
    app_module._handler = None
    yield app_module.get_engine()
    app_module._engine = None
    app_module._handler = None


@pytest.fixture
def client(engine):
    """Create test client."""
    return TestClient(app_module.create_app())


@pytest.fixture
def tts(engine):
    backend = FakeTTSBackend()
    engine.load_tts_backend(backend)
    return backend


@pytest.fixture
def stt(engine):
    backend = FakeSTTBackend(text="show me the laptops", confidence=0.75)
    engine.load_stt_backend(backend)
    return backend


def _upload(data: bytes, content_type: str = "audio/wav"):
    return {"audio": ("audio.wav", data, content_type)}


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert data["tts_backend"] is None

    def test_health_reports_backends(self, client, tts, stt):
        data = client.get("/health").json()
        assert data["tts_backend"] == "fake"
        assert data["stt_backend"] == "fake"

    def test_info_endpoint(self, client):
        data = client.get("/info").json()
        assert "tts" in data
        assert "stt" in data


class TestQueryEndpoint:
    """Test POST /assistant/query."""

    def test_show_cart(self, client, tts):
        response = client.post("/assistant/query", json={"query": "open my cart"})
        assert response.status_code == 200

        data = response.json()
        assert data["action"] == "show_cart"
        assert "params" not in data
        assert data["responseText"] == "Opening your shopping cart."
        assert data["audio"].startswith("data:audio/mpeg;base64,")

    def test_sort(self, client, tts):
        data = client.post("/assistant/query", json={"query": "sort by price descending"}).json()

        assert data["action"] == "sort_and_filter"
        assert data["params"] == {"sortBy": "price", "order": "desc"}
        assert data["responseText"] == "Sorting products by price high to low."

    def test_filter_omits_unset_params(self, client, tts):
        data = client.post(
            "/assistant/query", json={"query": "show me items less than 50 dollars"}
        ).json()

        assert data["params"] == {"filter": {"priceLessThan": 50}}

    def test_unknown(self, client, tts):
        data = client.post("/assistant/query", json={"query": "tell me a joke"}).json()

        assert data["action"] == "unknown"
        assert data["params"] == {"query": "tell me a joke"}
        assert data["responseText"] == "I am not sure how to help with that request."

    def test_long_query(self, client, tts):
        query = "tell me a joke " * 200
        response = client.post("/assistant/query", json={"query": query})

        assert response.status_code == 200
        assert response.json()["action"] == "unknown"

    def test_synthesis_failure_still_succeeds(self, client, tts):
        tts.fail = True

        response = client.post("/assistant/query", json={"query": "hello"})

        assert response.status_code == 200
        data = response.json()
        assert data["action"] == "greeting"
        assert data["responseText"] == "Hello! How can I assist you today?"
        assert data["audio"] == ""

    def test_missing_query(self, client):
        assert client.post("/assistant/query", json={}).status_code == 422


class TestSpeechToTextEndpoint:
    """Test POST /assistant/speech-to-text."""

    def test_transcribe(self, client, stt, wav_bytes):
        response = client.post("/assistant/speech-to-text", files=_upload(wav_bytes))
        assert response.status_code == 200
        assert response.json() == {"text": "show me the laptops", "confidence": 0.75}

    def test_missing_file(self, client, stt):
        assert client.post("/assistant/speech-to-text").status_code == 400

    def test_rejects_non_audio(self, client, stt):
        response = client.post(
            "/assistant/speech-to-text",
            files={"audio": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Only audio files are allowed"

    def test_no_backend(self, client, wav_bytes):
        response = client.post("/assistant/speech-to-text", files=_upload(wav_bytes))
        assert response.status_code == 503

    def test_recognizer_failure(self, client, stt, wav_bytes):
        stt.fail = True

        response = client.post("/assistant/speech-to-text", files=_upload(wav_bytes))

        assert response.status_code == 500
        assert "Error processing audio" in response.json()["detail"]

    def test_empty_transcript(self, client, stt, wav_bytes):
        stt.text = ""
        stt.confidence = None

        response = client.post("/assistant/speech-to-text", files=_upload(wav_bytes))

        assert response.status_code == 200
        assert response.json() == {"text": ""}


class TestVoiceQueryEndpoint:
    """Test POST /assistant/voice-query."""

    def test_voice_query(self, client, tts, stt, wav_bytes):
        data = client.post("/assistant/voice-query", files=_upload(wav_bytes)).json()

        assert data["text"] == "show me the laptops"
        assert data["confidence"] == 0.75
        assert data["response"]["action"] == "sort_and_filter"
        assert data["response"]["params"] == {"filter": {"category": "laptops"}}
        assert data["response"]["responseText"] == "Here are the laptops you asked for."
        assert "error" not in data

    def test_not_recognized(self, client, tts, stt, wav_bytes):
        stt.text = ""

        data = client.post("/assistant/voice-query", files=_upload(wav_bytes)).json()

        assert data == {"text": "", "error": "Could not recognize speech."}
        assert tts.calls == []


class TestCommandsEndpoint:
    """Test GET /assistant/commands."""

    def test_commands(self, client):
        data = client.get("/assistant/commands").json()
        actions = [c["action"] for c in data["commands"]]
        assert actions == ["show_cart", "sort_and_filter", "greeting", "unknown"]


class TestTTSEndpoints:
    """Test TTS API endpoints."""

    def test_list_backends(self, client):
        data = client.get("/tts/backends").json()
        names = [b["name"] for b in data["backends"]]
        assert "gtts" in names

    def test_load_and_unload(self, client, engine):
        data = client.post("/tts/backends/fake/load", json={}).json()
        assert data["success"] is True
        assert data["backend"]["name"] == "fake"

        loaded = [b for b in client.get("/tts/backends").json()["backends"] if b["loaded"]]
        assert [b["name"] for b in loaded] == ["fake"]

        assert client.post("/tts/backends/unload").json()["success"] is True
        assert engine.get_tts_info() == {"loaded": False}

    def test_load_unknown_backend(self, client):
        data = client.post("/tts/backends/nope/load", json={}).json()
        assert data["success"] is False
        assert "not found" in data["message"]

    def test_synthesize_without_backend(self, client):
        data = client.post("/tts/synthesize/json", json={"text": "Hello"}).json()
        assert data["success"] is False
        assert data["error"] == "No TTS backend loaded"

    def test_synthesize(self, client, tts):
        data = client.post("/tts/synthesize/json", json={"text": "Hello"}).json()
        assert data["success"] is True
        assert data["mime_type"] == "audio/mpeg"
        assert data["audio"] == "data:audio/mpeg;base64,SGVsbG8="

    def test_voices_without_backend(self, client):
        assert client.get("/tts/voices").status_code == 400

    def test_voices(self, client, tts):
        voices = client.get("/tts/voices").json()["voices"]
        assert voices[0]["id"] == "default"


class TestSTTEndpoints:
    """Test STT API endpoints."""

    def test_list_backends(self, client):
        names = [b["name"] for b in client.get("/stt/backends").json()["backends"]]
        assert "vosk" in names

    def test_load_fake(self, client, engine):
        data = client.post("/stt/backends/fake/load", json={}).json()
        assert data["success"] is True
        assert engine.get_stt_info()["name"] == "fake"

    def test_languages_without_backend(self, client):
        assert client.get("/stt/languages").status_code == 400
