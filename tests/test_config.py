"""Tests for settings, YAML loading and environment overrides."""

from pathlib import Path

import pytest

from storefront_assistant.config import Config, get_config, load_config, set_config

CONFIGS_DIR = Path(__file__).resolve().parent.parent / "configs"


class TestDefaults:
    def test_defaults(self):
        config = Config()
        assert config.server.port == 3000
        assert config.tts.default_backend == "gtts"
        assert config.stt.default_backend == "vosk"
        assert config.stt.sample_rate == 16000
        assert config.sequencer.reaction_seconds == 1.0
        assert config.sequencer.confused_seconds == 3.0

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_ASSISTANT_PORT", "8080")
        monkeypatch.setenv("STOREFRONT_ASSISTANT_URL", "http://shop.local:3000")
        monkeypatch.setenv("STOREFRONT_ASSISTANT_VOSK_MODEL", "/models/vosk-en")

        config = Config()

        assert config.server.port == 8080
        assert config.client.base_url == "http://shop.local:3000"
        assert config.stt.model_path == "/models/vosk-en"

    def test_set_config(self):
        config = Config()
        config.tts.default_voice = "co.uk"
        set_config(config)
        assert get_config().tts.default_voice == "co.uk"


class TestLoadConfig:
    def test_bundled_default(self):
        config = load_config(CONFIGS_DIR / "default.yaml")
        assert config.tts.default_backend == "gtts"
        assert config.sequencer.confused_seconds == 3.0

    def test_partial_file(self, tmp_path):
        path = tmp_path / "shop.yaml"
        path.write_text("sequencer:\n  reaction_seconds: 0.5\nunrelated: true\n")

        config = load_config(path)

        assert config.sequencer.reaction_seconds == 0.5
        assert config.sequencer.confused_seconds == 3.0
        assert config.server.port == 3000

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).server.port == 3000

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_value(self, tmp_path):
        from pydantic import ValidationError

        path = tmp_path / "bad.yaml"
        path.write_text("sequencer:\n  reaction_seconds: -1\n")
        with pytest.raises(ValidationError):
            load_config(path)
