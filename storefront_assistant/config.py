"""
Configuration and settings for Storefront Assistant.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

ENV_PREFIX = "STOREFRONT_ASSISTANT_"


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(ENV_PREFIX + name, default)


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(_env("PORT", "3000")))
    cors_origins: list[str] = Field(default=["*"])


class TTSConfig(BaseModel):
    """TTS configuration."""

    default_backend: str = Field(default_factory=lambda: _env("TTS_BACKEND", "gtts"))
    default_voice: str = Field(default="com")  # gTTS accent (top-level domain)
    default_language: str = Field(default="en")
    cache_entries: int = Field(default=64, ge=0)
    cache_max_text_len: int = Field(default=120, ge=1)


class STTConfig(BaseModel):
    """STT configuration."""

    default_backend: str = Field(default_factory=lambda: _env("STT_BACKEND", "vosk"))
    model_path: str | None = Field(default_factory=lambda: _env("VOSK_MODEL"))
    model_name: str = Field(default="vosk-model-small-en-us-0.15")
    sample_rate: int = Field(default=16000)


class SequencerConfig(BaseModel):
    """Client reaction timings (seconds)."""

    reaction_seconds: float = Field(default=1.0, gt=0)
    confused_seconds: float = Field(default=3.0, gt=0)


class ClientConfig(BaseModel):
    """Client connection configuration."""

    base_url: str = Field(default_factory=lambda: _env("URL", "http://localhost:3000"))
    timeout: float = Field(default=30.0)  # gTTS round trips can be slow


class Config(BaseModel):
    """Main configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    tts: TTSConfig = Field(default_factory=TTSConfig)
    stt: STTConfig = Field(default_factory=STTConfig)
    sequencer: SequencerConfig = Field(default_factory=SequencerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Unknown top-level sections are ignored; missing sections keep defaults.

    Args:
        path: Path to YAML file

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    import yaml

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    known = set(Config.model_fields)
    return Config(**{k: v for k, v in data.items() if k in known})


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration."""
    global _config
    if _config is None:
        config_file = _env("CONFIG")
        _config = load_config(config_file) if config_file else Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration."""
    global _config
    _config = config
