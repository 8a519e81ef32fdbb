"""
Abstract base class for TTS backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from storefront_assistant.core.audio import to_data_uri


class SynthesisError(RuntimeError):
    """Raised when a backend fails to synthesize speech."""


@dataclass
class Voice:
    """Voice information."""

    id: str
    name: str
    language: str
    gender: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "language": self.language,
            "gender": self.gender,
            "description": self.description,
        }


@dataclass
class SynthesisResult:
    """Result from speech synthesis."""

    audio: bytes  # Encoded audio (mp3, wav, ...)
    mime_type: str = "audio/mpeg"
    voice: str = ""
    text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def save(self, path: str) -> None:
        """Save encoded audio to file."""
        with open(path, "wb") as f:
            f.write(self.audio)

    def to_data_uri(self) -> str:
        """Encode audio as a self-describing data URI."""
        return to_data_uri(self.audio, self.mime_type)


class TTSBackend(ABC):
    """Abstract base class for TTS backends."""

    name: str = "base"
    mime_type: str = "audio/mpeg"
    requires_network: bool = False

    def __init__(self):
        """Initialize the backend."""
        self._loaded = False

    @abstractmethod
    def load(self, **kwargs) -> None:
        """
        Prepare the backend for synthesis.

        Args:
            **kwargs: Backend-specific options
        """
        pass

    @abstractmethod
    def synthesize(
        self,
        text: str,
        voice: str = "default",
        language: str = "en",
        **kwargs,
    ) -> SynthesisResult:
        """
        Generate speech from text.

        Args:
            text: Text to synthesize
            voice: Voice ID to use
            language: Language code
            **kwargs: Backend-specific options

        Returns:
            SynthesisResult with encoded audio

        Raises:
            SynthesisError: If the engine fails
        """
        pass

    @abstractmethod
    def get_voices(self) -> list[Voice]:
        """
        Get available voices.

        Returns:
            List of Voice objects
        """
        pass

    def get_languages(self) -> list[str]:
        """
        Get supported languages.

        Returns:
            List of language codes
        """
        return ["en"]

    def is_loaded(self) -> bool:
        """Check if backend is ready."""
        return self._loaded

    def unload(self) -> None:
        """Release backend resources."""
        self._loaded = False

    def get_info(self) -> dict[str, Any]:
        """
        Get backend information.

        Returns:
            Dictionary with backend info
        """
        return {
            "name": self.name,
            "loaded": self._loaded,
            "mime_type": self.mime_type,
            "requires_network": self.requires_network,
            "voices": len(self.get_voices()) if self._loaded else 0,
        }
