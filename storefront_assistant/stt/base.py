"""
Abstract base class for STT backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np


class TranscriptionError(RuntimeError):
    """Raised when a backend fails to recognize audio."""


@dataclass
class TranscriptionSegment:
    """A recognized word or phrase."""

    text: str
    start: float  # Start time in seconds
    end: float  # End time in seconds
    confidence: float = 1.0  # Confidence score (0.0 - 1.0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "confidence": self.confidence,
        }


@dataclass
class TranscriptionResult:
    """Result from speech transcription."""

    text: str  # Full transcription
    segments: list[TranscriptionSegment] = field(default_factory=list)
    language: str = "en"
    duration: float = 0.0  # Audio duration in seconds
    confidence: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "segments": [s.to_dict() for s in self.segments],
            "language": self.language,
            "duration": self.duration,
            "confidence": self.confidence,
            "metadata": self.metadata,
        }


class STTBackend(ABC):
    """Abstract base class for STT backends."""

    name: str = "base"
    sample_rate: int = 16000  # Rate the recognizer expects

    def __init__(self):
        """Initialize the backend."""
        self._loaded = False
        self._model = None

    @abstractmethod
    def load(self, **kwargs) -> None:
        """
        Load the model into memory.

        Args:
            **kwargs: Backend-specific options
        """
        pass

    @abstractmethod
    def transcribe(
        self,
        audio: np.ndarray,
        sample_rate: int,
        **kwargs,
    ) -> TranscriptionResult:
        """
        Transcribe audio to text.

        Args:
            audio: Audio data (int16 mono PCM)
            sample_rate: Sample rate in Hz
            **kwargs: Backend-specific options

        Returns:
            TranscriptionResult with text and word segments

        Raises:
            TranscriptionError: If the recognizer fails
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
        """Check if model is loaded."""
        return self._loaded

    def unload(self) -> None:
        """Unload model from memory."""
        self._model = None
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
            "sample_rate": self.sample_rate,
        }
