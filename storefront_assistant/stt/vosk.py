"""
Vosk STT backend implementation.

Offline Kaldi-based recognition; the small en-US model is enough for short
shopping commands.
"""

import json
import logging
from typing import Any

import numpy as np

from storefront_assistant.config import get_config
from storefront_assistant.stt.base import (
    STTBackend,
    TranscriptionError,
    TranscriptionResult,
    TranscriptionSegment,
)
from storefront_assistant.stt.registry import register_stt_backend

logger = logging.getLogger(__name__)


@register_stt_backend("vosk")
class VoskBackend(STTBackend):
    """Vosk STT backend."""

    name = "vosk"
    sample_rate = 16000

    def __init__(self):
        super().__init__()
        self._model_name = get_config().stt.model_name
        self._model_path: str | None = None

    def load(
        self,
        model_path: str | None = None,
        model_name: str | None = None,
        **kwargs,
    ) -> None:
        """
        Load a Vosk model.

        Args:
            model_path: Directory of an unpacked model
            model_name: Model to fetch into the Vosk cache when no path is given
        """
        try:
            from vosk import Model, SetLogLevel
        except ImportError as e:
            raise ImportError(
                "Vosk not installed. Install with: pip install vosk"
            ) from e

        SetLogLevel(-1)

        config = get_config().stt
        self._model_path = model_path or config.model_path
        self._model_name = model_name or config.model_name

        if self._model_path:
            logger.info("Loading Vosk model from %s...", self._model_path)
            self._model = Model(model_path=self._model_path)
        else:
            logger.info("Loading Vosk model %s...", self._model_name)
            self._model = Model(model_name=self._model_name)

        self._loaded = True
        logger.info("Vosk model loaded")

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
        """
        if not self._loaded:
            raise RuntimeError("Model not loaded. Call load() first.")

        from vosk import KaldiRecognizer

        if audio.dtype != np.int16:
            audio = np.clip(audio * 32767, -32768, 32767).astype(np.int16)

        try:
            recognizer = KaldiRecognizer(self._model, sample_rate)
            recognizer.SetWords(True)
            recognizer.AcceptWaveform(audio.tobytes())
            raw = json.loads(recognizer.FinalResult())
        except Exception as e:
            raise TranscriptionError(f"Vosk recognition failed: {e}") from e

        logger.debug("Vosk result: %s", raw)
        return self._parse_result(raw, duration=len(audio) / sample_rate)

    @staticmethod
    def _parse_result(raw: dict[str, Any], duration: float) -> TranscriptionResult:
        """Build a TranscriptionResult from Vosk's final-result JSON."""
        words = raw.get("result") or []
        segments = [
            TranscriptionSegment(
                text=w.get("word", ""),
                start=float(w.get("start", 0.0)),
                end=float(w.get("end", 0.0)),
                confidence=float(w.get("conf", 1.0)),
            )
            for w in words
        ]

        confidence = None
        if segments:
            confidence = sum(s.confidence for s in segments) / len(segments)

        return TranscriptionResult(
            text=(raw.get("text") or "").strip(),
            segments=segments,
            language="en",
            duration=duration,
            confidence=confidence,
        )

    def get_info(self) -> dict[str, Any]:
        """Get backend information."""
        info = super().get_info()
        info.update({
            "model_name": self._model_name,
            "model_path": self._model_path,
        })
        return info
