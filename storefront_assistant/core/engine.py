"""
Speech engine that manages the TTS and STT backends.
"""

import logging
from typing import Any

from storefront_assistant.config import get_config
from storefront_assistant.stt.base import STTBackend, TranscriptionResult
from storefront_assistant.tts.base import SynthesisResult, TTSBackend, Voice
from storefront_assistant.tts.cache import TTSCache

logger = logging.getLogger(__name__)


class SpeechEngine:
    """
    Speech engine for synthesis and recognition.

    Manages backend loading, cached synthesis, and transcription of
    uploaded recordings.
    """

    def __init__(self, cache: TTSCache | None = None):
        """Initialize the engine."""
        self._tts_backend: TTSBackend | None = None
        self._stt_backend: STTBackend | None = None
        self._config = get_config()
        self._cache = cache or TTSCache(
            max_entries=self._config.tts.cache_entries,
            max_text_len=self._config.tts.cache_max_text_len,
        )

    # === TTS Methods ===

    def load_tts_backend(
        self,
        backend: TTSBackend | str,
        **kwargs,
    ) -> None:
        """
        Load a TTS backend.

        Args:
            backend: TTSBackend instance or backend name (e.g., "gtts")
            **kwargs: Backend-specific options
        """
        if isinstance(backend, str):
            from storefront_assistant.tts.registry import get_tts_backend

            backend = get_tts_backend(backend)

        # Unload existing backend
        if self._tts_backend is not None:
            self._tts_backend.unload()

        backend.load(**kwargs)
        self._tts_backend = backend
        self._cache.clear()
        logger.info("TTS backend loaded: %s", backend.name)

    def unload_tts_backend(self) -> None:
        """Unload the current TTS backend."""
        if self._tts_backend is not None:
            self._tts_backend.unload()
            self._tts_backend = None
            self._cache.clear()

    def synthesize(
        self,
        text: str,
        voice: str | None = None,
        language: str | None = None,
        **kwargs,
    ) -> SynthesisResult:
        """
        Synthesize speech from text, reusing cached clips.

        Args:
            text: Text to synthesize
            voice: Voice ID (uses default if None)
            language: Language code (uses default if None)
            **kwargs: Backend-specific options

        Returns:
            SynthesisResult with encoded audio

        Raises:
            RuntimeError: If no backend is loaded
            SynthesisError: If the backend fails
        """
        if self._tts_backend is None:
            raise RuntimeError("No TTS backend loaded. Call load_tts_backend() first.")

        voice = voice or self._config.tts.default_voice
        language = language or self._config.tts.default_language

        cached = self._cache.get(text, voice, language)
        if cached is not None:
            logger.debug("TTS cache hit: %r", text)
            return cached

        result = self._tts_backend.synthesize(text, voice, language, **kwargs)
        self._cache.put(text, voice, language, result)
        return result

    def get_tts_voices(self) -> list[Voice]:
        """Get available TTS voices."""
        if self._tts_backend is None:
            return []
        return self._tts_backend.get_voices()

    def get_tts_info(self) -> dict[str, Any]:
        """Get TTS backend information."""
        if self._tts_backend is None:
            return {"loaded": False}
        info = self._tts_backend.get_info()
        info["cached_clips"] = len(self._cache)
        return info

    # === STT Methods ===

    def load_stt_backend(
        self,
        backend: STTBackend | str,
        **kwargs,
    ) -> None:
        """
        Load an STT backend.

        Args:
            backend: STTBackend instance or backend name (e.g., "vosk")
            **kwargs: Backend-specific options
        """
        if isinstance(backend, str):
            from storefront_assistant.stt.registry import get_stt_backend

            backend = get_stt_backend(backend)

        # Unload existing backend
        if self._stt_backend is not None:
            self._stt_backend.unload()

        backend.load(**kwargs)
        self._stt_backend = backend
        logger.info("STT backend loaded: %s", backend.name)

    def unload_stt_backend(self) -> None:
        """Unload the current STT backend."""
        if self._stt_backend is not None:
            self._stt_backend.unload()
            self._stt_backend = None

    def transcribe(self, audio: bytes, **kwargs) -> TranscriptionResult:
        """
        Transcribe an encoded recording (wav, webm, ogg, mp3...).

        Args:
            audio: Encoded audio bytes as uploaded
            **kwargs: Backend-specific options

        Returns:
            TranscriptionResult with text and word segments

        Raises:
            RuntimeError: If no backend is loaded or decoding fails
            TranscriptionError: If the recognizer fails
        """
        if self._stt_backend is None:
            raise RuntimeError("No STT backend loaded. Call load_stt_backend() first.")

        from storefront_assistant.core.audio import decode_audio

        sample_rate = self._stt_backend.sample_rate
        pcm = decode_audio(audio, sample_rate=sample_rate)
        return self._stt_backend.transcribe(pcm, sample_rate, **kwargs)

    def get_stt_languages(self) -> list[str]:
        """Get languages supported by the loaded STT backend."""
        if self._stt_backend is None:
            return []
        return self._stt_backend.get_languages()

    def get_stt_info(self) -> dict[str, Any]:
        """Get STT backend information."""
        if self._stt_backend is None:
            return {"loaded": False}
        return self._stt_backend.get_info()

    # === General Methods ===

    def get_info(self) -> dict[str, Any]:
        """Get engine information."""
        return {
            "tts": self.get_tts_info(),
            "stt": self.get_stt_info(),
        }
