"""
gTTS backend implementation.

Uses the Google Translate text-to-speech endpoint. Produces MP3 and needs
network access; the voice id selects the regional accent (top-level domain).
"""

import io
import logging
from typing import Any

from storefront_assistant.tts.base import SynthesisError, SynthesisResult, TTSBackend, Voice
from storefront_assistant.tts.registry import register_tts_backend

logger = logging.getLogger(__name__)

# Accents exposed by Google Translate, keyed by top-level domain
GTTS_VOICES = {
    "com": {"name": "English (United States)", "language": "en"},
    "co.uk": {"name": "English (United Kingdom)", "language": "en"},
    "com.au": {"name": "English (Australia)", "language": "en"},
    "ca": {"name": "English (Canada)", "language": "en"},
    "co.in": {"name": "English (India)", "language": "en"},
    "ie": {"name": "English (Ireland)", "language": "en"},
    "co.za": {"name": "English (South Africa)", "language": "en"},
}


@register_tts_backend("gtts")
class GTTSBackend(TTSBackend):
    """Google Translate TTS backend."""

    name = "gtts"
    mime_type = "audio/mpeg"
    requires_network = True

    def __init__(self):
        super().__init__()
        self._slow = False
        self._timeout: float | None = None

    def load(self, slow: bool = False, timeout: float | None = 10.0, **kwargs) -> None:
        """
        Check gTTS is importable and store request options.

        Args:
            slow: Read text more slowly
            timeout: HTTP timeout per request in seconds
        """
        try:
            import gtts  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "gTTS not installed. Install with: pip install gTTS"
            ) from e

        self._slow = slow
        self._timeout = timeout
        self._loaded = True
        logger.info("gTTS backend ready (slow=%s)", slow)

    def synthesize(
        self,
        text: str,
        voice: str = "com",
        language: str = "en",
        **kwargs,
    ) -> SynthesisResult:
        """
        Synthesize text to MP3.

        Args:
            text: Text to synthesize
            voice: Accent top-level domain (see GTTS_VOICES)
            language: Language code
        """
        if not self._loaded:
            raise RuntimeError("Backend not loaded. Call load() first.")

        from gtts import gTTS
        from gtts.tts import gTTSError

        tld = voice if voice in GTTS_VOICES else "com"

        buffer = io.BytesIO()
        try:
            gTTS(text, lang=language, tld=tld, slow=self._slow, timeout=self._timeout).write_to_fp(buffer)
        except (gTTSError, ValueError, AssertionError) as e:
            raise SynthesisError(f"gTTS synthesis failed: {e}") from e

        return SynthesisResult(
            audio=buffer.getvalue(),
            mime_type=self.mime_type,
            voice=tld,
            text=text,
            metadata={"language": language},
        )

    def get_voices(self) -> list[Voice]:
        """Get available accents."""
        return [
            Voice(id=tld, name=info["name"], language=info["language"])
            for tld, info in GTTS_VOICES.items()
        ]

    def get_languages(self) -> list[str]:
        """Get supported languages."""
        return ["en"]

    def get_info(self) -> dict[str, Any]:
        """Get backend information."""
        info = super().get_info()
        info["slow"] = self._slow
        return info
