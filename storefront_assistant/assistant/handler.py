"""
Query handler - runs one assistant request end to end.

classify -> describe -> synthesize, in that order; the sentence to speak is
the classifier's output so nothing runs concurrently. A synthesis failure
degrades to an empty ``audio`` field and never fails the request.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from storefront_assistant.assistant.actions import AssistantResult, VoiceResult
from storefront_assistant.assistant.classifier import classify
from storefront_assistant.assistant.responses import describe

if TYPE_CHECKING:
    from storefront_assistant.core.engine import SpeechEngine

logger = logging.getLogger(__name__)

NOT_RECOGNIZED = "Could not recognize speech."


class QueryHandler:
    """
    Orchestrates classification, response text and speech synthesis.

    Holds no per-request state; one instance serves every request.
    """

    def __init__(self, engine: "SpeechEngine"):
        """
        Args:
            engine: Speech engine used for synthesis and transcription
        """
        self._engine = engine

    async def synthesize(self, text: str) -> str:
        """
        Synthesize ``text`` into a data URI.

        Returns:
            "data:<mime>;base64,..." or "" if synthesis failed
        """
        try:
            result = await asyncio.to_thread(self._engine.synthesize, text)
        except Exception:
            logger.exception("Failed to generate TTS audio for %r", text)
            return ""
        return result.to_data_uri()

    async def handle(self, raw_query: str) -> AssistantResult:
        """
        Resolve a text query into an action, sentence and audio.

        Args:
            raw_query: Query as typed or transcribed

        Returns:
            AssistantResult; ``audio`` is "" when synthesis failed
        """
        action = classify(raw_query)
        response_text = describe(action)
        logger.info("Query %r -> %s", raw_query, action.kind.value)

        audio = await self.synthesize(response_text)
        return AssistantResult.from_action(action, response_text, audio)

    async def transcribe(self, audio: bytes) -> VoiceResult:
        """
        Transcribe a recording without running the query pipeline.

        Returns:
            VoiceResult with the transcript, or with an error marker when
            nothing usable was recognized
        """
        try:
            transcription = await asyncio.to_thread(self._engine.transcribe, audio)
        except Exception as e:
            logger.warning("Speech recognition failed: %s", e)
            return VoiceResult(text="", error=NOT_RECOGNIZED)

        text = transcription.text.strip()
        if not text:
            logger.info("Speech recognition returned no text")
            return VoiceResult(text="", error=NOT_RECOGNIZED)

        return VoiceResult(text=text, confidence=transcription.confidence)

    async def handle_speech(self, audio: bytes) -> VoiceResult:
        """
        Transcribe a recording and, if anything was recognized, handle it.

        The query pipeline is never invoked for an unrecognized recording.
        """
        voice = await self.transcribe(audio)
        if not voice.recognized:
            return voice

        voice.result = await self.handle(voice.text)
        return voice
