"""
Assistant REST API routes.
"""

import asyncio
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from storefront_assistant.assistant.commands import list_commands
from storefront_assistant.server.app import get_engine, get_handler
from storefront_assistant.server.schemas import (
    AssistantResponse,
    CommandInfo,
    CommandListResponse,
    QueryRequest,
    SpeechToTextResponse,
    VoiceQueryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_audio(audio: UploadFile | None) -> bytes:
    """Validate an uploaded recording and return its bytes."""
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file uploaded")

    content_type = audio.content_type or ""
    if not content_type.startswith("audio/"):
        raise HTTPException(status_code=400, detail="Only audio files are allowed")

    data = await audio.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded audio file is empty")
    return data


def _require_stt() -> None:
    if not get_engine().get_stt_info().get("loaded"):
        raise HTTPException(status_code=503, detail="Speech recognition is not available")


@router.post(
    "/query",
    response_model=AssistantResponse,
    response_model_exclude_none=True,
)
async def query(request: QueryRequest) -> AssistantResponse:
    """
    Handle a text query.

    Returns the action directive, the sentence to speak and its audio as a
    data URI ("" when speech synthesis failed).
    """
    result = await get_handler().handle(request.query)
    return AssistantResponse(**result.to_dict())


@router.post(
    "/speech-to-text",
    response_model=SpeechToTextResponse,
    response_model_exclude_none=True,
)
async def speech_to_text(audio: UploadFile | None = File(None)) -> SpeechToTextResponse:
    """
    Transcribe an uploaded recording.

    Accepts any audio/* upload (webm, ogg, wav, mp3...).
    """
    data = await _read_audio(audio)
    _require_stt()

    engine = get_engine()
    try:
        result = await asyncio.to_thread(engine.transcribe, data)
    except Exception as e:
        logger.exception("Error processing audio")
        raise HTTPException(status_code=500, detail=f"Error processing audio: {e}") from e

    return SpeechToTextResponse(text=result.text.strip(), confidence=result.confidence)


@router.post(
    "/voice-query",
    response_model=VoiceQueryResponse,
    response_model_exclude_none=True,
)
async def voice_query(audio: UploadFile | None = File(None)) -> VoiceQueryResponse:
    """
    Transcribe a recording and run the recognized text as a query.

    Stops with an error marker when nothing was recognized.
    """
    data = await _read_audio(audio)
    _require_stt()

    voice = await get_handler().handle_speech(data)

    response = None
    if voice.result is not None:
        response = AssistantResponse(**voice.result.to_dict())

    return VoiceQueryResponse(
        text=voice.text,
        confidence=voice.confidence,
        response=response,
        error=voice.error,
    )


@router.get("/commands", response_model=CommandListResponse)
async def get_commands() -> CommandListResponse:
    """List the commands the assistant understands."""
    return CommandListResponse(commands=[CommandInfo(**cmd) for cmd in list_commands()])
