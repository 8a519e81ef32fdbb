"""
Pydantic schemas for API requests and responses.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# === General ===


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    tts_backend: str | None = None
    stt_backend: str | None = None


class BackendInfo(BaseModel):
    """Backend information."""

    name: str
    loaded: bool
    extra: dict[str, Any] = Field(default_factory=dict)


class BackendListResponse(BaseModel):
    """List of available backends."""

    backends: list[BackendInfo]


class LoadBackendRequest(BaseModel):
    """Request to load a backend."""

    options: dict[str, Any] = Field(default_factory=dict)


class LoadBackendResponse(BaseModel):
    """Response after loading a backend."""

    success: bool
    message: str
    backend: BackendInfo | None = None


# === Assistant ===


class QueryRequest(BaseModel):
    """Assistant text query."""

    query: str


class AssistantResponse(BaseModel):
    """Assistant result: action directive, spoken sentence and audio."""

    model_config = ConfigDict(populate_by_name=True)

    action: str
    params: dict[str, Any] | None = None
    response_text: str = Field(..., alias="responseText")
    audio: str = ""  # data URI, empty when synthesis failed


class SpeechToTextResponse(BaseModel):
    """Speech recognition result."""

    text: str
    confidence: float | None = None


class VoiceQueryResponse(BaseModel):
    """Transcript plus assistant result for a spoken query."""

    text: str
    confidence: float | None = None
    response: AssistantResponse | None = None
    error: str | None = None


class CommandInfo(BaseModel):
    """A supported assistant command."""

    action: str
    description: str
    params: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)


class CommandListResponse(BaseModel):
    """List of supported commands."""

    commands: list[CommandInfo]


# === TTS ===


class VoiceInfo(BaseModel):
    """Voice information."""

    id: str
    name: str
    language: str
    gender: str = ""
    description: str = ""


class VoiceListResponse(BaseModel):
    """List of available voices."""

    voices: list[VoiceInfo]


class SynthesizeRequest(BaseModel):
    """TTS synthesis request."""

    text: str = Field(..., min_length=1, max_length=5000)
    voice: str | None = None
    language: str | None = None


class SynthesizeResponse(BaseModel):
    """TTS synthesis response with a data URI."""

    success: bool
    voice: str = ""
    mime_type: str = ""
    audio: str | None = None
    error: str | None = None
