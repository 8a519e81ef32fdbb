"""
TTS REST API routes.
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException

from storefront_assistant.server.app import get_engine
from storefront_assistant.server.schemas import (
    BackendInfo,
    BackendListResponse,
    LoadBackendRequest,
    LoadBackendResponse,
    SynthesizeRequest,
    SynthesizeResponse,
    VoiceInfo,
    VoiceListResponse,
)
from storefront_assistant.tts.registry import list_tts_backends

router = APIRouter()


@router.get("/backends", response_model=BackendListResponse)
async def list_backends() -> BackendListResponse:
    """List available TTS backends."""
    backends = [
        BackendInfo(name=info["name"], loaded=False, extra=info)
        for info in list_tts_backends()
    ]

    # Check which is loaded
    tts_info = get_engine().get_tts_info()
    if tts_info.get("loaded"):
        for backend in backends:
            if backend.name == tts_info.get("name"):
                backend.loaded = True
                break

    return BackendListResponse(backends=backends)


@router.post("/backends/{name}/load", response_model=LoadBackendResponse)
async def load_backend(name: str, request: LoadBackendRequest) -> LoadBackendResponse:
    """Load a TTS backend."""
    engine = get_engine()

    try:
        engine.load_tts_backend(name, **request.options)
        info = engine.get_tts_info()

        return LoadBackendResponse(
            success=True,
            message=f"Loaded TTS backend: {name}",
            backend=BackendInfo(name=info["name"], loaded=True, extra=info),
        )

    except ValueError as e:
        return LoadBackendResponse(success=False, message=str(e))
    except Exception as e:
        return LoadBackendResponse(success=False, message=f"Failed to load backend: {e}")


@router.post("/backends/unload")
async def unload_backend() -> dict[str, Any]:
    """Unload the current TTS backend."""
    get_engine().unload_tts_backend()
    return {"success": True, "message": "TTS backend unloaded"}


@router.get("/voices", response_model=VoiceListResponse)
async def get_voices() -> VoiceListResponse:
    """Get available voices for the current backend."""
    engine = get_engine()

    if not engine.get_tts_info().get("loaded"):
        raise HTTPException(status_code=400, detail="No TTS backend loaded")

    return VoiceListResponse(
        voices=[VoiceInfo(**voice.to_dict()) for voice in engine.get_tts_voices()]
    )


@router.post("/synthesize/json", response_model=SynthesizeResponse)
async def synthesize_json(request: SynthesizeRequest) -> SynthesizeResponse:
    """
    Synthesize speech and return the audio as a data URI.
    """
    engine = get_engine()

    if not engine.get_tts_info().get("loaded"):
        return SynthesizeResponse(success=False, error="No TTS backend loaded")

    try:
        result = await asyncio.to_thread(
            engine.synthesize,
            request.text,
            voice=request.voice,
            language=request.language,
        )
    except Exception as e:
        return SynthesizeResponse(success=False, error=str(e))

    return SynthesizeResponse(
        success=True,
        voice=result.voice,
        mime_type=result.mime_type,
        audio=result.to_data_uri(),
    )


@router.get("/info")
async def get_info() -> dict[str, Any]:
    """Get TTS backend information."""
    return get_engine().get_tts_info()
