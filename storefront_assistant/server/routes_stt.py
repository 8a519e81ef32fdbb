"""
STT REST API routes.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from storefront_assistant.server.app import get_engine
from storefront_assistant.server.schemas import (
    BackendInfo,
    BackendListResponse,
    LoadBackendRequest,
    LoadBackendResponse,
)
from storefront_assistant.stt.registry import list_stt_backends

router = APIRouter()


@router.get("/backends", response_model=BackendListResponse)
async def list_backends() -> BackendListResponse:
    """List available STT backends."""
    backends = [
        BackendInfo(name=info["name"], loaded=False, extra=info)
        for info in list_stt_backends()
    ]

    # Check which is loaded
    stt_info = get_engine().get_stt_info()
    if stt_info.get("loaded"):
        for backend in backends:
            if backend.name == stt_info.get("name"):
                backend.loaded = True
                break

    return BackendListResponse(backends=backends)


@router.post("/backends/{name}/load", response_model=LoadBackendResponse)
async def load_backend(name: str, request: LoadBackendRequest) -> LoadBackendResponse:
    """Load an STT backend."""
    engine = get_engine()

    try:
        engine.load_stt_backend(name, **request.options)
        info = engine.get_stt_info()

        return LoadBackendResponse(
            success=True,
            message=f"Loaded STT backend: {name}",
            backend=BackendInfo(name=info["name"], loaded=True, extra=info),
        )

    except ValueError as e:
        return LoadBackendResponse(success=False, message=str(e))
    except Exception as e:
        return LoadBackendResponse(success=False, message=f"Failed to load backend: {e}")


@router.post("/backends/unload")
async def unload_backend() -> dict[str, Any]:
    """Unload the current STT backend."""
    get_engine().unload_stt_backend()
    return {"success": True, "message": "STT backend unloaded"}


@router.get("/languages")
async def get_languages() -> dict[str, Any]:
    """Get supported languages for the current backend."""
    engine = get_engine()

    if not engine.get_stt_info().get("loaded"):
        raise HTTPException(status_code=400, detail="No STT backend loaded")

    return {"languages": engine.get_stt_languages()}


@router.get("/info")
async def get_info() -> dict[str, Any]:
    """Get STT backend information."""
    return get_engine().get_stt_info()
