"""
FastAPI application for the Storefront Assistant server.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_assistant import __version__
from storefront_assistant.assistant.handler import QueryHandler
from storefront_assistant.config import get_config
from storefront_assistant.core.engine import SpeechEngine
from storefront_assistant.server.schemas import HealthResponse

# Global engine and handler instances
_engine: SpeechEngine | None = None
_handler: QueryHandler | None = None


def get_engine() -> SpeechEngine:
    """Get the global engine instance."""
    global _engine
    if _engine is None:
        _engine = SpeechEngine()
    return _engine


def get_handler() -> QueryHandler:
    """Get the global query handler."""
    global _handler
    if _handler is None:
        _handler = QueryHandler(get_engine())
    return _handler


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    import os

    # Startup
    engine = get_engine()

    # Check for preload options from environment
    preload_tts = os.environ.get("STOREFRONT_ASSISTANT_PRELOAD_TTS")
    preload_stt = os.environ.get("STOREFRONT_ASSISTANT_PRELOAD_STT")

    if preload_tts:
        logger.info("Preloading TTS backend: %s...", preload_tts)
        engine.load_tts_backend(preload_tts)

    if preload_stt:
        logger.info("Preloading STT backend: %s...", preload_stt)
        engine.load_stt_backend(preload_stt)

    yield

    # Shutdown
    engine.unload_tts_backend()
    engine.unload_stt_backend()


def create_app(cors_origins: list[str] | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        cors_origins: CORS allowed origins (default: from config)

    Returns:
        FastAPI application
    """
    config = get_config()

    app = FastAPI(
        title="Storefront Assistant API",
        description="Voice and text shopping assistant for the storefront",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    origins = cors_origins or config.server.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from storefront_assistant.server.routes_assistant import router as assistant_router
    from storefront_assistant.server.routes_stt import router as stt_router
    from storefront_assistant.server.routes_tts import router as tts_router

    app.include_router(assistant_router, prefix="/assistant", tags=["Assistant"])
    app.include_router(tts_router, prefix="/tts", tags=["TTS"])
    app.include_router(stt_router, prefix="/stt", tags=["STT"])

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        engine = get_engine()
        tts_info = engine.get_tts_info()
        stt_info = engine.get_stt_info()

        return HealthResponse(
            status="ok",
            version=__version__,
            tts_backend=tts_info.get("name") if tts_info.get("loaded") else None,
            stt_backend=stt_info.get("name") if stt_info.get("loaded") else None,
        )

    @app.get("/info")
    async def get_info() -> dict[str, Any]:
        """Get detailed server information."""
        return get_engine().get_info()

    return app


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
    workers: int = 1,
) -> None:
    """
    Run the server.

    Args:
        host: Host to bind to
        port: Port to bind to
        reload: Enable auto-reload (development)
        workers: Number of workers
    """
    import uvicorn

    config = get_config()

    uvicorn.run(
        "storefront_assistant.server.app:create_app",
        factory=True,
        host=host or config.server.host,
        port=port or config.server.port,
        reload=reload,
        workers=workers,
    )
