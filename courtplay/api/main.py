"""FastAPI application for the courtplay playback engine."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courtplay import __version__
from courtplay.api.routers import editor_router, playback_router
from courtplay.api.services.session_manager import get_session_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("Courtplay API starting up")
    yield
    logger.info("Courtplay API shutting down")
    await get_session_manager().cleanup_all()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Courtplay API",
        description="Basketball play diagram playback engine",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS for the browser editor
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Next.js dev server
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(playback_router, prefix="/api/v1")
    app.include_router(editor_router, prefix="/api/v1")

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict:
    """Root endpoint - API info."""
    return {
        "name": "Courtplay API",
        "version": __version__,
        "description": "Basketball play diagram playback engine",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    sessions = await get_session_manager().list_sessions()
    return {
        "status": "healthy",
        "active_sessions": len(sessions),
    }


def run_api(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server."""
    uvicorn.run(
        "courtplay.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    run_api(reload=True)
