"""API routers for different resource types."""

from courtplay.api.routers.editor import router as editor_router
from courtplay.api.routers.playback import router as playback_router

__all__ = [
    "editor_router",
    "playback_router",
]
