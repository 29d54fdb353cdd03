"""API services."""

from courtplay.api.services.session_manager import (
    ManagedSession,
    PlaybackSessionManager,
    get_session_manager,
)

__all__ = ["ManagedSession", "PlaybackSessionManager", "get_session_manager"]
