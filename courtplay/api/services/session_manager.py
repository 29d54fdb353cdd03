"""Session manager for playback/editor sessions served over the API."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from courtplay.animation import PlaybackSession, get_easing
from courtplay.config import get_config
from courtplay.core.models import Play
from courtplay.editor import PlayEditor
from courtplay.events import EventBus
from courtplay.logging import PlaybackLog

logger = logging.getLogger(__name__)


@dataclass
class ManagedSession:
    """An editor plus the playback session built from its current play.

    The API client is the host: it calls tick with its own elapsed time.
    Nothing here runs on a timer.
    """

    session_id: UUID
    editor: PlayEditor
    playback: PlaybackSession
    event_bus: EventBus
    log: PlaybackLog = field(default_factory=PlaybackLog)
    transition_ms: int = 500
    easing_name: str = "ease_in_out"

    def rebuild_playback(self) -> None:
        """Rebind playback to the editor's current play (stops and rewinds)."""
        old = self.playback.controller
        old.pause()
        self.playback = PlaybackSession(
            self.editor.play,
            speed=old.speed,
            loop=old.loop,
            transition_ms=self.transition_ms,
            fallback_step_ms=self.playback.fallback_step_ms,
            easing=get_easing(self.easing_name),
            event_bus=self.event_bus,
            session_id=str(self.session_id),
        )


class PlaybackSessionManager:
    """
    Manages active playback sessions.

    Access is serialized with an asyncio lock, so at most one request
    ticks or edits a session at a time.
    """

    def __init__(self) -> None:
        """Initialize the session manager."""
        self._sessions: dict[UUID, ManagedSession] = {}
        self._lock = asyncio.Lock()

    @property
    def lock(self) -> asyncio.Lock:
        return self._lock

    async def create_session(
        self,
        play: Optional[Play] = None,
        speed: float = 1.0,
        loop: bool = False,
        transition_ms: Optional[int] = None,
        easing: Optional[str] = None,
    ) -> ManagedSession:
        """
        Create a new session.

        Args:
            play: Document to open (defaults to a blank play)
            speed: Initial playback speed
            loop: Initial loop flag
            transition_ms: Scene blend length (config default if None)
            easing: Easing name (config default if None)

        Returns:
            New ManagedSession
        """
        config = get_config()
        transition_ms = config.transition_ms if transition_ms is None else transition_ms
        easing = easing or config.easing

        session_id = uuid4()
        event_bus = EventBus()
        editor = PlayEditor(play, history_size=config.history_size, event_bus=event_bus)
        playback = PlaybackSession(
            editor.play,
            speed=speed,
            loop=loop,
            transition_ms=transition_ms,
            fallback_step_ms=config.fallback_step_ms,
            easing=get_easing(easing),
            event_bus=event_bus,
            session_id=str(session_id),
        )
        session = ManagedSession(
            session_id=session_id,
            editor=editor,
            playback=playback,
            event_bus=event_bus,
            transition_ms=transition_ms,
            easing_name=easing,
        )
        session.log.connect_to_event_bus(event_bus)

        async with self._lock:
            self._sessions[session_id] = session

        logger.info(f"Created playback session {session_id} for play {editor.play.id}")
        return session

    async def get_session(self, session_id: UUID) -> Optional[ManagedSession]:
        """Get a session by ID."""
        async with self._lock:
            return self._sessions.get(session_id)

    async def delete_session(self, session_id: UUID) -> bool:
        """
        Delete a session.

        Returns True if session existed and was deleted.
        """
        async with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                return False
            session.playback.controller.stop()
            session.event_bus.clear()

        logger.info(f"Deleted playback session {session_id}")
        return True

    async def list_sessions(self) -> list[UUID]:
        """List all active session IDs."""
        async with self._lock:
            return list(self._sessions.keys())

    async def cleanup_all(self) -> None:
        """Stop and drop every session."""
        async with self._lock:
            for session in self._sessions.values():
                session.playback.controller.stop()
                session.event_bus.clear()
            self._sessions.clear()


# Global session manager instance
_session_manager: Optional[PlaybackSessionManager] = None


def get_session_manager() -> PlaybackSessionManager:
    """Get the global session manager."""
    global _session_manager
    if _session_manager is None:
        _session_manager = PlaybackSessionManager()
    return _session_manager
