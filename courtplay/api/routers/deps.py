"""
Shared dependencies for playback and editor routers.

Contains session lookup and response conversion used by both routers.
"""

from uuid import UUID

from fastapi import HTTPException, status

from courtplay.api.schemas import PlaybackStatusSchema, SessionResponse
from courtplay.api.services.session_manager import ManagedSession, get_session_manager


async def get_session(session_id: str) -> ManagedSession:
    """
    Get a session by ID.

    Raises HTTPException 400 for a malformed ID, 404 if not found.
    """
    try:
        uuid = UUID(session_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid session ID format",
        )

    session = await get_session_manager().get_session(uuid)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return session


def playback_status(session: ManagedSession) -> PlaybackStatusSchema:
    """Convert the controller state to its schema."""
    ctrl = session.playback.controller
    return PlaybackStatusSchema(
        state=ctrl.state.value,
        scene_index=ctrl.scene_index,
        step=ctrl.step,
        elapsed_ms=ctrl.elapsed_ms,
        speed=ctrl.speed,
        loop=ctrl.loop,
        generation=ctrl.generation,
        position_ms=session.playback.position_ms(),
        total_ms=session.playback.timeline.total_ms,
    )


def session_to_response(session: ManagedSession) -> SessionResponse:
    """Convert ManagedSession to response schema."""
    editor = session.editor
    return SessionResponse(
        session_id=str(session.session_id),
        play_id=editor.play.id,
        title=editor.play.title,
        scene_count=len(editor.play.scenes),
        selected_scene_id=editor.selected_scene_id,
        can_undo=editor.history.can_undo,
        can_redo=editor.history.can_redo,
        playback=playback_status(session),
    )
