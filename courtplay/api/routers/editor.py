"""REST API router for editing a session's play with undo/redo."""

from typing import Any, Callable

from fastapi import APIRouter, HTTPException, status

from courtplay.api.routers.deps import get_session, session_to_response
from courtplay.api.schemas import HistoryResponse, SceneNoteRequest, SessionResponse, StepDurationRequest
from courtplay.api.services.session_manager import ManagedSession, get_session_manager
from courtplay.core.errors import SceneNotFoundError

router = APIRouter(prefix="/editor", tags=["editor"])


async def _apply(session: ManagedSession, edit: Callable[[], Any]) -> Any:
    """Run an edit under the manager lock and rebind playback if the play changed."""
    async with get_session_manager().lock:
        before = session.editor.play
        try:
            result = edit()
        except SceneNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        if session.editor.play is not before:
            session.rebuild_playback()
    return result


def _history_response(session: ManagedSession, applied: bool) -> HistoryResponse:
    history = session.editor.history
    return HistoryResponse(
        applied=applied,
        past_size=len(history.past),
        future_size=len(history.future),
        session=session_to_response(session),
    )


@router.get("/sessions/{session_id}/play")
async def get_play(session_id: str) -> dict:
    """The current play document."""
    session = await get_session(session_id)
    return session.editor.play.to_dict()


@router.post("/sessions/{session_id}/undo", response_model=HistoryResponse)
async def undo(session_id: str) -> HistoryResponse:
    """Restore the previous snapshot; `applied` is false when there is none."""
    session = await get_session(session_id)
    applied = await _apply(session, session.editor.undo)
    return _history_response(session, applied)


@router.post("/sessions/{session_id}/redo", response_model=HistoryResponse)
async def redo(session_id: str) -> HistoryResponse:
    """Re-apply the next snapshot; `applied` is false when there is none."""
    session = await get_session(session_id)
    applied = await _apply(session, session.editor.redo)
    return _history_response(session, applied)


@router.post("/sessions/{session_id}/scenes", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def add_scene(session_id: str) -> SessionResponse:
    session = await get_session(session_id)
    await _apply(session, session.editor.add_scene)
    return session_to_response(session)


@router.post("/sessions/{session_id}/scenes/{scene_id}/duplicate", response_model=SessionResponse)
async def duplicate_scene(session_id: str, scene_id: str) -> SessionResponse:
    session = await get_session(session_id)
    await _apply(session, lambda: session.editor.duplicate_scene(scene_id))
    return session_to_response(session)


@router.delete("/sessions/{session_id}/scenes/{scene_id}", response_model=SessionResponse)
async def remove_scene(session_id: str, scene_id: str) -> SessionResponse:
    """Remove a scene. The last scene cannot be removed."""
    session = await get_session(session_id)
    removed = await _apply(session, lambda: session.editor.remove_scene(scene_id))
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove the only scene",
        )
    return session_to_response(session)


@router.put("/sessions/{session_id}/scenes/{scene_id}/note", response_model=SessionResponse)
async def update_note(session_id: str, scene_id: str, request: SceneNoteRequest) -> SessionResponse:
    session = await get_session(session_id)
    await _apply(session, lambda: session.editor.update_scene_note(scene_id, request.note))
    return session_to_response(session)


@router.post("/sessions/{session_id}/scenes/{scene_id}/steps", response_model=SessionResponse)
async def add_step(session_id: str, scene_id: str) -> SessionResponse:
    session = await get_session(session_id)
    await _apply(session, lambda: session.editor.add_timing_step(scene_id))
    return session_to_response(session)


@router.put("/sessions/{session_id}/scenes/{scene_id}/steps/{step}/duration", response_model=SessionResponse)
async def set_step_duration(
    session_id: str, scene_id: str, step: int, request: StepDurationRequest
) -> SessionResponse:
    session = await get_session(session_id)
    updated = await _apply(
        session, lambda: session.editor.set_step_duration(scene_id, step, request.duration)
    )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Step not found")
    return session_to_response(session)


@router.delete("/sessions/{session_id}/scenes/{scene_id}/steps/{step}", response_model=SessionResponse)
async def remove_step(session_id: str, scene_id: str, step: int) -> SessionResponse:
    """Remove a timing step. A scene's only step cannot be removed."""
    session = await get_session(session_id)
    removed = await _apply(session, lambda: session.editor.remove_timing_step(scene_id, step))
    if not removed and session.editor.play.get_scene(scene_id).group_for_step(step) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Step not found")
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove the only timing step",
        )
    return session_to_response(session)
