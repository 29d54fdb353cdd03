"""REST API router for playback sessions."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from courtplay.animation import export_play, get_easing
from courtplay.api.routers.deps import get_session, playback_status, session_to_response
from courtplay.api.schemas import (
    CreateSessionRequest,
    LoopRequest,
    PlaybackStatusSchema,
    ScrubRequest,
    SessionResponse,
    SpeedRequest,
    TickRequest,
    TickResponse,
)
from courtplay.api.services.session_manager import get_session_manager
from courtplay.config import get_config
from courtplay.core.errors import InvalidPlayError
from courtplay.core.models import Play

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/playback", tags=["playback"])


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(request: Optional[CreateSessionRequest] = None) -> SessionResponse:
    """Open a playback/editor session on a play document."""
    request = request or CreateSessionRequest()

    play = None
    if request.play is not None:
        try:
            play = Play.from_dict(request.play)
        except InvalidPlayError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            )
        errors = play.validate()
        if errors:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=errors,
            )

    session = await get_session_manager().create_session(
        play=play,
        speed=request.speed,
        loop=request.loop,
        transition_ms=request.transition_ms,
        easing=request.easing,
    )
    return session_to_response(session)


@router.get("/sessions", response_model=list[str])
async def list_sessions() -> list[str]:
    """List all active session IDs."""
    sessions = await get_session_manager().list_sessions()
    return [str(s) for s in sessions]


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session_info(session_id: str) -> SessionResponse:
    """Get a session by ID."""
    session = await get_session(session_id)
    return session_to_response(session)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str) -> None:
    """Delete a session."""
    session = await get_session(session_id)
    await get_session_manager().delete_session(session.session_id)


@router.post("/sessions/{session_id}/play", response_model=PlaybackStatusSchema)
async def play(session_id: str) -> PlaybackStatusSchema:
    """Start or resume playback in place."""
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.play()
    return playback_status(session)


@router.post("/sessions/{session_id}/pause", response_model=PlaybackStatusSchema)
async def pause(session_id: str) -> PlaybackStatusSchema:
    """Pause playback, keeping the position."""
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.pause()
    return playback_status(session)


@router.post("/sessions/{session_id}/stop", response_model=PlaybackStatusSchema)
async def stop(session_id: str) -> PlaybackStatusSchema:
    """Stop playback, keeping the position."""
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.stop()
    return playback_status(session)


@router.post("/sessions/{session_id}/reset", response_model=PlaybackStatusSchema)
async def reset(session_id: str) -> PlaybackStatusSchema:
    """Stop and rewind to the first step."""
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.reset()
    return playback_status(session)


@router.post("/sessions/{session_id}/tick", response_model=TickResponse)
async def tick(session_id: str, request: TickRequest) -> TickResponse:
    """Advance playback by the host's elapsed time."""
    session = await get_session(session_id)
    async with get_session_manager().lock:
        advanced = session.playback.tick(request.delta_ms, request.generation)
    return TickResponse(steps_advanced=advanced, playback=playback_status(session))


@router.post("/sessions/{session_id}/scrub", response_model=PlaybackStatusSchema)
async def scrub(session_id: str, request: ScrubRequest) -> PlaybackStatusSchema:
    """Jump to a scene and/or step. Always stops playback."""
    session = await get_session(session_id)
    ctrl = session.playback.controller
    async with get_session_manager().lock:
        if request.scene_index is not None:
            ctrl.set_scene_index(request.scene_index)
        if request.step is not None:
            ctrl.set_step(request.step)
        if request.scene_index is None and request.step is None:
            ctrl.stop()
    return playback_status(session)


@router.put("/sessions/{session_id}/speed", response_model=PlaybackStatusSchema)
async def set_speed(session_id: str, request: SpeedRequest) -> PlaybackStatusSchema:
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.set_speed(request.speed)
    return playback_status(session)


@router.put("/sessions/{session_id}/loop", response_model=PlaybackStatusSchema)
async def set_loop(session_id: str, request: LoopRequest) -> PlaybackStatusSchema:
    session = await get_session(session_id)
    async with get_session_manager().lock:
        session.playback.controller.set_loop(request.loop)
    return playback_status(session)


@router.get("/sessions/{session_id}/timeline")
async def get_timeline(session_id: str) -> dict:
    """The flattened timeline of the session's play."""
    session = await get_session(session_id)
    return session.playback.timeline.to_dict()


@router.get("/sessions/{session_id}/frame")
async def get_frame(session_id: str, ms: Optional[float] = Query(default=None)) -> dict:
    """
    Resolve the court state at `ms`, or at the controller's position.

    Returns an empty object when the play has nothing to render.
    """
    session = await get_session(session_id)
    resolved = session.playback.current_frame() if ms is None else session.playback.frame_at(ms)
    return resolved.to_dict() if resolved is not None else {}


@router.get("/sessions/{session_id}/export")
async def export(session_id: str, fps: Optional[float] = Query(default=None, gt=0, le=120)) -> dict:
    """Sample the whole play at a fixed frame rate."""
    session = await get_session(session_id)
    result = export_play(
        session.editor.play,
        fps=fps or get_config().export_fps,
        transition_ms=session.transition_ms,
        easing=get_easing(session.easing_name),
    )
    return result.to_dict()


@router.get("/sessions/{session_id}/log", response_model=list[str])
async def get_log(session_id: str) -> list[str]:
    """Playback and history log lines."""
    session = await get_session(session_id)
    return session.log.format_lines()
