"""Pydantic schemas for playback and editor session API."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

# Longest elapsed time a host may report in one tick (one hour)
MAX_TICK_MS = 3_600_000


class CreateSessionRequest(BaseModel):
    """Request to open a session on a play document."""

    play: Optional[dict[str, Any]] = None  # Play document; blank play if omitted
    speed: float = Field(default=1.0, gt=0, le=8)
    loop: bool = False
    transition_ms: Optional[int] = Field(default=None, ge=0, le=10000)
    easing: Optional[Literal["ease_in_out", "linear"]] = None


class PlaybackStatusSchema(BaseModel):
    """Controller state."""

    state: str
    scene_index: int
    step: int
    elapsed_ms: float
    speed: float
    loop: bool
    generation: int
    position_ms: float
    total_ms: float


class SessionResponse(BaseModel):
    """Response containing session information."""

    session_id: str
    play_id: str
    title: str
    scene_count: int
    selected_scene_id: Optional[str]
    can_undo: bool
    can_redo: bool
    playback: PlaybackStatusSchema


class TickRequest(BaseModel):
    """Elapsed wall-clock time since the host's previous tick."""

    delta_ms: float = Field(ge=0, le=MAX_TICK_MS, allow_inf_nan=False)
    generation: Optional[int] = None


class TickResponse(BaseModel):
    steps_advanced: int
    playback: PlaybackStatusSchema


class ScrubRequest(BaseModel):
    """Jump to a scene and/or step (always stops playback)."""

    scene_index: Optional[int] = None
    step: Optional[int] = None


class SpeedRequest(BaseModel):
    speed: float = Field(gt=0, le=8)


class LoopRequest(BaseModel):
    loop: bool


class StepDurationRequest(BaseModel):
    duration: int = Field(ge=0)


class SceneNoteRequest(BaseModel):
    note: str = ""


class HistoryResponse(BaseModel):
    """Undo/redo result."""

    applied: bool
    past_size: int
    future_size: int
    session: SessionResponse
