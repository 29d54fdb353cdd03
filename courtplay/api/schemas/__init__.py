"""API request/response schemas."""

from courtplay.api.schemas.playback import (
    CreateSessionRequest,
    HistoryResponse,
    LoopRequest,
    PlaybackStatusSchema,
    SceneNoteRequest,
    ScrubRequest,
    SessionResponse,
    SpeedRequest,
    StepDurationRequest,
    TickRequest,
    TickResponse,
)

__all__ = [
    "CreateSessionRequest",
    "HistoryResponse",
    "LoopRequest",
    "PlaybackStatusSchema",
    "SceneNoteRequest",
    "ScrubRequest",
    "SessionResponse",
    "SpeedRequest",
    "StepDurationRequest",
    "TickRequest",
    "TickResponse",
]
