"""Play document models."""

from courtplay.core.models.play import Play, PlayColors
from courtplay.core.models.scene import (
    DEFAULT_STEP_DURATION_MS,
    PLAYERS_PER_SIDE,
    Annotation,
    BallState,
    PlayerRef,
    PlayerState,
    Point,
    Scene,
    TimingGroup,
    default_players,
)

__all__ = [
    "Annotation",
    "BallState",
    "DEFAULT_STEP_DURATION_MS",
    "PLAYERS_PER_SIDE",
    "Play",
    "PlayColors",
    "PlayerRef",
    "PlayerState",
    "Point",
    "Scene",
    "TimingGroup",
    "default_players",
]
