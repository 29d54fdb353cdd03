"""Playback and timeline enumerations."""

from enum import Enum


class FrameKind(str, Enum):
    """Kind of unit in a flattened playback timeline."""

    STEP_HOLD = "step-hold"  # Static scene while one timing step plays
    SCENE_TRANSITION = "scene-transition"  # Blend from one scene into the next


class PlaybackState(str, Enum):
    """Playback state."""

    STOPPED = "stopped"
    PLAYING = "playing"
