"""Event types emitted during playback and editing."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from courtplay.core.enums import PlaybackState


@dataclass
class PlaybackEvent:
    """Base class for all playback events."""

    timestamp: datetime = field(default_factory=datetime.now)
    session_id: Optional[str] = None

    # Controller position at time of event
    scene_index: int = 0
    step: int = 1


@dataclass
class PlaybackStateChangedEvent(PlaybackEvent):
    """Fired when playback starts or stops."""

    previous: PlaybackState = PlaybackState.STOPPED
    current: PlaybackState = PlaybackState.STOPPED


@dataclass
class StepChangedEvent(PlaybackEvent):
    """Fired when playback advances into a new timing step."""

    previous_scene_index: int = 0
    previous_step: int = 1

    @property
    def scene_changed(self) -> bool:
        return self.previous_scene_index != self.scene_index


@dataclass
class PlaybackLoopedEvent(PlaybackEvent):
    """Fired when looping playback wraps back to the first scene."""

    loops: int = 1  # >1 when one tick skipped several whole passes


@dataclass
class PlaybackCompletedEvent(PlaybackEvent):
    """Fired when non-looping playback runs past the last step."""


@dataclass
class HistoryEvent:
    """Fired when the editor pushes, undoes or redoes a snapshot."""

    action: str = ""  # "push", "undo", "redo", "reset"
    past_size: int = 0
    future_size: int = 0
    timestamp: datetime = field(default_factory=datetime.now)
