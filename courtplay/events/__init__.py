"""Event system for playback and editing."""

from courtplay.events.bus import EventBus
from courtplay.events.types import (
    HistoryEvent,
    PlaybackCompletedEvent,
    PlaybackEvent,
    PlaybackLoopedEvent,
    PlaybackStateChangedEvent,
    StepChangedEvent,
)

__all__ = [
    "EventBus",
    "HistoryEvent",
    "PlaybackCompletedEvent",
    "PlaybackEvent",
    "PlaybackLoopedEvent",
    "PlaybackStateChangedEvent",
    "StepChangedEvent",
]
