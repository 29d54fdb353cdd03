"""In-memory playback log for accumulating session events."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from courtplay.core.enums import PlaybackState
from courtplay.events import (
    EventBus,
    HistoryEvent,
    PlaybackCompletedEvent,
    PlaybackLoopedEvent,
    PlaybackStateChangedEvent,
    StepChangedEvent,
)


@dataclass
class LogEntry:
    """Single entry in the playback log."""

    timestamp: datetime
    event_type: str  # "STATE", "STEP", "SCENE", "LOOP", "COMPLETE", "HISTORY"
    description: str
    scene_index: Optional[int] = None
    step: Optional[int] = None


class PlaybackLog:
    """
    In-memory accumulator for playback and history events.

    Subscribes to an EventBus and keeps a readable record of what a
    session did, plus a few counters.
    """

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []
        self.steps_played: int = 0
        self.scenes_entered: int = 0
        self.loops: int = 0
        self.completed: bool = False

    def connect_to_event_bus(self, event_bus: EventBus) -> None:
        """Subscribe to events from an event bus."""
        event_bus.subscribe(PlaybackStateChangedEvent, self._handle_state_changed)
        event_bus.subscribe(StepChangedEvent, self._handle_step_changed)
        event_bus.subscribe(PlaybackLoopedEvent, self._handle_looped)
        event_bus.subscribe(PlaybackCompletedEvent, self._handle_completed)
        event_bus.subscribe(HistoryEvent, self._handle_history)

    def add_entry(self, event_type: str, description: str, **kwargs) -> None:
        """Add a log entry manually."""
        self.entries.append(LogEntry(
            timestamp=datetime.now(),
            event_type=event_type,
            description=description,
            **kwargs,
        ))

    def _handle_state_changed(self, event: PlaybackStateChangedEvent) -> None:
        if event.current == PlaybackState.PLAYING:
            self.completed = False
        self.add_entry(
            "STATE",
            f"{event.previous.value} -> {event.current.value}",
            scene_index=event.scene_index,
            step=event.step,
        )

    def _handle_step_changed(self, event: StepChangedEvent) -> None:
        self.steps_played += 1
        if event.scene_changed:
            self.scenes_entered += 1
            event_type = "SCENE"
            description = f"Scene {event.scene_index + 1}, step {event.step}"
        else:
            event_type = "STEP"
            description = f"Step {event.step}"
        self.add_entry(event_type, description, scene_index=event.scene_index, step=event.step)

    def _handle_looped(self, event: PlaybackLoopedEvent) -> None:
        self.loops += event.loops
        description = "Looped to first scene" if event.loops == 1 else f"Looped {event.loops} times"
        self.add_entry("LOOP", description, scene_index=event.scene_index, step=event.step)

    def _handle_completed(self, event: PlaybackCompletedEvent) -> None:
        self.completed = True
        self.add_entry("COMPLETE", "Playback finished", scene_index=event.scene_index, step=event.step)

    def _handle_history(self, event: HistoryEvent) -> None:
        self.add_entry(
            "HISTORY",
            f"{event.action} (past={event.past_size}, future={event.future_size})",
        )

    def entries_of(self, event_type: str) -> list[LogEntry]:
        return [e for e in self.entries if e.event_type == event_type]

    def format_lines(self) -> list[str]:
        """Render the log as plain text lines."""
        lines = []
        for entry in self.entries:
            where = ""
            if entry.scene_index is not None:
                where = f"[S{entry.scene_index + 1}.{entry.step}] "
            lines.append(f"{entry.timestamp:%H:%M:%S.%f} {entry.event_type:<8} {where}{entry.description}")
        return lines
