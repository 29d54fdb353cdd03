"""Snapshot-based linear undo/redo history."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from courtplay.core.models import Play
from courtplay.events import EventBus, HistoryEvent

logger = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 50


@dataclass(frozen=True)
class EditorSnapshot:
    """The document state undo/redo restores: the play plus selection."""

    play: Play
    selected_scene_id: Optional[str] = None


class HistoryStack:
    """
    Two bounded stacks of editor snapshots.

    The editing layer pushes the current snapshot BEFORE every mutation.
    `undo`/`redo` take the snapshot being left and return the one to
    restore, or None when there is nothing to do. A push always clears
    the redo stack, so history never branches.

    Example:
        history = HistoryStack()
        history.push_snapshot(before)      # then mutate to `after`
        restored = history.undo(after)     # -> before
        history.redo(restored)             # -> after
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE, event_bus: Optional[EventBus] = None) -> None:
        if max_size <= 0:
            raise ValueError(f"max_size must be > 0, got {max_size}")
        self.max_size = max_size
        self.event_bus = event_bus
        # Oldest entries are dropped from the far end of each stack
        self._past: deque[EditorSnapshot] = deque(maxlen=max_size)
        self._future: deque[EditorSnapshot] = deque(maxlen=max_size)

    @property
    def past(self) -> list[EditorSnapshot]:
        """Undo stack, oldest first."""
        return list(self._past)

    @property
    def future(self) -> list[EditorSnapshot]:
        """Redo stack, next redo first."""
        return list(self._future)

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._future) > 0

    def push_snapshot(self, snapshot: EditorSnapshot) -> None:
        """Record the state about to be changed and clear the redo stack."""
        self._past.append(snapshot)
        self._future.clear()
        self._emit("push")

    def undo(self, current: EditorSnapshot) -> Optional[EditorSnapshot]:
        """Step back: returns the snapshot to restore, or None."""
        if not self._past:
            return None
        previous = self._past.pop()
        self._future.appendleft(current)
        self._emit("undo")
        return previous

    def redo(self, current: EditorSnapshot) -> Optional[EditorSnapshot]:
        """Step forward: returns the snapshot to restore, or None."""
        if not self._future:
            return None
        following = self._future.popleft()
        self._past.append(current)
        self._emit("redo")
        return following

    def reset(self) -> None:
        """Clear both stacks (used when switching to another play)."""
        self._past.clear()
        self._future.clear()
        self._emit("reset")

    def _emit(self, action: str) -> None:
        logger.debug(f"History {action}: past={len(self._past)} future={len(self._future)}")
        if self.event_bus is not None:
            self.event_bus.emit(HistoryEvent(
                action=action,
                past_size=len(self._past),
                future_size=len(self._future),
            ))
