"""Event bus connecting playback sessions to their listeners."""

from collections import defaultdict
from typing import Callable, TypeVar, Union

from courtplay.events.types import HistoryEvent, PlaybackEvent

Event = Union[PlaybackEvent, HistoryEvent]
E = TypeVar("E", bound=Event)


class EventBus:
    """
    Per-session pub/sub for playback and history events.

    The controller and the history stack emit without knowing who
    listens; the playback log subscribes by exact event type. Handlers
    run synchronously, in subscription order, inside the emitting call.

    Example:
        bus = EventBus()
        bus.subscribe(StepChangedEvent, lambda e: print(e.scene_index, e.step))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Event], None]]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        """Register a handler for one event type (subclasses are not matched)."""
        self._handlers[event_type].append(handler)

    def emit(self, event: Event) -> None:
        for handler in self._handlers.get(type(event), ()):
            handler(event)

    def clear(self) -> None:
        """Drop every handler, used when a session is closed."""
        self._handlers.clear()
