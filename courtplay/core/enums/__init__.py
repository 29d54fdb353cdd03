"""Play document and playback enumerations."""

from courtplay.core.enums.diagram import AnnotationType, Category, CourtType, Side
from courtplay.core.enums.playback import FrameKind, PlaybackState

__all__ = [
    "AnnotationType",
    "Category",
    "CourtType",
    "FrameKind",
    "PlaybackState",
    "Side",
]
