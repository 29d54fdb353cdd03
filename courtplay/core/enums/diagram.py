"""Diagram-level enumerations: sides, annotation kinds, play metadata."""

from enum import Enum


class Side(str, Enum):
    """Which team a player token belongs to."""

    OFFENSE = "offense"
    DEFENSE = "defense"


class AnnotationType(str, Enum):
    """
    Kind of line drawn on the court.

    The distinction only matters to renderers; timing treats every
    annotation the same way.
    """

    MOVEMENT = "movement"  # Solid arrow
    DRIBBLE = "dribble"  # Zig-zag arrow
    PASS = "pass"  # Dashed arrow
    SCREEN = "screen"  # Line ending in a bar
    CUT = "cut"  # Sharp cut arrow


class CourtType(str, Enum):
    """Court diagram shown behind the play."""

    HALF = "half"
    FULL = "full"


class Category(str, Enum):
    """Playbook category of a play."""

    OFFENSE = "offense"
    DEFENSE = "defense"
    INBOUND = "inbound"
    PRESS_BREAK = "press-break"
    FAST_BREAK = "fast-break"
    OOB = "oob"
    SPECIAL = "special"
