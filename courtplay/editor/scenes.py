"""Factories and pure helpers for building play documents."""

from datetime import datetime

from courtplay.core.enums import Category, CourtType
from courtplay.core.models import Play, Scene, TimingGroup


def create_empty_scene(order: int) -> Scene:
    """A scene with centered tokens, a free ball and one empty step."""
    return Scene(order=order)


def create_default_play() -> Play:
    """A blank single-scene play."""
    now = datetime.now()
    return Play(
        title="Untitled Play",
        category=Category.OFFENSE,
        court_type=CourtType.HALF,
        created_at=now,
        updated_at=now,
        scenes=[create_empty_scene(0)],
    )


def normalize_steps(groups: list[TimingGroup]) -> list[TimingGroup]:
    """Renumber timing groups 1..n, keeping their relative step order."""
    ordered = sorted(groups, key=lambda g: g.step)
    return [
        TimingGroup(step=i + 1, duration=g.duration, annotations=list(g.annotations))
        for i, g in enumerate(ordered)
    ]


def renumber_scenes(scenes: list[Scene]) -> list[Scene]:
    """Reassign contiguous `order` values following list order."""
    for i, scene in enumerate(scenes):
        scene.order = i
    return scenes
