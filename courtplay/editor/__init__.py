"""Editing layer over the play document."""

from courtplay.editor.editor import PlayEditor
from courtplay.editor.samples import pick_and_roll
from courtplay.editor.scenes import (
    create_default_play,
    create_empty_scene,
    normalize_steps,
    renumber_scenes,
)

__all__ = [
    "PlayEditor",
    "create_default_play",
    "create_empty_scene",
    "normalize_steps",
    "pick_and_roll",
    "renumber_scenes",
]
