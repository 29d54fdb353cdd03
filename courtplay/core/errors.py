"""Exceptions raised around the play document (never by the engine itself)."""


class CourtplayError(Exception):
    """Base class for courtplay errors."""


class InvalidPlayError(CourtplayError):
    """A play document is malformed and cannot be loaded."""


class SceneNotFoundError(CourtplayError):
    """A scene id does not exist in the current play."""

    def __init__(self, scene_id: str) -> None:
        super().__init__(f"Scene not found: {scene_id}")
        self.scene_id = scene_id
