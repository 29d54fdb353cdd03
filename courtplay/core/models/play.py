"""Play document model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from courtplay.core.enums import Category, CourtType, Side
from courtplay.core.errors import InvalidPlayError, SceneNotFoundError
from courtplay.core.models.scene import PLAYERS_PER_SIDE, Scene


@dataclass
class PlayColors:
    """Token colors for the two sides."""

    offense: str = "#E07B39"
    defense: str = "#1E3A5F"

    def to_dict(self) -> dict:
        return {"offense": self.offense, "defense": self.defense}


@dataclass
class Play:
    """
    A diagrammed play: ordered scenes plus metadata.

    Only `scenes` matters to playback; the rest is carried through
    for editors and serialization.
    """

    scenes: list[Scene] = field(default_factory=list)
    title: str = "Untitled Play"
    description: str = ""
    category: Category = Category.OFFENSE
    tags: list[str] = field(default_factory=list)
    court_type: CourtType = CourtType.HALF
    colors: Optional[PlayColors] = None
    team_id: str = ""
    created_by: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid4()))

    def ordered_scenes(self) -> list[Scene]:
        """Scenes sorted by their `order` field (does not mutate)."""
        return sorted(self.scenes, key=lambda s: s.order)

    def scene_index(self, scene_id: str) -> int:
        """Position of a scene in `ordered_scenes()`."""
        for i, scene in enumerate(self.ordered_scenes()):
            if scene.id == scene_id:
                return i
        raise SceneNotFoundError(scene_id)

    def get_scene(self, scene_id: str) -> Scene:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        raise SceneNotFoundError(scene_id)

    def copy(self) -> "Play":
        """Structural deep copy (same ids)."""
        return Play(
            id=self.id,
            scenes=[s.copy() for s in self.scenes],
            title=self.title,
            description=self.description,
            category=self.category,
            tags=list(self.tags),
            court_type=self.court_type,
            colors=PlayColors(self.colors.offense, self.colors.defense) if self.colors else None,
            team_id=self.team_id,
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def validate(self) -> list[str]:
        """Check the scene graph invariants, return list of errors."""
        errors = []
        orders = sorted(s.order for s in self.scenes)
        if orders != list(range(len(self.scenes))):
            errors.append(f"Scene orders must be contiguous from 0, got {orders}")

        for scene in self.scenes:
            if not scene.timing_groups:
                errors.append(f"Scene {scene.id} has no timing groups")
            steps = sorted(g.step for g in scene.timing_groups)
            if steps and steps != list(range(1, len(steps) + 1)):
                errors.append(f"Scene {scene.id} steps must be contiguous from 1, got {steps}")
            for side in Side:
                positions = sorted(p.position for p in scene.players(side))
                if positions != list(range(1, PLAYERS_PER_SIDE + 1)):
                    errors.append(
                        f"Scene {scene.id} {side.value} positions must be 1..{PLAYERS_PER_SIDE}, "
                        f"got {positions}"
                    )
        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "teamId": self.team_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "tags": list(self.tags),
            "courtType": self.court_type.value,
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "scenes": [s.to_dict() for s in self.scenes],
            "colors": self.colors.to_dict() if self.colors else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Play":
        """Create from dictionary, raising InvalidPlayError if malformed."""
        try:
            colors = data.get("colors")
            now = datetime.now()
            return cls(
                id=data.get("id") or str(uuid4()),
                team_id=data.get("teamId", ""),
                title=data.get("title", "Untitled Play"),
                description=data.get("description", ""),
                category=Category(data.get("category", Category.OFFENSE.value)),
                tags=list(data.get("tags", [])),
                court_type=CourtType(data.get("courtType", CourtType.HALF.value)),
                created_by=data.get("createdBy", ""),
                created_at=_parse_time(data.get("createdAt"), now),
                updated_at=_parse_time(data.get("updatedAt"), now),
                scenes=[Scene.from_dict(s) for s in data.get("scenes", [])],
                colors=PlayColors(**colors) if colors else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidPlayError(f"Malformed play document: {e}") from e


def _parse_time(value: Optional[str], default: datetime) -> datetime:
    if not value:
        return default
    return datetime.fromisoformat(value)
