"""Scene-level models: player tokens, ball, annotations and timing groups."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from courtplay.core.enums import AnnotationType, Side


DEFAULT_STEP_DURATION_MS = 1000
PLAYERS_PER_SIDE = 5


@dataclass(frozen=True)
class Point:
    """A point in normalized court space ([0, 1] on both axes)."""

    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True)
class PlayerRef:
    """
    Lookup key for a player token: side plus jersey slot.

    Used wherever the document needs to point at a player (ball
    attachment, annotation endpoints). It is resolved against a scene's
    player list at read time and never holds the player itself.
    """

    side: Side
    position: int

    def to_dict(self) -> dict:
        return {"side": self.side.value, "position": self.position}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["PlayerRef"]:
        if not data:
            return None
        return cls(side=Side(data["side"]), position=int(data["position"]))


@dataclass
class PlayerState:
    """One player token in a scene."""

    position: int  # 1..5, unique per side
    x: float = 0.5
    y: float = 0.5
    visible: bool = True

    def copy(self) -> "PlayerState":
        return PlayerState(position=self.position, x=self.x, y=self.y, visible=self.visible)

    def to_dict(self) -> dict:
        return {"position": self.position, "x": self.x, "y": self.y, "visible": self.visible}

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerState":
        return cls(
            position=int(data["position"]),
            x=float(data.get("x", 0.5)),
            y=float(data.get("y", 0.5)),
            visible=bool(data.get("visible", True)),
        )


@dataclass
class BallState:
    """The ball: a free position, optionally attached to a player."""

    x: float = 0.5
    y: float = 0.5
    attached_to: Optional[PlayerRef] = None

    def copy(self) -> "BallState":
        # PlayerRef is frozen, sharing it is safe
        return BallState(x=self.x, y=self.y, attached_to=self.attached_to)

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "attachedTo": self.attached_to.to_dict() if self.attached_to else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BallState":
        return cls(
            x=float(data.get("x", 0.5)),
            y=float(data.get("y", 0.5)),
            attached_to=PlayerRef.from_dict(data.get("attachedTo")),
        )


@dataclass
class Annotation:
    """A line drawn on the court (movement, pass, screen, ...)."""

    type: AnnotationType
    from_point: Point
    to_point: Point
    from_player: Optional[PlayerRef] = None
    to_player: Optional[PlayerRef] = None
    control_points: list[Point] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid4()))

    def copy(self) -> "Annotation":
        return Annotation(
            id=self.id,
            type=self.type,
            from_point=self.from_point,
            to_point=self.to_point,
            from_player=self.from_player,
            to_player=self.to_player,
            control_points=list(self.control_points),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "from": self.from_point.to_dict(),
            "to": self.to_point.to_dict(),
            "fromPlayer": self.from_player.to_dict() if self.from_player else None,
            "toPlayer": self.to_player.to_dict() if self.to_player else None,
            "controlPoints": [p.to_dict() for p in self.control_points],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Annotation":
        return cls(
            id=data.get("id") or str(uuid4()),
            type=AnnotationType(data["type"]),
            from_point=Point.from_dict(data["from"]),
            to_point=Point.from_dict(data["to"]),
            from_player=PlayerRef.from_dict(data.get("fromPlayer")),
            to_player=PlayerRef.from_dict(data.get("toPlayer")),
            control_points=[Point.from_dict(p) for p in data.get("controlPoints", [])],
        )


@dataclass
class TimingGroup:
    """
    A timing step within a scene.

    All annotations in a group happen together; groups play one after
    another in ascending `step` order.
    """

    step: int
    duration: int = DEFAULT_STEP_DURATION_MS  # ms
    annotations: list[Annotation] = field(default_factory=list)

    def copy(self) -> "TimingGroup":
        return TimingGroup(
            step=self.step,
            duration=self.duration,
            annotations=[a.copy() for a in self.annotations],
        )

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "duration": self.duration,
            "annotations": [a.to_dict() for a in self.annotations],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimingGroup":
        return cls(
            step=int(data["step"]),
            duration=int(data.get("duration", DEFAULT_STEP_DURATION_MS)),
            annotations=[Annotation.from_dict(a) for a in data.get("annotations", [])],
        )


def default_players() -> list[PlayerState]:
    """Five centered, visible player tokens."""
    return [PlayerState(position=i + 1) for i in range(PLAYERS_PER_SIDE)]


@dataclass
class Scene:
    """
    One static diagram state within a play.

    Holds the player and ball positions plus the timing groups whose
    annotations describe what happens from this state.
    """

    order: int = 0
    offense: list[PlayerState] = field(default_factory=default_players)
    defense: list[PlayerState] = field(default_factory=default_players)
    ball: BallState = field(default_factory=BallState)
    timing_groups: list[TimingGroup] = field(
        default_factory=lambda: [TimingGroup(step=1)]
    )
    duration: int = 2000
    note: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))

    # =========================================================================
    # Lookups
    # =========================================================================

    def players(self, side: Side) -> list[PlayerState]:
        """Player list for one side."""
        return self.offense if side == Side.OFFENSE else self.defense

    def resolve_player(self, ref: Optional[PlayerRef]) -> Optional[PlayerState]:
        """Look up the player a reference points at, or None."""
        if ref is None:
            return None
        for player in self.players(ref.side):
            if player.position == ref.position:
                return player
        return None

    def ball_position(self) -> Point:
        """Where the ball is drawn: on its carrier if attached, else free."""
        carrier = self.resolve_player(self.ball.attached_to)
        if carrier is not None:
            return Point(carrier.x, carrier.y)
        return Point(self.ball.x, self.ball.y)

    def sorted_groups(self) -> list[TimingGroup]:
        """Timing groups in ascending step order (does not mutate)."""
        return sorted(self.timing_groups, key=lambda g: g.step)

    def group_for_step(self, step: int) -> Optional[TimingGroup]:
        for group in self.timing_groups:
            if group.step == step:
                return group
        return None

    @property
    def first_step(self) -> int:
        """Lowest step number, 1 if the scene has no groups."""
        groups = self.sorted_groups()
        return groups[0].step if groups else 1

    def all_annotations(self) -> list[Annotation]:
        """Every annotation of the scene, in step order."""
        return [a for g in self.sorted_groups() for a in g.annotations]

    # =========================================================================
    # Copy / serialization
    # =========================================================================

    def copy(self, new_id: bool = False) -> "Scene":
        """Structural deep copy; optionally with a fresh id."""
        return Scene(
            id=str(uuid4()) if new_id else self.id,
            order=self.order,
            offense=[p.copy() for p in self.offense],
            defense=[p.copy() for p in self.defense],
            ball=self.ball.copy(),
            timing_groups=[g.copy() for g in self.timing_groups],
            duration=self.duration,
            note=self.note,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order": self.order,
            "duration": self.duration,
            "note": self.note,
            "players": {
                "offense": [p.to_dict() for p in self.offense],
                "defense": [p.to_dict() for p in self.defense],
            },
            "ball": self.ball.to_dict(),
            "timingGroups": [g.to_dict() for g in self.timing_groups],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Scene":
        players = data.get("players", {})
        return cls(
            id=data.get("id") or str(uuid4()),
            order=int(data.get("order", 0)),
            duration=int(data.get("duration", 2000)),
            note=data.get("note", ""),
            offense=[PlayerState.from_dict(p) for p in players.get("offense", [])],
            defense=[PlayerState.from_dict(p) for p in players.get("defense", [])],
            ball=BallState.from_dict(data.get("ball", {})),
            timing_groups=[TimingGroup.from_dict(g) for g in data.get("timingGroups", [])],
        )
