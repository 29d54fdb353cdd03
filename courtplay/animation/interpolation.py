"""Blending between two scenes at a progress value.

Pure functions: inputs are never mutated and every result is a fresh
value, so the same call always produces the same output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from courtplay.animation.easing import EasingFn, ease_in_out
from courtplay.core.enums import Side
from courtplay.core.models import Annotation, BallState, PlayerRef, PlayerState, Point, Scene

# Progress at which the ball's attachment switches to the target scene's
ATTACHMENT_SNAP_PROGRESS = 0.5


@dataclass
class InterpolatedScene:
    """Visual state of the court at one instant.

    Attributes:
        offense: Offensive player tokens
        defense: Defensive player tokens
        ball: Ball state (free position plus attachment)
        annotations: Annotations to keep drawn while this state shows
    """
    offense: list[PlayerState]
    defense: list[PlayerState]
    ball: BallState
    annotations: list[Annotation] = field(default_factory=list)

    def players(self, side: Side) -> list[PlayerState]:
        return self.offense if side == Side.OFFENSE else self.defense

    def resolve_player(self, ref: Optional[PlayerRef]) -> Optional[PlayerState]:
        if ref is None:
            return None
        for player in self.players(ref.side):
            if player.position == ref.position:
                return player
        return None

    def ball_position(self) -> Point:
        """Ball draw position, following its carrier when attached."""
        carrier = self.resolve_player(self.ball.attached_to)
        if carrier is not None:
            return Point(carrier.x, carrier.y)
        return Point(self.ball.x, self.ball.y)

    @classmethod
    def from_scene(cls, scene: Scene) -> InterpolatedScene:
        """Settled (un-blended) state of a single scene."""
        return cls(
            offense=[p.copy() for p in scene.offense],
            defense=[p.copy() for p in scene.defense],
            ball=scene.ball.copy(),
            annotations=scene.all_annotations(),
        )

    def to_dict(self) -> dict:
        return {
            "players": {
                "offense": [p.to_dict() for p in self.offense],
                "defense": [p.to_dict() for p in self.defense],
            },
            "ball": self.ball.to_dict(),
            "annotations": [a.to_dict() for a in self.annotations],
        }


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def interpolate_player(
    start: PlayerState,
    end: PlayerState,
    t: float,
    easing: EasingFn = ease_in_out,
) -> PlayerState:
    """Blend one player token; visibility snaps to the target."""
    et = easing(t)
    return PlayerState(
        position=start.position,
        x=lerp(start.x, end.x, et),
        y=lerp(start.y, end.y, et),
        visible=end.visible,
    )


def interpolate_ball(
    start: BallState,
    end: BallState,
    t: float,
    easing: EasingFn = ease_in_out,
) -> BallState:
    """Blend the ball position; attachment snaps at the midpoint.

    Position is continuous but attachment is discrete: below
    ATTACHMENT_SNAP_PROGRESS the source carrier is kept, from it on the
    target carrier is used. There is no visual midpoint for a change of
    carrier.
    """
    et = easing(t)
    return BallState(
        x=lerp(start.x, end.x, et),
        y=lerp(start.y, end.y, et),
        attached_to=end.attached_to if t >= ATTACHMENT_SNAP_PROGRESS else start.attached_to,
    )


def _interpolate_side(
    start: list[PlayerState],
    end: list[PlayerState],
    t: float,
    easing: EasingFn,
) -> list[PlayerState]:
    targets = {p.position: p for p in end}
    blended = []
    for player in start:
        target = targets.get(player.position)
        if target is None:
            # No counterpart in the target scene: hold the source value
            blended.append(player.copy())
        else:
            blended.append(interpolate_player(player, target, t, easing))
    return blended


def interpolate_scene(
    start: Scene,
    end: Scene,
    t: float,
    easing: EasingFn = ease_in_out,
) -> InterpolatedScene:
    """
    Blend `start` toward `end` at progress `t` in [0, 1].

    Players are matched by position within each side. The returned
    annotations are always the source scene's, so drawings from the
    previous steps stay visible while the tokens move.

    Args:
        start: Scene being left
        end: Scene being entered
        t: Progress in [0, 1]
        easing: Curve applied to `t` before blending positions

    Returns:
        InterpolatedScene with freshly built player and ball states
    """
    return InterpolatedScene(
        offense=_interpolate_side(start.offense, end.offense, t, easing),
        defense=_interpolate_side(start.defense, end.defense, t, easing),
        ball=interpolate_ball(start.ball, end.ball, t, easing),
        annotations=start.all_annotations(),
    )
