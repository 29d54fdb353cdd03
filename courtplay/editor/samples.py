"""Built-in sample plays (used by the CLI demo)."""

from courtplay.core.enums import AnnotationType, Category, CourtType, Side
from courtplay.core.models import (
    Annotation,
    BallState,
    Play,
    PlayerRef,
    PlayerState,
    Point,
    Scene,
    TimingGroup,
)


def _side(coords: list[tuple[float, float]]) -> list[PlayerState]:
    return [PlayerState(position=i + 1, x=x, y=y) for i, (x, y) in enumerate(coords)]


def pick_and_roll() -> Play:
    """
    Two-scene high pick-and-roll.

    Scene 1: the 5 comes up to screen for the 1 (step 1), then the 1
    dribbles off the screen (step 2). Scene 2: the 1 hits the rolling 5.
    """
    pg = PlayerRef(Side.OFFENSE, 1)
    center = PlayerRef(Side.OFFENSE, 5)

    setup = Scene(
        order=0,
        note="High ball screen",
        offense=_side([(0.50, 0.70), (0.15, 0.45), (0.85, 0.45), (0.10, 0.15), (0.65, 0.25)]),
        defense=_side([(0.50, 0.62), (0.20, 0.42), (0.80, 0.42), (0.15, 0.20), (0.60, 0.30)]),
        ball=BallState(x=0.50, y=0.70, attached_to=pg),
        timing_groups=[
            TimingGroup(step=1, duration=1000, annotations=[
                Annotation(
                    type=AnnotationType.SCREEN,
                    from_point=Point(0.65, 0.25),
                    to_point=Point(0.55, 0.66),
                    from_player=center,
                ),
            ]),
            TimingGroup(step=2, duration=1200, annotations=[
                Annotation(
                    type=AnnotationType.DRIBBLE,
                    from_point=Point(0.50, 0.70),
                    to_point=Point(0.70, 0.50),
                    from_player=pg,
                ),
                Annotation(
                    type=AnnotationType.CUT,
                    from_point=Point(0.55, 0.66),
                    to_point=Point(0.55, 0.20),
                    from_player=center,
                ),
            ]),
        ],
    )

    finish = Scene(
        order=1,
        note="Pocket pass to the roller",
        offense=_side([(0.70, 0.50), (0.15, 0.45), (0.85, 0.45), (0.10, 0.15), (0.55, 0.20)]),
        defense=_side([(0.65, 0.45), (0.25, 0.40), (0.78, 0.40), (0.15, 0.20), (0.62, 0.42)]),
        ball=BallState(x=0.70, y=0.50, attached_to=pg),
        timing_groups=[
            TimingGroup(step=1, duration=900, annotations=[
                Annotation(
                    type=AnnotationType.PASS,
                    from_point=Point(0.70, 0.50),
                    to_point=Point(0.55, 0.20),
                    from_player=pg,
                    to_player=center,
                ),
            ]),
        ],
    )

    return Play(
        title="Horns Pick and Roll",
        description="Sample play",
        category=Category.OFFENSE,
        court_type=CourtType.HALF,
        tags=["pnr", "sample"],
        scenes=[setup, finish],
    )
