"""Shared pytest fixtures for courtplay tests."""

import pytest

from courtplay.core.enums import AnnotationType, Side
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


def _annotation(ann_id: str, kind: AnnotationType = AnnotationType.MOVEMENT) -> Annotation:
    return Annotation(
        id=ann_id,
        type=kind,
        from_point=Point(0.1, 0.1),
        to_point=Point(0.9, 0.9),
    )


def _players(x: float = 0.5, y: float = 0.5) -> list[PlayerState]:
    return [PlayerState(position=i + 1, x=x, y=y) for i in range(5)]


# =============================================================================
# Reference Fixtures
# =============================================================================


@pytest.fixture
def ref_a() -> PlayerRef:
    """Point guard reference."""
    return PlayerRef(Side.OFFENSE, 1)


@pytest.fixture
def ref_b() -> PlayerRef:
    """Shooting guard reference."""
    return PlayerRef(Side.OFFENSE, 2)


# =============================================================================
# Scene Fixtures
# =============================================================================


@pytest.fixture
def start_scene(ref_a) -> Scene:
    """Scene with offense 1 at x=0.2 and the ball on A."""
    offense = _players()
    offense[0] = PlayerState(position=1, x=0.2, y=0.4)
    return Scene(
        id="scene-start",
        order=0,
        offense=offense,
        defense=_players(0.3, 0.3),
        ball=BallState(x=0.2, y=0.4, attached_to=ref_a),
        timing_groups=[TimingGroup(step=1, duration=1000, annotations=[_annotation("s0-a1")])],
    )


@pytest.fixture
def end_scene(ref_b) -> Scene:
    """Scene with offense 1 at x=0.8 and the ball on B."""
    offense = _players()
    offense[0] = PlayerState(position=1, x=0.8, y=0.6, visible=False)
    return Scene(
        id="scene-end",
        order=1,
        offense=offense,
        defense=_players(0.7, 0.7),
        ball=BallState(x=0.8, y=0.6, attached_to=ref_b),
        timing_groups=[TimingGroup(step=1, duration=1000, annotations=[_annotation("s1-a1")])],
    )


# =============================================================================
# Play Fixtures
# =============================================================================


@pytest.fixture
def two_scene_play(start_scene, end_scene) -> Play:
    """Two scenes, one 1000ms step each."""
    return Play(id="play-two", title="Two Scenes", scenes=[start_scene, end_scene])


@pytest.fixture
def single_scene_play() -> Play:
    """One scene with two steps (500ms, 300ms)."""
    scene = Scene(
        id="only",
        order=0,
        timing_groups=[
            TimingGroup(step=1, duration=500, annotations=[_annotation("only-1")]),
            TimingGroup(step=2, duration=300, annotations=[_annotation("only-2")]),
        ],
    )
    return Play(id="play-one", scenes=[scene])


@pytest.fixture
def multi_step_play() -> Play:
    """
    Three scenes with uneven steps.

    Scene 0: step 1 (500ms, a1), step 2 (300ms, a2 + a3)
    Scene 1: step 1 (400ms, b1)
    Scene 2: step 1 (1000ms, c1), step 2 (duration 0 -> fallback 1000ms, c2)
    """
    scene0 = Scene(
        id="s0",
        order=0,
        timing_groups=[
            # Stored out of order on purpose
            TimingGroup(step=2, duration=300, annotations=[
                _annotation("a2", AnnotationType.PASS),
                _annotation("a3", AnnotationType.SCREEN),
            ]),
            TimingGroup(step=1, duration=500, annotations=[_annotation("a1")]),
        ],
    )
    scene1 = Scene(
        id="s1",
        order=1,
        timing_groups=[TimingGroup(step=1, duration=400, annotations=[_annotation("b1", AnnotationType.CUT)])],
    )
    scene2 = Scene(
        id="s2",
        order=2,
        timing_groups=[
            TimingGroup(step=1, duration=1000, annotations=[_annotation("c1", AnnotationType.DRIBBLE)]),
            TimingGroup(step=2, duration=0, annotations=[_annotation("c2")]),
        ],
    )
    return Play(id="play-multi", scenes=[scene0, scene1, scene2])


@pytest.fixture
def empty_play() -> Play:
    """Play with no scenes."""
    return Play(id="play-empty", scenes=[])
