"""Flattening a play into a linear playback timeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from courtplay.core.enums import FrameKind
from courtplay.core.models import DEFAULT_STEP_DURATION_MS, Play

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_MS = 500


@dataclass(frozen=True)
class TimelineFrame:
    """One unit of the flattened timeline.

    Attributes:
        kind: Step hold or scene transition
        start_ms: Start time relative to the beginning of the play
        duration_ms: Length of the frame
        scene_index: Scene being shown (or transitioned from), in play order
        to_scene_index: Target scene, transitions only
        timing_step: Active timing step, step holds only
    """
    kind: FrameKind
    start_ms: float
    duration_ms: float
    scene_index: int
    to_scene_index: Optional[int] = None
    timing_step: Optional[int] = None

    @property
    def end_ms(self) -> float:
        return self.start_ms + self.duration_ms

    def contains(self, ms: float) -> bool:
        """True if `ms` falls in [start, end)."""
        return self.start_ms <= ms < self.end_ms

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "startMs": self.start_ms,
            "durationMs": self.duration_ms,
            "sceneIndex": self.scene_index,
            "toSceneIndex": self.to_scene_index,
            "timingStep": self.timing_step,
        }


@dataclass(frozen=True)
class PlaybackTimeline:
    """Ordered, gap-free sequence of frames."""

    frames: tuple[TimelineFrame, ...] = field(default_factory=tuple)
    total_ms: float = 0

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def is_empty(self) -> bool:
        return not self.frames

    def step_frame(self, scene_index: int, step: int) -> Optional[TimelineFrame]:
        """The step-hold frame for a scene/step pair, if any."""
        for frame in self.frames:
            if (
                frame.kind == FrameKind.STEP_HOLD
                and frame.scene_index == scene_index
                and frame.timing_step == step
            ):
                return frame
        return None

    def to_dict(self) -> dict:
        return {
            "frames": [f.to_dict() for f in self.frames],
            "totalMs": self.total_ms,
        }


def step_duration(duration: float, fallback_ms: float = DEFAULT_STEP_DURATION_MS) -> float:
    """Duration actually used for a timing step; non-positive values fall back."""
    return duration if duration > 0 else fallback_ms


def build_timeline(
    play: Play,
    transition_duration_ms: float = DEFAULT_TRANSITION_MS,
    fallback_step_ms: float = DEFAULT_STEP_DURATION_MS,
) -> PlaybackTimeline:
    """
    Build a flat timeline of frames from a play.

    For each scene in order:
        1. One step-hold per timing group, ascending by step.
        2. A scene-transition into the next scene (except after the last).

    Frames are laid back to back from t=0, so the timeline is gap-free
    and `total_ms` is the sum of all durations. The play is only read.

    Args:
        play: Play to flatten
        transition_duration_ms: Length of each between-scene blend
        fallback_step_ms: Used for steps with a non-positive duration

    Returns:
        PlaybackTimeline
    """
    frames: list[TimelineFrame] = []
    cursor: float = 0
    scenes = play.ordered_scenes()

    for si, scene in enumerate(scenes):
        groups = scene.sorted_groups()
        if not groups:
            # Scenes always carry step 1; degrade rather than drop the scene
            logger.warning(f"Scene {scene.id} has no timing groups, using a fallback step")
            frames.append(TimelineFrame(
                kind=FrameKind.STEP_HOLD,
                start_ms=cursor,
                duration_ms=fallback_step_ms,
                scene_index=si,
                timing_step=1,
            ))
            cursor += fallback_step_ms

        for group in groups:
            dur = step_duration(group.duration, fallback_step_ms)
            frames.append(TimelineFrame(
                kind=FrameKind.STEP_HOLD,
                start_ms=cursor,
                duration_ms=dur,
                scene_index=si,
                timing_step=group.step,
            ))
            cursor += dur

        if si < len(scenes) - 1:
            frames.append(TimelineFrame(
                kind=FrameKind.SCENE_TRANSITION,
                start_ms=cursor,
                duration_ms=transition_duration_ms,
                scene_index=si,
                to_scene_index=si + 1,
            ))
            cursor += transition_duration_ms

    logger.debug(f"Built timeline: {len(frames)} frames, {cursor}ms")
    return PlaybackTimeline(frames=tuple(frames), total_ms=cursor)
