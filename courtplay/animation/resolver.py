"""Resolving the visual state of a timeline at a given instant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from courtplay.animation.easing import EasingFn, ease_in_out, linear
from courtplay.animation.interpolation import InterpolatedScene, interpolate_scene
from courtplay.animation.timeline import PlaybackTimeline, TimelineFrame
from courtplay.core.enums import FrameKind
from courtplay.core.models import Annotation, Play, Scene


@dataclass
class ResolvedFrame:
    """Everything a renderer needs for one instant.

    Attributes:
        frame: Timeline frame containing the instant
        progress: Position within that frame, in [0, 1]
        active_annotations: Annotations belonging to the active step
        scene: Player/ball state to draw
    """
    frame: TimelineFrame
    progress: float
    active_annotations: list[Annotation]
    scene: InterpolatedScene

    def to_dict(self) -> dict:
        return {
            "frame": self.frame.to_dict(),
            "progress": self.progress,
            "activeAnnotations": [a.to_dict() for a in self.active_annotations],
            "scene": self.scene.to_dict(),
        }


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def locate_frame(timeline: PlaybackTimeline, ms: float) -> TimelineFrame:
    """First frame whose [start, end) contains `ms`, else the last frame."""
    for frame in timeline.frames:
        if ms < frame.end_ms:
            return frame
    return timeline.frames[-1]


def resolve_frame(
    play: Play,
    timeline: PlaybackTimeline,
    current_ms: float,
    easing: EasingFn = ease_in_out,
) -> Optional[ResolvedFrame]:
    """
    Resolve the frame and court state at `current_ms`.

    Out-of-range instants are clamped into [0, total_ms]. At exactly
    `total_ms` the last frame resolves with progress 1.

    Step holds show the source scene untouched, with only that step's
    annotations active. Transitions blend into the next scene; easing is
    applied here, so the interpolator is given a linear curve.

    Returns:
        ResolvedFrame, or None if the timeline has no frames
    """
    if timeline.is_empty:
        return None

    clamped = clamp(current_ms, 0, timeline.total_ms)
    frame = locate_frame(timeline, clamped)
    progress = clamp((clamped - frame.start_ms) / max(frame.duration_ms, 1), 0, 1)

    scenes = play.ordered_scenes()
    source = scenes[frame.scene_index]

    if frame.kind == FrameKind.SCENE_TRANSITION:
        target = scenes[frame.to_scene_index]
        scene = interpolate_scene(source, target, easing(progress), linear)
        active = source.all_annotations()
    elif frame.kind == FrameKind.STEP_HOLD:
        scene = InterpolatedScene.from_scene(source)
        active = step_annotations(source, frame.timing_step)
    else:
        raise ValueError(f"Unhandled frame kind: {frame.kind}")

    return ResolvedFrame(frame=frame, progress=progress, active_annotations=active, scene=scene)


def step_annotations(scene: Scene, step: Optional[int]) -> list[Annotation]:
    """Annotations of exactly one timing step."""
    if step is None:
        return []
    group = scene.group_for_step(step)
    return list(group.annotations) if group else []


def cumulative_annotations(scene: Scene, step: int) -> list[Annotation]:
    """Annotations of every step up to and including `step`.

    A "reveal so far" view for callers that keep earlier steps drawn.
    """
    return [a for g in scene.sorted_groups() if g.step <= step for a in g.annotations]


def annotation_draw_progress(annotations: list[Annotation], step_progress: float) -> list[float]:
    """
    Per-annotation draw progress for a step, staggered over time.

    Each annotation draws in sequence and takes an equal share of the
    step, so with two annotations the first finishes at 0.5 and the
    second starts there.
    """
    if not annotations:
        return []
    share = 1 / len(annotations)
    result = []
    for i in range(len(annotations)):
        start = i * share
        end = (i + 1) * share
        if step_progress <= start:
            result.append(0.0)
        elif step_progress >= end:
            result.append(1.0)
        else:
            result.append((step_progress - start) / share)
    return result
