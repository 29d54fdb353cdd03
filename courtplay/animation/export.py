"""Batch (out of real time) frame export for static renderers.

Encoders (PNG/GIF/PDF) consume these frame lists; they live outside
this package.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from courtplay.animation.easing import EasingFn, ease_in_out
from courtplay.animation.interpolation import InterpolatedScene
from courtplay.animation.resolver import ResolvedFrame, cumulative_annotations, resolve_frame
from courtplay.animation.timeline import (
    DEFAULT_TRANSITION_MS,
    PlaybackTimeline,
    build_timeline,
)
from courtplay.core.models import Annotation, Play

# Storyboard timing (ms at 1x speed)
SCENE_HOLD_MS = 400
FINAL_HOLD_MS = 1200
MIN_DELAY_MS = 10
MAX_DELAY_MS = 10000


@dataclass
class ExportFrame:
    """One sampled instant of the animation."""
    index: int
    time_ms: float
    resolved: ResolvedFrame

    def to_dict(self) -> dict:
        data = self.resolved.to_dict()
        data["index"] = self.index
        data["timeMs"] = self.time_ms
        return data


@dataclass
class PlaybackExport:
    """Complete sampled animation of a play."""
    metadata: Dict[str, Any]
    timeline: PlaybackTimeline
    frames: List[ExportFrame]

    def to_dict(self) -> dict:
        return {
            "metadata": self.metadata,
            "timeline": self.timeline.to_dict(),
            "frames": [f.to_dict() for f in self.frames],
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: str) -> None:
        """Save to file."""
        with open(path, 'w') as f:
            f.write(self.to_json())


@dataclass
class StoryboardFrame:
    """A still for frame-per-step exports (GIF-style)."""
    scene_index: int
    step: Optional[int]  # None for the hold after a scene
    delay_ms: int
    scene: InterpolatedScene
    annotations: List[Annotation] = field(default_factory=list)


def frame_times(total_ms: float, fps: float) -> List[float]:
    """
    Evenly spaced sample instants covering [0, total_ms].

    Always starts at 0 and ends exactly at `total_ms`.
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")
    interval = 1000.0 / fps
    times = []
    i = 0
    while i * interval < total_ms:
        times.append(i * interval)
        i += 1
    times.append(total_ms)
    return times


def render_frames(
    play: Play,
    timeline: PlaybackTimeline,
    times: List[float],
    easing: EasingFn = ease_in_out,
) -> List[ExportFrame]:
    """Resolve every instant in `times`, in the order given."""
    frames = []
    for i, ms in enumerate(times):
        resolved = resolve_frame(play, timeline, ms, easing)
        if resolved is None:
            break
        frames.append(ExportFrame(index=i, time_ms=ms, resolved=resolved))
    return frames


def export_play(
    play: Play,
    fps: float = 30,
    transition_ms: float = DEFAULT_TRANSITION_MS,
    easing: EasingFn = ease_in_out,
    output_path: Optional[str] = None,
) -> PlaybackExport:
    """Sample a whole play at a fixed frame rate.

    Args:
        play: Play to export
        fps: Samples per second of animation time
        transition_ms: Length of between-scene blends
        easing: Curve used for transitions
        output_path: Optional path to save JSON

    Returns:
        PlaybackExport object
    """
    timeline = build_timeline(play, transition_ms)
    times = frame_times(timeline.total_ms, fps) if not timeline.is_empty else []
    export = PlaybackExport(
        metadata={
            "playId": play.id,
            "title": play.title,
            "courtType": play.court_type.value,
            "fps": fps,
            "transitionMs": transition_ms,
            "totalMs": timeline.total_ms,
            "frameCount": len(times),
        },
        timeline=timeline,
        frames=render_frames(play, timeline, times, easing),
    )
    if output_path:
        export.save(output_path)
    return export


def _delay(ms: float, speed: float) -> int:
    return int(min(max(round(ms / speed), MIN_DELAY_MS), MAX_DELAY_MS))


def storyboard(play: Play, speed: float = 1.0) -> List[StoryboardFrame]:
    """
    One still per timing step plus a hold after each scene.

    Each step still shows every annotation revealed so far in its scene.
    The hold after the last scene is longer so looping viewers get a
    pause before the play restarts.
    """
    if speed <= 0:
        raise ValueError(f"speed must be > 0, got {speed}")

    frames = []
    scenes = play.ordered_scenes()
    for si, scene in enumerate(scenes):
        still = InterpolatedScene.from_scene(scene)
        revealed: List[Annotation] = []
        for group in scene.sorted_groups():
            revealed = cumulative_annotations(scene, group.step)
            frames.append(StoryboardFrame(
                scene_index=si,
                step=group.step,
                delay_ms=_delay(group.duration, speed),
                scene=still,
                annotations=revealed,
            ))

        hold_ms = FINAL_HOLD_MS if si == len(scenes) - 1 else SCENE_HOLD_MS
        frames.append(StoryboardFrame(
            scene_index=si,
            step=None,
            delay_ms=_delay(hold_ms, speed),
            scene=still,
            annotations=revealed,
        ))
    return frames
