"""
Playback/animation engine.

Turns a play (scenes -> timing steps -> annotations) into a linear
timeline, resolves the court state at any instant, and drives real-time
playback from host-supplied ticks.

Usage:
    from courtplay.animation import PlaybackSession, build_timeline, resolve_frame

    timeline = build_timeline(play)
    frame = resolve_frame(play, timeline, current_ms=1250)

    session = PlaybackSession(play)
    session.controller.play()
    session.tick(16.7)
"""

from courtplay.animation.easing import EASINGS, EasingFn, ease_in_out, get_easing, linear
from courtplay.animation.export import (
    ExportFrame,
    PlaybackExport,
    StoryboardFrame,
    export_play,
    frame_times,
    render_frames,
    storyboard,
)
from courtplay.animation.interpolation import (
    ATTACHMENT_SNAP_PROGRESS,
    InterpolatedScene,
    interpolate_ball,
    interpolate_player,
    interpolate_scene,
)
from courtplay.animation.playback import PlaybackController, PlaybackPosition, PlaybackSession
from courtplay.animation.resolver import (
    ResolvedFrame,
    annotation_draw_progress,
    cumulative_annotations,
    resolve_frame,
)
from courtplay.animation.timeline import (
    DEFAULT_TRANSITION_MS,
    PlaybackTimeline,
    TimelineFrame,
    build_timeline,
    step_duration,
)

__all__ = [
    # Easing
    "EASINGS",
    "EasingFn",
    "ease_in_out",
    "get_easing",
    "linear",
    # Interpolation
    "ATTACHMENT_SNAP_PROGRESS",
    "InterpolatedScene",
    "interpolate_ball",
    "interpolate_player",
    "interpolate_scene",
    # Timeline
    "DEFAULT_TRANSITION_MS",
    "PlaybackTimeline",
    "TimelineFrame",
    "build_timeline",
    "step_duration",
    # Resolution
    "ResolvedFrame",
    "annotation_draw_progress",
    "cumulative_annotations",
    "resolve_frame",
    # Playback
    "PlaybackController",
    "PlaybackPosition",
    "PlaybackSession",
    # Export
    "ExportFrame",
    "PlaybackExport",
    "StoryboardFrame",
    "export_play",
    "frame_times",
    "render_frames",
    "storyboard",
]
