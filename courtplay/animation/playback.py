"""Real-time playback state machine.

The controller never schedules anything. A host (display refresh loop,
test harness, batch exporter) owns it and calls `tick()` with elapsed
wall-clock milliseconds, one call at a time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from courtplay.animation.easing import EasingFn, ease_in_out
from courtplay.animation.resolver import ResolvedFrame, resolve_frame
from courtplay.animation.timeline import (
    DEFAULT_TRANSITION_MS,
    PlaybackTimeline,
    build_timeline,
    step_duration,
)
from courtplay.core.enums import PlaybackState
from courtplay.core.models import DEFAULT_STEP_DURATION_MS, Play, Scene
from courtplay.events import (
    EventBus,
    PlaybackCompletedEvent,
    PlaybackLoopedEvent,
    PlaybackStateChangedEvent,
    StepChangedEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackPosition:
    """Comparable snapshot of a controller's state."""

    state: PlaybackState
    scene_index: int
    step: int
    elapsed_ms: float


class PlaybackController:
    """
    Advances through a play's timing steps given wall-clock deltas.

    States are STOPPED and PLAYING. While playing, each `tick()` adds
    `delta * speed` to a per-step accumulator and consumes whole steps
    from it, carrying the remainder, so the result only depends on the
    total elapsed time and never on how it was split into ticks.

    Scrubbing (`set_scene_index`, `set_step`) always stops playback and
    clears the accumulator. `pause()`/`stop()` bump a generation counter;
    hosts that tag their scheduled ticks with `generation` get those
    ticks ignored once the controller has been paused.
    """

    def __init__(
        self,
        play: Play,
        speed: float = 1.0,
        loop: bool = False,
        fallback_step_ms: float = DEFAULT_STEP_DURATION_MS,
        event_bus: Optional[EventBus] = None,
        session_id: Optional[str] = None,
    ) -> None:
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self.session_id = session_id
        self.event_bus = event_bus
        self.fallback_step_ms = fallback_step_ms

        self.state = PlaybackState.STOPPED
        self.speed = speed
        self.loop = loop

        self._scenes: list[Scene] = play.ordered_scenes()
        self.scene_index = 0
        self.step = self._scenes[0].first_step if self._scenes else 1
        self._elapsed_ms: float = 0.0
        self._generation = 0

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def elapsed_ms(self) -> float:
        """Virtual time spent in the current step so far."""
        return self._elapsed_ms

    @property
    def generation(self) -> int:
        """Incremented by every pause/stop."""
        return self._generation

    @property
    def scene_count(self) -> int:
        return len(self._scenes)

    @property
    def current_scene(self) -> Optional[Scene]:
        if 0 <= self.scene_index < len(self._scenes):
            return self._scenes[self.scene_index]
        return None

    def position(self) -> PlaybackPosition:
        return PlaybackPosition(
            state=self.state,
            scene_index=self.scene_index,
            step=self.step,
            elapsed_ms=self._elapsed_ms,
        )

    def active_step_duration(self) -> float:
        """Duration of the current step, with the fallback for bad values."""
        scene = self.current_scene
        group = scene.group_for_step(self.step) if scene else None
        if group is None:
            return self.fallback_step_ms
        return step_duration(group.duration, self.fallback_step_ms)

    # =========================================================================
    # Transport
    # =========================================================================

    def play(self) -> bool:
        """
        Start playback from the current position.

        Returns:
            True if playback is running after the call
        """
        if not self._scenes:
            return False
        if self.state == PlaybackState.STOPPED:
            self._elapsed_ms = 0.0
            self._set_state(PlaybackState.PLAYING)
        return True

    def pause(self) -> None:
        """Stop playback, keeping the current position."""
        self._generation += 1
        self._set_state(PlaybackState.STOPPED)

    def stop(self) -> None:
        """Alias of pause(); position is preserved."""
        self.pause()

    def toggle(self) -> bool:
        """Toggle between playing and stopped."""
        if self.is_playing:
            self.pause()
            return False
        return self.play()

    def tick(self, delta_real_ms: float, generation: Optional[int] = None) -> int:
        """
        Advance playback by `delta_real_ms` of wall-clock time.

        Args:
            delta_real_ms: Real time since the previous tick
            generation: Generation the host scheduled this tick under;
                stale ticks (from before a pause/stop) are ignored

        Returns:
            Number of steps advanced
        """
        if not self.is_playing:
            return 0
        if generation is not None and generation != self._generation:
            return 0
        virtual_ms = delta_real_ms * self.speed
        if not math.isfinite(virtual_ms) or virtual_ms <= 0:
            return 0

        self._elapsed_ms += virtual_ms
        advanced = 0
        if self.loop:
            advanced += self._skip_full_cycles()
        while self.is_playing:
            duration = self.active_step_duration()
            if self._elapsed_ms < duration:
                break
            self._elapsed_ms -= duration
            self._advance()
            advanced += 1
        return advanced

    def _advance(self) -> None:
        """Move to the next unit: step, then scene, then loop or finish."""
        prev_scene, prev_step = self.scene_index, self.step
        scene = self._scenes[self.scene_index]

        later = [g.step for g in scene.sorted_groups() if g.step > self.step]
        if later:
            self.step = later[0]
        elif self.scene_index + 1 < len(self._scenes):
            self.scene_index += 1
            self.step = self._scenes[self.scene_index].first_step
        elif self.loop:
            self.scene_index = 0
            self.step = self._scenes[0].first_step
            logger.debug("Playback looped to first scene")
            self._emit(PlaybackLoopedEvent)
        else:
            logger.debug("Playback reached the end of the play")
            # The last step is fully played; overshoot is dropped
            self._elapsed_ms = self.active_step_duration()
            self._set_state(PlaybackState.STOPPED)
            self._emit(PlaybackCompletedEvent)
            return

        logger.debug(
            f"Advanced from scene {prev_scene} step {prev_step} "
            f"to scene {self.scene_index} step {self.step}"
        )
        self._emit(StepChangedEvent, previous_scene_index=prev_scene, previous_step=prev_step)

    def _skip_full_cycles(self) -> int:
        """
        Fold whole passes through a looping play out of the accumulator.

        A full cycle from any position comes back to that same position
        and wraps exactly once, so only the remainder has to be stepped.
        Returns the number of steps skipped.
        """
        cycle_ms, cycle_steps = self._cycle()
        if cycle_ms <= 0 or self._elapsed_ms < cycle_ms:
            return 0
        cycles = int(self._elapsed_ms // cycle_ms)
        self._elapsed_ms %= cycle_ms
        logger.debug(f"Skipped {cycles} full playback cycles")
        self._emit(PlaybackLoopedEvent, loops=cycles)
        return cycles * cycle_steps

    def _cycle(self) -> tuple[float, int]:
        """Total duration and step count of one pass through the play."""
        total_ms: float = 0
        steps = 0
        for scene in self._scenes:
            groups = scene.sorted_groups()
            if not groups:
                total_ms += self.fallback_step_ms
                steps += 1
                continue
            total_ms += sum(step_duration(g.duration, self.fallback_step_ms) for g in groups)
            steps += len(groups)
        return total_ms, steps

    # =========================================================================
    # Scrubbing
    # =========================================================================

    def set_scene_index(self, index: int) -> None:
        """Jump to the first step of a scene. Stops playback."""
        self._scrub()
        if 0 <= index < len(self._scenes):
            self.scene_index = index
            self.step = self._scenes[index].first_step

    def set_step(self, step: int) -> None:
        """Jump to a step of the current scene. Stops playback."""
        self._scrub()
        scene = self.current_scene
        if scene is not None and scene.group_for_step(step) is not None:
            self.step = step

    def step_forward(self) -> None:
        """Jump to the next scene (wrapping when looping). Stops playback."""
        if self.scene_index + 1 < len(self._scenes):
            self.set_scene_index(self.scene_index + 1)
        elif self.loop:
            self.set_scene_index(0)
        else:
            self._scrub()

    def step_back(self) -> None:
        """Jump to the previous scene. Stops playback."""
        if self.scene_index > 0:
            self.set_scene_index(self.scene_index - 1)
        else:
            self._scrub()

    def reset(self) -> None:
        """Stop and rewind to the first step of the first scene."""
        self.set_scene_index(0)

    def _scrub(self) -> None:
        self.pause()
        self._elapsed_ms = 0.0

    # =========================================================================
    # Settings
    # =========================================================================

    def set_speed(self, speed: float) -> None:
        """Set the playback speed multiplier (> 0)."""
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self.speed = speed

    def set_loop(self, loop: bool) -> None:
        self.loop = loop

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_state(self, new_state: PlaybackState) -> None:
        if new_state == self.state:
            return
        previous = self.state
        self.state = new_state
        logger.info(f"Playback {new_state.value} at scene {self.scene_index} step {self.step}")
        self._emit(PlaybackStateChangedEvent, previous=previous, current=new_state)

    def _emit(self, event_type: type, **kwargs) -> None:
        if self.event_bus is None:
            return
        self.event_bus.emit(event_type(
            session_id=self.session_id,
            scene_index=self.scene_index,
            step=self.step,
            **kwargs,
        ))


class PlaybackSession:
    """
    A playback controller bound to one play and its timeline.

    Owned by whichever host drives it. Besides forwarding `tick()` it
    maps the controller's position onto the timeline, so real-time
    playback and batch export resolve identical frames for the same
    instant.
    """

    def __init__(
        self,
        play: Play,
        speed: float = 1.0,
        loop: bool = False,
        transition_ms: float = DEFAULT_TRANSITION_MS,
        fallback_step_ms: float = DEFAULT_STEP_DURATION_MS,
        easing: EasingFn = ease_in_out,
        event_bus: Optional[EventBus] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.session_id = session_id or str(uuid4())
        self.play = play
        self.easing = easing
        self.transition_ms = transition_ms
        self.fallback_step_ms = fallback_step_ms
        self.timeline: PlaybackTimeline = build_timeline(play, transition_ms, fallback_step_ms)
        self.controller = PlaybackController(
            play,
            speed=speed,
            loop=loop,
            fallback_step_ms=fallback_step_ms,
            event_bus=event_bus,
            session_id=self.session_id,
        )

    @classmethod
    def from_config(cls, play: Play, event_bus: Optional[EventBus] = None, **kwargs) -> PlaybackSession:
        """Create a session using the global engine configuration."""
        from courtplay.animation.easing import get_easing
        from courtplay.config import get_config

        config = get_config()
        kwargs.setdefault("transition_ms", config.transition_ms)
        kwargs.setdefault("fallback_step_ms", config.fallback_step_ms)
        kwargs.setdefault("easing", get_easing(config.easing))
        return cls(play, event_bus=event_bus, **kwargs)

    def tick(self, delta_ms: float, generation: Optional[int] = None) -> int:
        return self.controller.tick(delta_ms, generation)

    def position_ms(self) -> float:
        """Timeline instant matching the controller's scene/step/elapsed time."""
        ctrl = self.controller
        frame = self.timeline.step_frame(ctrl.scene_index, ctrl.step)
        if frame is None:
            return 0.0
        return frame.start_ms + min(ctrl.elapsed_ms, frame.duration_ms)

    def current_frame(self) -> Optional[ResolvedFrame]:
        """Resolve what should be drawn right now."""
        return resolve_frame(self.play, self.timeline, self.position_ms(), self.easing)

    def frame_at(self, ms: float) -> Optional[ResolvedFrame]:
        return resolve_frame(self.play, self.timeline, ms, self.easing)
