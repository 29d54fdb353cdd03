"""Editing layer: play mutations with undo/redo."""

import logging
from datetime import datetime
from typing import Optional

from courtplay.core.enums import Category, CourtType, Side
from courtplay.core.history import MAX_HISTORY_SIZE, EditorSnapshot, HistoryStack
from courtplay.core.models import (
    DEFAULT_STEP_DURATION_MS,
    Annotation,
    BallState,
    Play,
    PlayerRef,
    PlayerState,
    Scene,
    TimingGroup,
)
from courtplay.editor.scenes import create_default_play, create_empty_scene, normalize_steps, renumber_scenes
from courtplay.events import EventBus

logger = logging.getLogger(__name__)


class PlayEditor:
    """
    Owns the play document being edited.

    Every mutation pushes a snapshot of the current document onto the
    history first, then replaces `play` with an edited copy. The old
    play object is never modified, so playback sessions and snapshots
    that hold it keep seeing a stable document.
    """

    def __init__(
        self,
        play: Optional[Play] = None,
        history_size: int = MAX_HISTORY_SIZE,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.play = play or create_default_play()
        self.selected_scene_id: Optional[str] = self._first_scene_id(self.play)
        self.history = HistoryStack(max_size=history_size, event_bus=event_bus)

    # =========================================================================
    # Document / history
    # =========================================================================

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(play=self.play, selected_scene_id=self.selected_scene_id)

    def load(self, play: Play) -> None:
        """Switch to another play; history does not carry over."""
        self.play = play
        self.selected_scene_id = self._first_scene_id(play)
        self.history.reset()
        logger.info(f"Loaded play {play.id} ({len(play.scenes)} scenes)")

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False if nothing to undo."""
        restored = self.history.undo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    def redo(self) -> bool:
        """Re-apply the next snapshot. Returns False if nothing to redo."""
        restored = self.history.redo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    def select_scene(self, scene_id: Optional[str]) -> None:
        """Change the selected scene (not an undoable action)."""
        if scene_id is not None:
            self.play.get_scene(scene_id)
        self.selected_scene_id = scene_id

    @property
    def selected_scene(self) -> Optional[Scene]:
        for scene in self.play.scenes:
            if scene.id == self.selected_scene_id:
                return scene
        ordered = self.play.ordered_scenes()
        return ordered[0] if ordered else None

    # =========================================================================
    # Play metadata
    # =========================================================================

    def update_play_meta(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[Category] = None,
        tags: Optional[list[str]] = None,
        court_type: Optional[CourtType] = None,
    ) -> None:
        play = self._begin()
        if title is not None:
            play.title = title
        if description is not None:
            play.description = description
        if category is not None:
            play.category = category
        if tags is not None:
            play.tags = list(tags)
        if court_type is not None:
            play.court_type = court_type
        self._commit(play)

    # =========================================================================
    # Scenes
    # =========================================================================

    def add_scene(self) -> Scene:
        """Append a blank scene and select it."""
        play = self._begin()
        scene = create_empty_scene(len(play.scenes))
        play.scenes.append(scene)
        self._commit(play, select=scene.id)
        return scene

    def remove_scene(self, scene_id: str) -> bool:
        """Remove a scene. The last remaining scene is never removed."""
        self.play.get_scene(scene_id)
        if len(self.play.scenes) <= 1:
            return False
        play = self._begin()
        play.scenes = renumber_scenes([s for s in play.ordered_scenes() if s.id != scene_id])
        select = self.selected_scene_id
        if select == scene_id:
            select = play.scenes[0].id
        self._commit(play, select=select)
        return True

    def duplicate_scene(self, scene_id: str) -> Scene:
        """Insert a structural copy right after a scene and select it."""
        self.play.get_scene(scene_id)
        play = self._begin()
        ordered = play.ordered_scenes()
        idx = next(i for i, s in enumerate(ordered) if s.id == scene_id)
        copy = ordered[idx].copy(new_id=True)
        ordered.insert(idx + 1, copy)
        play.scenes = renumber_scenes(ordered)
        self._commit(play, select=copy.id)
        return copy

    def reorder_scene(self, scene_id: str, new_order: int) -> None:
        """Move a scene to a new position, shifting the others."""
        self.play.get_scene(scene_id)
        play = self._begin()
        ordered = play.ordered_scenes()
        idx = next(i for i, s in enumerate(ordered) if s.id == scene_id)
        moved = ordered.pop(idx)
        new_order = max(0, min(new_order, len(ordered)))
        ordered.insert(new_order, moved)
        play.scenes = renumber_scenes(ordered)
        self._commit(play)

    def update_scene_note(self, scene_id: str, note: str) -> None:
        play, scene = self._begin_scene(scene_id)
        scene.note = note
        self._commit(play)

    def update_player_state(self, scene_id: str, side: Side, player: PlayerState) -> bool:
        """Replace the player at `player.position` on one side."""
        if self.play.get_scene(scene_id).resolve_player(PlayerRef(side, player.position)) is None:
            return False
        play, scene = self._begin_scene(scene_id)
        players = scene.players(side)
        for i, existing in enumerate(players):
            if existing.position == player.position:
                players[i] = player.copy()
        self._commit(play)
        return True

    def update_ball_state(self, scene_id: str, ball: BallState) -> None:
        play, scene = self._begin_scene(scene_id)
        scene.ball = ball.copy()
        self._commit(play)

    # =========================================================================
    # Timing groups and annotations
    # =========================================================================

    def add_annotation(self, scene_id: str, step: int, annotation: Annotation) -> None:
        """Add an annotation to a step, creating the step if needed."""
        play, scene = self._begin_scene(scene_id)
        group = scene.group_for_step(step)
        if group is not None:
            group.annotations.append(annotation)
        else:
            scene.timing_groups.append(TimingGroup(
                step=step, duration=DEFAULT_STEP_DURATION_MS, annotations=[annotation],
            ))
        scene.timing_groups = normalize_steps(scene.timing_groups)
        self._commit(play)

    def remove_annotation(self, scene_id: str, annotation_id: str) -> None:
        """Remove an annotation; steps left empty are dropped, except step 1."""
        play, scene = self._begin_scene(scene_id)
        for group in scene.timing_groups:
            group.annotations = [a for a in group.annotations if a.id != annotation_id]
        kept = [g for g in scene.timing_groups if g.annotations or g.step == 1]
        scene.timing_groups = normalize_steps(kept)
        self._commit(play)

    def move_annotation_to_step(self, scene_id: str, annotation_id: str, new_step: int) -> bool:
        """Move an annotation into another step (created if missing)."""
        source = self.play.get_scene(scene_id)
        if not any(a.id == annotation_id for a in source.all_annotations()):
            return False

        play, scene = self._begin_scene(scene_id)
        moved = None
        for group in scene.timing_groups:
            for a in group.annotations:
                if a.id == annotation_id:
                    moved = a
            group.annotations = [a for a in group.annotations if a.id != annotation_id]

        target = scene.group_for_step(new_step)
        if target is not None:
            target.annotations.append(moved)
        else:
            scene.timing_groups.append(TimingGroup(
                step=new_step, duration=DEFAULT_STEP_DURATION_MS, annotations=[moved],
            ))
        kept = [g for g in scene.timing_groups if g.annotations or g.step == 1]
        scene.timing_groups = normalize_steps(kept)
        self._commit(play)
        return True

    def add_timing_step(self, scene_id: str) -> int:
        """Append an empty step after the last one. Returns its number."""
        play, scene = self._begin_scene(scene_id)
        step = max((g.step for g in scene.timing_groups), default=0) + 1
        scene.timing_groups.append(TimingGroup(step=step, duration=DEFAULT_STEP_DURATION_MS))
        self._commit(play)
        return step

    def remove_timing_step(self, scene_id: str, step: int) -> bool:
        """Remove a step and renumber. A scene's only step is never removed."""
        scene = self.play.get_scene(scene_id)
        if len(scene.timing_groups) <= 1 or scene.group_for_step(step) is None:
            return False
        play, scene = self._begin_scene(scene_id)
        scene.timing_groups = normalize_steps([g for g in scene.timing_groups if g.step != step])
        self._commit(play)
        return True

    def set_step_duration(self, scene_id: str, step: int, duration: int) -> bool:
        if self.play.get_scene(scene_id).group_for_step(step) is None:
            return False
        play, scene = self._begin_scene(scene_id)
        scene.group_for_step(step).duration = duration
        self._commit(play)
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _begin(self) -> Play:
        """Record the current state and return an editable copy."""
        self.history.push_snapshot(self.snapshot())
        play = self.play.copy()
        play.updated_at = datetime.now()
        return play

    def _begin_scene(self, scene_id: str) -> tuple[Play, Scene]:
        self.play.get_scene(scene_id)
        play = self._begin()
        return play, play.get_scene(scene_id)

    def _commit(self, play: Play, select: Optional[str] = None) -> None:
        self.play = play
        if select is not None:
            self.selected_scene_id = select

    def _restore(self, snapshot: EditorSnapshot) -> None:
        self.play = snapshot.play
        self.selected_scene_id = snapshot.selected_scene_id

    @staticmethod
    def _first_scene_id(play: Play) -> Optional[str]:
        ordered = play.ordered_scenes()
        return ordered[0].id if ordered else None
