"""Tests for the play editor and its undo/redo behavior."""

import pytest

from courtplay.core.enums import AnnotationType, CourtType, Side
from courtplay.core.errors import SceneNotFoundError
from courtplay.core.models import Annotation, BallState, PlayerRef, PlayerState, Point, TimingGroup
from courtplay.editor import (
    PlayEditor,
    create_default_play,
    normalize_steps,
    pick_and_roll,
    renumber_scenes,
)


@pytest.fixture
def editor(multi_step_play):
    return PlayEditor(multi_step_play)


def _annotation(ann_id: str) -> Annotation:
    return Annotation(
        id=ann_id,
        type=AnnotationType.PASS,
        from_point=Point(0.2, 0.2),
        to_point=Point(0.4, 0.4),
    )


class TestSceneHelpers:
    """Tests for document factories and helpers."""

    def test_default_play_is_valid(self):
        play = create_default_play()
        assert len(play.scenes) == 1
        assert play.validate() == []

    def test_sample_play_is_valid(self):
        play = pick_and_roll()
        assert play.validate() == []
        assert len(play.scenes) == 2

    def test_normalize_steps(self):
        groups = [TimingGroup(step=5, duration=200), TimingGroup(step=2, duration=700)]
        normalized = normalize_steps(groups)
        assert [(g.step, g.duration) for g in normalized] == [(1, 700), (2, 200)]
        assert groups[0].step == 5

    def test_renumber_scenes(self, two_scene_play):
        scenes = renumber_scenes(list(reversed(two_scene_play.scenes)))
        assert [(s.id, s.order) for s in scenes] == [("scene-end", 0), ("scene-start", 1)]


class TestEditorBasics:
    """Tests for editor construction and selection."""

    def test_blank_editor(self):
        editor = PlayEditor()
        assert len(editor.play.scenes) == 1
        assert editor.selected_scene_id == editor.play.scenes[0].id

    def test_selects_first_scene(self, editor):
        assert editor.selected_scene_id == "s0"

    def test_select_scene(self, editor):
        editor.select_scene("s2")
        assert editor.selected_scene.id == "s2"
        assert not editor.history.can_undo

    def test_select_missing_scene(self, editor):
        with pytest.raises(SceneNotFoundError):
            editor.select_scene("missing")

    def test_load_resets_history(self, editor, two_scene_play):
        editor.update_scene_note("s0", "changed")
        editor.load(two_scene_play)
        assert editor.play is two_scene_play
        assert editor.selected_scene_id == "scene-start"
        assert not editor.history.can_undo


class TestUndoRedo:
    """Tests for snapshot history through the editor."""

    def test_mutation_does_not_touch_old_play(self, editor, multi_step_play):
        editor.update_scene_note("s0", "Screen early")
        assert editor.play is not multi_step_play
        assert multi_step_play.get_scene("s0").note == ""
        assert editor.play.get_scene("s0").note == "Screen early"

    def test_undo_restores_previous_play(self, editor, multi_step_play):
        editor.update_scene_note("s0", "one")
        assert editor.undo() is True
        assert editor.play is multi_step_play

    def test_undo_redo_round_trip(self, editor):
        editor.update_scene_note("s0", "one")
        edited = editor.play
        editor.undo()
        assert editor.redo() is True
        assert editor.play is edited

    def test_undo_with_empty_history(self, editor):
        assert editor.undo() is False
        assert editor.redo() is False

    def test_new_edit_clears_redo(self, editor):
        editor.update_scene_note("s0", "one")
        editor.undo()
        editor.update_scene_note("s0", "two")
        assert not editor.history.can_redo

    def test_undo_restores_selection(self, editor):
        editor.add_scene()
        editor.undo()
        assert editor.selected_scene_id == "s0"

    def test_history_size(self, multi_step_play):
        editor = PlayEditor(multi_step_play, history_size=2)
        for i in range(4):
            editor.update_scene_note("s0", str(i))
        assert len(editor.history.past) == 2

    def test_missing_scene_does_not_push(self, editor):
        with pytest.raises(SceneNotFoundError):
            editor.update_scene_note("missing", "x")
        assert not editor.history.can_undo


class TestSceneEdits:
    """Tests for adding, removing and reordering scenes."""

    def test_add_scene(self, editor):
        scene = editor.add_scene()
        assert scene.order == 3
        assert editor.selected_scene_id == scene.id
        assert editor.play.validate() == []

    def test_remove_scene(self, editor):
        assert editor.remove_scene("s1") is True
        assert [s.id for s in editor.play.ordered_scenes()] == ["s0", "s2"]
        assert [s.order for s in editor.play.ordered_scenes()] == [0, 1]

    def test_remove_selected_scene_moves_selection(self, editor):
        editor.select_scene("s1")
        editor.remove_scene("s1")
        assert editor.selected_scene_id == "s0"

    def test_cannot_remove_last_scene(self):
        editor = PlayEditor()
        assert editor.remove_scene(editor.play.scenes[0].id) is False
        assert not editor.history.can_undo

    def test_duplicate_scene(self, editor):
        copy = editor.duplicate_scene("s0")
        ordered = editor.play.ordered_scenes()
        assert [s.id for s in ordered][:2] == ["s0", copy.id]
        assert copy.id != "s0"
        assert editor.selected_scene_id == copy.id
        assert editor.play.validate() == []

    def test_reorder_scene(self, editor):
        editor.reorder_scene("s2", 0)
        assert [s.id for s in editor.play.ordered_scenes()] == ["s2", "s0", "s1"]

    def test_reorder_clamps(self, editor):
        editor.reorder_scene("s0", 99)
        assert [s.id for s in editor.play.ordered_scenes()] == ["s1", "s2", "s0"]

    def test_update_player_and_ball(self, editor):
        editor.update_player_state("s1", Side.DEFENSE, PlayerState(position=3, x=0.1, y=0.9))
        editor.update_ball_state("s1", BallState(attached_to=PlayerRef(Side.OFFENSE, 2)))

        scene = editor.play.get_scene("s1")
        assert scene.resolve_player(PlayerRef(Side.DEFENSE, 3)).x == 0.1
        assert scene.ball.attached_to == PlayerRef(Side.OFFENSE, 2)

    def test_update_unknown_player_does_not_push(self, editor):
        editor.update_scene_note("s1", "keep")
        editor.undo()
        assert editor.history.can_redo

        assert editor.update_player_state("s1", Side.OFFENSE, PlayerState(position=9)) is False
        assert not editor.history.can_undo
        assert editor.history.can_redo

    def test_update_play_meta(self, editor):
        editor.update_play_meta(title="Horns", court_type=CourtType.FULL, tags=["set"])
        assert editor.play.title == "Horns"
        assert editor.play.court_type == CourtType.FULL
        assert editor.play.tags == ["set"]


class TestTimingEdits:
    """Tests for timing step and annotation edits."""

    def test_add_annotation_to_existing_step(self, editor):
        editor.add_annotation("s1", 1, _annotation("new"))
        assert [a.id for a in editor.play.get_scene("s1").all_annotations()] == ["b1", "new"]

    def test_add_annotation_creates_step(self, editor):
        editor.add_annotation("s1", 4, _annotation("new"))
        scene = editor.play.get_scene("s1")
        # Renumbered to stay contiguous
        assert [g.step for g in scene.sorted_groups()] == [1, 2]
        assert [a.id for a in scene.group_for_step(2).annotations] == ["new"]

    def test_remove_annotation_drops_empty_step(self, editor):
        editor.remove_annotation("s0", "a2")
        editor.remove_annotation("s0", "a3")
        scene = editor.play.get_scene("s0")
        assert [g.step for g in scene.sorted_groups()] == [1]
        assert [a.id for a in scene.all_annotations()] == ["a1"]

    def test_remove_annotation_keeps_empty_first_step(self, editor):
        editor.remove_annotation("s2", "c1")
        scene = editor.play.get_scene("s2")
        assert [g.step for g in scene.sorted_groups()] == [1, 2]
        assert scene.group_for_step(1).annotations == []

    def test_remove_annotation_keeps_step_one(self, editor):
        editor.remove_annotation("s1", "b1")
        scene = editor.play.get_scene("s1")
        assert [g.step for g in scene.timing_groups] == [1]
        assert scene.all_annotations() == []

    def test_move_annotation(self, editor):
        assert editor.move_annotation_to_step("s0", "a1", 2) is True
        scene = editor.play.get_scene("s0")
        assert [a.id for a in scene.group_for_step(1).annotations] == []
        assert [a.id for a in scene.group_for_step(2).annotations] == ["a2", "a3", "a1"]

    def test_move_missing_annotation(self, editor):
        assert editor.move_annotation_to_step("s0", "zzz", 2) is False
        assert not editor.history.can_undo

    def test_add_and_remove_timing_step(self, editor):
        assert editor.add_timing_step("s1") == 2
        assert editor.remove_timing_step("s1", 1) is True
        scene = editor.play.get_scene("s1")
        assert [g.step for g in scene.timing_groups] == [1]
        assert scene.all_annotations() == []

    def test_cannot_remove_only_step(self, editor):
        assert editor.remove_timing_step("s1", 1) is False
        assert not editor.history.can_undo

    def test_remove_missing_step_does_not_push(self, editor):
        """Nothing changes, so the redo stack survives."""
        editor.set_step_duration("s0", 2, 750)
        editor.undo()

        assert editor.remove_timing_step("s0", 9) is False
        assert not editor.history.can_undo
        assert editor.history.can_redo
        assert [g.step for g in editor.play.get_scene("s0").sorted_groups()] == [1, 2]

    def test_set_step_duration(self, editor):
        assert editor.set_step_duration("s0", 2, 750) is True
        assert editor.play.get_scene("s0").group_for_step(2).duration == 750
        assert editor.set_step_duration("s0", 9, 750) is False

    def test_edits_keep_play_valid(self, editor):
        editor.add_annotation("s0", 3, _annotation("x"))
        editor.move_annotation_to_step("s0", "a1", 3)
        editor.remove_timing_step("s0", 2)
        editor.duplicate_scene("s2")
        editor.remove_scene("s1")
        assert editor.play.validate() == []
