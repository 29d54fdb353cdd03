"""
Tests for the playback and editor HTTP API.

Sessions are driven entirely by the client: ticks carry the elapsed
time, nothing advances on its own between requests.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from courtplay.api.main import app

API = "/api/v1"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def session_id(client, two_scene_play):
    """A session opened on the two-scene play."""
    response = client.post(f"{API}/playback/sessions", json={"play": two_scene_play.to_dict()})
    assert response.status_code == 201
    return response.json()["session_id"]


class TestSessions:
    """Tests for session lifecycle."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_blank_session(self, client):
        response = client.post(f"{API}/playback/sessions", json={})
        assert response.status_code == 201
        data = response.json()
        assert data["scene_count"] == 1
        assert data["can_undo"] is False
        assert data["playback"]["state"] == "stopped"

    def test_create_with_play(self, client, session_id):
        data = client.get(f"{API}/playback/sessions/{session_id}").json()
        assert data["play_id"] == "play-two"
        assert data["title"] == "Two Scenes"
        assert data["selected_scene_id"] == "scene-start"

    def test_listed(self, client, session_id):
        assert session_id in client.get(f"{API}/playback/sessions").json()

    def test_malformed_play(self, client):
        response = client.post(f"{API}/playback/sessions", json={"play": {"category": "bogus"}})
        assert response.status_code == 422

    def test_invalid_play(self, client, two_scene_play):
        two_scene_play.scenes[1].order = 4
        response = client.post(f"{API}/playback/sessions", json={"play": two_scene_play.to_dict()})
        assert response.status_code == 422

    def test_bad_session_id(self, client):
        assert client.get(f"{API}/playback/sessions/not-a-uuid").status_code == 400

    def test_unknown_session(self, client):
        assert client.get(f"{API}/playback/sessions/{uuid4()}").status_code == 404

    def test_delete(self, client, session_id):
        assert client.delete(f"{API}/playback/sessions/{session_id}").status_code == 204
        assert client.get(f"{API}/playback/sessions/{session_id}").status_code == 404


class TestPlaybackEndpoints:
    """Tests for transport, ticking and frames."""

    def test_play_and_tick(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        assert client.post(f"{base}/play").json()["state"] == "playing"

        response = client.post(f"{base}/tick", json={"delta_ms": 1250})
        data = response.json()
        assert data["steps_advanced"] == 1
        assert data["playback"]["scene_index"] == 1
        assert data["playback"]["position_ms"] == 1750
        assert data["playback"]["total_ms"] == 2500

    @pytest.mark.parametrize("delta", [-1, 3_600_001, 1e308])
    def test_tick_delta_out_of_range(self, client, session_id, delta):
        base = f"{API}/playback/sessions/{session_id}"
        client.post(f"{base}/play")
        response = client.post(f"{base}/tick", json={"delta_ms": delta})
        assert response.status_code == 422

    def test_long_looping_tick(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        client.post(f"{base}/play")
        client.put(f"{base}/loop", json={"loop": True})

        data = client.post(f"{base}/tick", json={"delta_ms": 3_600_000}).json()
        assert data["playback"]["state"] == "playing"
        assert data["playback"]["position_ms"] < data["playback"]["total_ms"]

    def test_tick_when_stopped(self, client, session_id):
        response = client.post(f"{API}/playback/sessions/{session_id}/tick", json={"delta_ms": 5000})
        assert response.json()["steps_advanced"] == 0

    def test_stale_generation(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        stale = client.post(f"{base}/play").json()["generation"]
        client.post(f"{base}/pause")
        client.post(f"{base}/play")

        response = client.post(f"{base}/tick", json={"delta_ms": 1500, "generation": stale})
        assert response.json()["steps_advanced"] == 0

    def test_scrub_stops(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        client.post(f"{base}/play")
        data = client.post(f"{base}/scrub", json={"scene_index": 1}).json()
        assert data["state"] == "stopped"
        assert data["scene_index"] == 1

    def test_reset(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        client.post(f"{base}/scrub", json={"scene_index": 1})
        assert client.post(f"{base}/reset").json()["scene_index"] == 0

    def test_speed_and_loop(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        assert client.put(f"{base}/speed", json={"speed": 2}).json()["speed"] == 2
        assert client.put(f"{base}/speed", json={"speed": 0}).status_code == 422
        assert client.put(f"{base}/loop", json={"loop": True}).json()["loop"] is True

    def test_timeline(self, client, session_id):
        data = client.get(f"{API}/playback/sessions/{session_id}/timeline").json()
        assert data["totalMs"] == 2500
        assert [f["kind"] for f in data["frames"]] == ["step-hold", "scene-transition", "step-hold"]

    def test_frame_at(self, client, session_id):
        data = client.get(f"{API}/playback/sessions/{session_id}/frame", params={"ms": 1250}).json()
        assert data["frame"]["kind"] == "scene-transition"
        assert data["progress"] == pytest.approx(0.5)
        assert data["scene"]["ball"]["attachedTo"] == {"side": "offense", "position": 2}

    def test_current_frame(self, client, session_id):
        data = client.get(f"{API}/playback/sessions/{session_id}/frame").json()
        assert data["frame"]["sceneIndex"] == 0
        assert [a["id"] for a in data["activeAnnotations"]] == ["s0-a1"]

    def test_export(self, client, session_id):
        data = client.get(f"{API}/playback/sessions/{session_id}/export", params={"fps": 10}).json()
        assert data["metadata"]["frameCount"] == 26
        assert len(data["frames"]) == 26

    def test_log(self, client, session_id):
        base = f"{API}/playback/sessions/{session_id}"
        client.post(f"{base}/play")
        client.post(f"{base}/tick", json={"delta_ms": 5000})
        lines = client.get(f"{base}/log").json()
        assert any("Playback finished" in line for line in lines)


class TestEditorEndpoints:
    """Tests for editing with undo/redo over HTTP."""

    def test_get_play(self, client, session_id):
        data = client.get(f"{API}/editor/sessions/{session_id}/play").json()
        assert data["id"] == "play-two"
        assert len(data["scenes"]) == 2

    def test_add_scene_and_undo(self, client, session_id):
        base = f"{API}/editor/sessions/{session_id}"
        added = client.post(f"{base}/scenes")
        assert added.status_code == 201
        assert added.json()["scene_count"] == 3
        assert added.json()["can_undo"] is True

        undone = client.post(f"{base}/undo").json()
        assert undone["applied"] is True
        assert undone["session"]["scene_count"] == 2
        assert undone["future_size"] == 1

        redone = client.post(f"{base}/redo").json()
        assert redone["session"]["scene_count"] == 3

    def test_undo_with_empty_history(self, client, session_id):
        data = client.post(f"{API}/editor/sessions/{session_id}/undo").json()
        assert data["applied"] is False

    def test_edit_rebuilds_timeline(self, client, session_id):
        response = client.put(
            f"{API}/editor/sessions/{session_id}/scenes/scene-start/steps/1/duration",
            json={"duration": 2000},
        )
        assert response.status_code == 200
        assert response.json()["playback"]["total_ms"] == 3500

    def test_missing_step(self, client, session_id):
        response = client.put(
            f"{API}/editor/sessions/{session_id}/scenes/scene-start/steps/4/duration",
            json={"duration": 2000},
        )
        assert response.status_code == 404

    def test_missing_scene(self, client, session_id):
        response = client.put(
            f"{API}/editor/sessions/{session_id}/scenes/nope/note",
            json={"note": "x"},
        )
        assert response.status_code == 404

    def test_duplicate_and_remove_scene(self, client, session_id):
        base = f"{API}/editor/sessions/{session_id}"
        data = client.post(f"{base}/scenes/scene-end/duplicate").json()
        assert data["scene_count"] == 3

        data = client.delete(f"{base}/scenes/scene-start").json()
        assert data["scene_count"] == 2

    def test_cannot_remove_only_scene(self, client):
        created = client.post(f"{API}/playback/sessions", json={}).json()
        scene_id = created["selected_scene_id"]
        response = client.delete(f"{API}/editor/sessions/{created['session_id']}/scenes/{scene_id}")
        assert response.status_code == 400

    def test_steps(self, client, session_id):
        base = f"{API}/editor/sessions/{session_id}/scenes/scene-start/steps"
        assert client.delete(f"{base}/1").status_code == 400
        assert client.post(base).status_code == 200
        assert client.delete(f"{base}/2").status_code == 200

    def test_remove_missing_step(self, client, session_id):
        base = f"{API}/editor/sessions/{session_id}"
        response = client.delete(f"{base}/scenes/scene-start/steps/7")
        assert response.status_code == 404
        assert client.post(f"{base}/undo").json()["applied"] is False
