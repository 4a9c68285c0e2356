"""
Unit tests for api/routers.

The app is built with fakes and driven through TestClient as a context
manager so that the lifespan (manager wiring and recovery) runs.
"""

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from tests.fakes import (
    FakeExerciseCatalog,
    FakeLiveStatusBroadcaster,
    FakeWorkoutStore,
    ManualSessionClock,
    make_workout,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def fake_store():
    return FakeWorkoutStore()


@pytest.fixture
def fake_broadcaster():
    return FakeLiveStatusBroadcaster()


@pytest.fixture
def test_app(test_settings, fake_store, fake_broadcaster):
    return create_app(
        settings=test_settings,
        store=fake_store,
        catalog=FakeExerciseCatalog(),
        broadcaster=fake_broadcaster,
        clock=ManualSessionClock(),
    )


@pytest.fixture
def client(test_app):
    with TestClient(test_app) as client:
        yield client


def start(client, name="Leg Day"):
    response = client.post("/session/start", json={"name": name})
    assert response.status_code == 201
    return response.json()


def drain_live_status(client):
    client.portal.call(client.app.state.session_manager.drain_live_status)


def add_squat(client, reps=8, weight=100, **extra):
    payload = {"exercise_id": "barbell-back-squat", "reps": reps, "weight": weight}
    payload.update(extra)
    return client.post("/session/sets", json=payload)


class TestRouterInclusion:
    """Test that all routers are correctly included in the app."""

    def test_openapi_schema_generated(self, test_app):
        """OpenAPI schema should be generated without errors."""
        paths = test_app.openapi()["paths"]

        assert "/health" in paths
        assert "/session" in paths
        assert "/session/sets/{set_id}" in paths
        assert "/workouts/{workout_id}" in paths
        assert "/exercises/groups" in paths

    def test_openapi_tags(self, test_app):
        paths = test_app.openapi()["paths"]

        assert "Health" in paths["/health"]["get"]["tags"]
        assert "Session" in paths["/session/start"]["post"]["tags"]
        assert "Workouts" in paths["/workouts"]["get"]["tags"]
        assert "Exercises" in paths["/exercises"]["get"]["tags"]


class TestHealthRouter:
    """Test health router endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_session_health_idle(self, client):
        response = client.get("/health/session")

        assert response.json() == {
            "status": "ok",
            "session_state": "idle",
            "live_activity": False,
        }

    def test_session_health_active(self, client):
        start(client)
        drain_live_status(client)

        body = client.get("/health/session").json()

        assert body["session_state"] == "active"
        assert body["live_activity"] is True


class TestSessionLifecycle:
    """Start, inspect, update, end and discard through /session."""

    def test_get_session_when_idle(self, client):
        assert client.get("/session").status_code == 404

    def test_start_and_get(self, client, fake_store, fake_broadcaster):
        workout = start(client)

        assert workout["name"] == "Leg Day"
        assert workout["is_active"] is True
        assert client.get("/session").json()["id"] == workout["id"]
        assert fake_store.committed_by_id(workout["id"]).is_active is True
        drain_live_status(client)
        assert fake_broadcaster.started == [(workout["id"], "Leg Day")]

    def test_start_without_body_fields(self, client):
        response = client.post("/session/start", json={})

        assert response.status_code == 201
        assert response.json()["name"].startswith("Workout ")

    def test_start_with_invalid_name(self, client):
        response = client.post("/session/start", json={"name": "x" * 201})

        assert response.status_code == 422
        assert client.get("/session").status_code == 404

    def test_start_replaces_active_workout(self, client, fake_store):
        first = start(client, "Push")
        second = start(client, "Pull")

        assert first["id"] != second["id"]
        assert fake_store.committed_by_id(first["id"]).is_active is False
        assert client.get("/session").json()["id"] == second["id"]

    def test_update_name_and_notes(self, client):
        start(client)

        response = client.patch("/session", json={"name": "Heavy Legs", "notes": "belt"})

        assert response.status_code == 200
        assert response.json()["name"] == "Heavy Legs"
        assert response.json()["notes"] == "belt"

    def test_invalid_notes_leave_name_unchanged(self, client, fake_store):
        workout = start(client)

        response = client.patch("/session", json={"name": "Heavy Legs", "notes": "x" * 2001})

        assert response.status_code == 422
        assert client.get("/session").json()["name"] == "Leg Day"
        assert fake_store.committed_by_id(workout["id"]).name == "Leg Day"

    def test_update_requires_a_field(self, client):
        start(client)
        assert client.patch("/session", json={}).status_code == 422

    def test_update_when_idle(self, client):
        assert client.patch("/session", json={"name": "x"}).status_code == 409

    def test_end(self, client, fake_store):
        workout = start(client)

        response = client.post("/session/end")

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert fake_store.committed_by_id(workout["id"]).is_active is False
        assert client.get("/session").status_code == 404

    def test_end_when_idle(self, client):
        assert client.post("/session/end").status_code == 409

    def test_discard(self, client, fake_store):
        workout = start(client)

        response = client.post("/session/discard")

        assert response.status_code == 200
        assert fake_store.committed_by_id(workout["id"]) is None

    def test_discard_when_idle(self, client):
        assert client.post("/session/discard").status_code == 409

    def test_store_failure_maps_to_503(self, client, fake_store):
        fake_store.fail_inserts = True

        response = client.post("/session/start", json={"name": "Leg Day"})

        assert response.status_code == 503
        assert client.get("/session").status_code == 404


class TestSessionSets:
    """Set operations through /session/sets."""

    def test_add_set(self, client):
        start(client)

        response = add_squat(client, failure_level="near_failure")

        assert response.status_code == 201
        body = response.json()
        assert body["exercise"]["id"] == "barbell-back-squat"
        assert body["reps"] == 8
        assert body["weight_kg"] == 100
        assert body["failure_level"] == "near_failure"
        assert len(client.get("/session").json()["exercise_sets"]) == 1

    def test_add_set_in_pounds(self, client):
        start(client)

        body = add_squat(client, weight=100, unit="lb").json()

        assert body["weight_kg"] == pytest.approx(45.36, abs=0.01)

    def test_add_set_unknown_exercise(self, client):
        start(client)

        response = client.post(
            "/session/sets", json={"exercise_id": "nope", "reps": 5, "weight": 10}
        )

        assert response.status_code == 422
        assert "message" in response.json()["detail"]

    def test_add_set_negative_reps(self, client):
        start(client)
        assert add_squat(client, reps=-1).status_code == 422
        assert client.get("/session").json()["exercise_sets"] == []

    def test_add_set_when_idle(self, client):
        assert add_squat(client).status_code == 409

    def test_edit_set(self, client):
        start(client)
        set_id = add_squat(client).json()["id"]

        response = client.patch(f"/session/sets/{set_id}", json={"reps": 6})

        assert response.status_code == 200
        assert response.json()["id"] == set_id
        assert response.json()["reps"] == 6
        assert response.json()["weight_kg"] == 100

    def test_edit_missing_set(self, client):
        start(client)
        assert client.patch("/session/sets/missing", json={"reps": 6}).status_code == 404

    def test_remove_set(self, client):
        start(client)
        set_id = add_squat(client).json()["id"]

        response = client.delete(f"/session/sets/{set_id}")

        assert response.status_code == 200
        assert client.get("/session").json()["exercise_sets"] == []
        assert client.delete(f"/session/sets/{set_id}").status_code == 404

    def test_duplicate_set(self, client):
        start(client)
        source = add_squat(client).json()

        response = client.post(f"/session/sets/{source['id']}/duplicate")

        assert response.status_code == 201
        copy = response.json()
        assert copy["id"] != source["id"]
        assert copy["reps"] == source["reps"]
        assert len(client.get("/session").json()["exercise_sets"]) == 2


class TestWorkoutsRouter:
    """Browsing and deleting persisted workouts."""

    def test_list_excludes_active_by_default(self, client, fake_store):
        done = make_workout(name="Done")
        fake_store.seed([done])
        active = start(client)

        listed = client.get("/workouts").json()
        with_active = client.get("/workouts", params={"include_active": True}).json()

        assert [w["id"] for w in listed] == [done.id]
        assert {w["id"] for w in with_active} == {done.id, active["id"]}

    def test_list_limit(self, client, fake_store):
        fake_store.seed([make_workout(name=f"W{i}") for i in range(3)])

        assert len(client.get("/workouts", params={"limit": 2}).json()) == 2

    def test_get_active(self, client):
        assert client.get("/workouts/active").status_code == 404
        workout = start(client)

        assert client.get("/workouts/active").json()["id"] == workout["id"]

    def test_get_workout(self, client, fake_store):
        workout = make_workout(num_sets=2)
        fake_store.seed([workout])

        response = client.get(f"/workouts/{workout.id}")

        assert response.status_code == 200
        assert len(response.json()["exercise_sets"]) == 2
        assert client.get("/workouts/missing").status_code == 404

    def test_delete_workout(self, client, fake_store):
        workout = make_workout()
        fake_store.seed([workout])

        response = client.delete(f"/workouts/{workout.id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "workout_id": workout.id}
        assert fake_store.committed_by_id(workout.id) is None

    def test_delete_commit_failure_keeps_record(self, client, fake_store):
        workout = make_workout()
        fake_store.seed([workout])
        fake_store.fail_saves = True

        response = client.delete(f"/workouts/{workout.id}")

        assert response.status_code == 503
        assert fake_store.fetch(workout.id) is not None

    def test_delete_missing(self, client):
        assert client.delete("/workouts/missing").status_code == 404

    def test_delete_active_rejected(self, client, fake_store):
        workout = start(client)

        response = client.delete(f"/workouts/{workout['id']}")

        assert response.status_code == 409
        assert fake_store.committed_by_id(workout["id"]) is not None

    def test_store_failure_maps_to_503(self, client, fake_store):
        fake_store.fail_fetches = True

        assert client.get("/workouts").status_code == 503


class TestExercisesRouter:
    """Catalog lookup endpoints."""

    def test_list(self, client):
        ids = [e["id"] for e in client.get("/exercises").json()]

        assert "barbell-back-squat" in ids
        assert "barbell-bench-press" in ids

    def test_list_by_group(self, client):
        exercises = client.get("/exercises", params={"group": "legs"}).json()

        assert [e["id"] for e in exercises] == ["barbell-back-squat"]

    def test_groups(self, client):
        assert set(client.get("/exercises/groups").json()) == {"Legs", "Chest", "Back"}

    def test_get_exercise(self, client):
        assert client.get("/exercises/deadlift").json()["name"] == "Deadlift"
        assert client.get("/exercises/missing").status_code == 404
