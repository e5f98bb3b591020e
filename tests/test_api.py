"""Tests for the HTTP routes."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fitness_buddy_api.app.api.endpoints.records import build_record_router
from fitness_buddy_api.app.core.config import Settings
from fitness_buddy_api.app.core.resources import BUDDIES, ResourceKind
from fitness_buddy_api.app.core.store import ResourceStore
from fitness_buddy_api.app.main import create_app


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "FitnessBuddy Backend is running"}


class TestProfiles:
    """Profile routes, including email and username lookups."""

    def test_list_profiles_returns_seed(self, client):
        response = client.get("/api/profiles")
        assert response.status_code == 200
        profiles = response.json()
        assert len(profiles) == 1
        assert profiles[0]["username"] == "john_doe"

    def test_create_then_lookup_by_email(self, client):
        response = client.post("/api/profiles", json={"email": "a@x.com", "username": "a"})
        assert response.status_code == 201
        created = response.json()
        assert created["id"]
        assert created["email"] == "a@x.com"

        response = client.get("/api/profiles/email/a@x.com")
        assert response.status_code == 200
        assert response.json() == created

    def test_lookup_by_username(self, client, sample_profile):
        created = client.post("/api/profiles", json=sample_profile).json()
        response = client.get("/api/profiles/username/jane_roe")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.parametrize(
        "path",
        [
            "/api/profiles/999",
            "/api/profiles/email/nobody@example.com",
            "/api/profiles/username/nobody",
        ],
    )
    def test_missing_profile(self, client, path):
        response = client.get(path)
        assert response.status_code == 404
        assert response.json() == {"message": "Profile not found"}

    def test_literal_segment_without_value_is_not_a_lookup(self, client):
        # "email" alone is a single segment and is looked up as an id.
        response = client.get("/api/profiles/email")
        assert response.status_code == 404
        assert response.json() == {"message": "Profile not found"}

    def test_update_profile(self, client):
        response = client.put("/api/profiles/1", json={"location": "Chicago", "weight": 82})
        assert response.status_code == 200
        profile = response.json()
        assert profile["location"] == "Chicago"
        assert profile["weight"] == 82
        assert profile["username"] == "john_doe"
        assert profile["updated_at"]

    def test_delete_profile(self, client):
        response = client.delete("/api/profiles/1")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile deleted"
        assert body["profile"]["username"] == "john_doe"

        assert client.get("/api/profiles/1").status_code == 404
        response = client.delete("/api/profiles/1")
        assert response.status_code == 404
        assert response.json() == {"message": "Profile not found"}


class TestWorkouts:
    def test_missing_workout(self, client):
        response = client.get("/api/workouts/999")
        assert response.status_code == 404
        assert response.json() == {"message": "Workout not found"}

    def test_user_workouts(self, client):
        client.post("/api/workouts", json={"user_id": "1", "type": "Cycling", "duration": 45})
        client.post("/api/workouts", json={"user_id": "2", "type": "Yoga"})
        response = client.get("/api/workouts/user/1")
        assert response.status_code == 200
        assert [w["type"] for w in response.json()] == ["Running", "Cycling"]

    def test_user_without_workouts(self, client):
        response = client.get("/api/workouts/user/404")
        assert response.status_code == 200
        assert response.json() == []

    def test_workouts_have_no_list_all_route(self, client):
        response = client.get("/api/workouts")
        assert response.status_code == 404
        assert response.json() == {"message": "Endpoint not found"}

    def test_create_without_body(self, client):
        response = client.post("/api/workouts")
        assert response.status_code == 201
        workout = response.json()
        assert set(workout) == {"id", "created_at"}


class TestBuddies:
    def test_pending_request_visible_to_both_parties(self, client):
        payload = {"user_id": "1", "buddy_id": "2", "status": "pending"}
        created = client.post("/api/buddies", json=payload).json()

        response = client.get("/api/buddies/pending/2")
        assert response.status_code == 200
        assert response.json() == [created]
        assert client.get("/api/buddies/pending/1").json() == [created]

    def test_accepted_request_no_longer_pending(self, client):
        created = client.post(
            "/api/buddies", json={"user_id": "1", "buddy_id": "2", "status": "pending"}
        ).json()
        client.put(f"/api/buddies/{created['id']}", json={"status": "accepted"})
        assert client.get("/api/buddies/pending/2").json() == []
        assert len(client.get("/api/buddies/user/1").json()) == 1

    def test_user_buddies_only_matches_user_id(self, client):
        client.post("/api/buddies", json={"user_id": "3", "buddy_id": "1", "status": "accepted"})
        assert client.get("/api/buddies/user/1").json() == []

    def test_missing_connection(self, client):
        response = client.get("/api/buddies/999")
        assert response.status_code == 404
        assert response.json() == {"message": "Buddy connection not found"}

    def test_delete_connection(self, client):
        created = client.post("/api/buddies", json={"user_id": "1", "buddy_id": "2"}).json()
        body = client.delete(f"/api/buddies/{created['id']}").json()
        assert body == {"message": "Buddy connection deleted", "buddy": created}


class TestGoals:
    def test_update_merges_instead_of_replacing(self, client):
        response = client.post("/api/goals", json={"id": "1", "progress": 0, "target": 100})
        assert response.status_code == 201
        assert response.json()["id"] == "1"

        response = client.put("/api/goals/1", json={"progress": 50})
        assert response.status_code == 200
        goal = response.json()
        assert goal["id"] == "1"
        assert goal["progress"] == 50
        assert goal["target"] == 100

    def test_update_missing_goal(self, client):
        response = client.put("/api/goals/1", json={"progress": 50})
        assert response.status_code == 404
        assert response.json() == {"message": "Goal not found"}

    def test_user_goals(self, client):
        client.post("/api/goals", json={"user_id": "1", "target": 10})
        assert len(client.get("/api/goals/user/1").json()) == 1


class TestAchievements:
    def test_crud_cycle(self, client):
        created = client.post("/api/achievements", json={"user_id": "1", "title": "First 5k"}).json()
        assert client.get(f"/api/achievements/{created['id']}").json() == created
        assert client.get("/api/achievements/user/1").json() == [created]

        response = client.delete(f"/api/achievements/{created['id']}")
        assert response.json()["achievement"] == created
        response = client.get(f"/api/achievements/{created['id']}")
        assert response.status_code == 404
        assert response.json() == {"message": "Achievement not found"}


class TestChallenges:
    def test_list_and_user_scoped(self, client):
        first = client.post("/api/challenges", json={"user_id": "1", "name": "Plank"}).json()
        second = client.post("/api/challenges", json={"user_id": "2", "name": "Steps"}).json()
        assert client.get("/api/challenges").json() == [first, second]
        assert client.get("/api/challenges/user/2").json() == [second]

    def test_missing_challenge(self, client):
        response = client.delete("/api/challenges/1")
        assert response.status_code == 404
        assert response.json() == {"message": "Challenge not found"}


class TestUnmatchedRoutes:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/api/meals"),
            ("GET", "/profiles"),
            ("GET", "/api/goals/user/1/extra"),
            ("PATCH", "/api/profiles/1"),
            ("DELETE", "/api/profiles"),
        ],
    )
    def test_endpoint_not_found(self, client, method, path):
        response = client.request(method, path)
        assert response.status_code == 404
        assert response.json() == {"message": "Endpoint not found"}


class TestAppFactory:
    def test_unseeded_app(self):
        settings = Settings(seed_data=False)
        client = TestClient(create_app(settings=settings))
        assert client.get("/api/profiles").json() == []

    def test_custom_prefix(self, store):
        settings = Settings(api_prefix="/v2")
        client = TestClient(create_app(store=store, settings=settings))
        assert client.get("/v2/profiles/1").status_code == 200
        assert client.get("/api/profiles/1").status_code == 404

    def test_app_serves_injected_store(self, store, client):
        store.insert("challenges", {"name": "Injected"})
        assert client.get("/api/challenges").json()[0]["name"] == "Injected"

    def test_cors_headers(self, client):
        response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_lifespan_runs(self, store):
        with TestClient(create_app(store=store)) as client:
            assert client.get("/api/health").status_code == 200


class TestRequestBodies:
    """Bodies without a JSON content type are ignored; bad JSON is a 400."""

    def test_create_with_plain_text_body(self, client):
        response = client.post(
            "/api/workouts", content="type=Run", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 201
        assert set(response.json()) == {"id", "created_at"}

    def test_update_with_form_body_keeps_fields(self, client):
        response = client.put("/api/profiles/1", data={"location": "Chicago"})
        assert response.status_code == 200
        profile = response.json()
        assert profile["location"] == "New York"
        assert profile["updated_at"]

    def test_vendor_json_content_type(self, client):
        response = client.post(
            "/api/goals",
            content='{"target": 5}',
            headers={"Content-Type": "application/vnd.api+json"},
        )
        assert response.status_code == 201
        assert response.json()["target"] == 5

    def test_malformed_json(self, client):
        response = client.post(
            "/api/goals", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Malformed JSON body"}

    def test_json_array_body(self, client):
        response = client.post("/api/goals", json=[1, 2])
        assert response.status_code == 400
        assert response.json() == {"message": "Request body must be a JSON object"}


class TestTrailingSlash:
    def test_collection_with_trailing_slash(self, client):
        response = client.get("/api/profiles/", follow_redirects=False)
        assert response.status_code == 200
        assert response.json()[0]["username"] == "john_doe"

    def test_record_with_trailing_slash(self, client):
        response = client.get("/api/workouts/1/", follow_redirects=False)
        assert response.status_code == 200
        assert response.json()["type"] == "Running"

    def test_create_with_trailing_slash(self, client):
        response = client.post("/api/goals/", json={"target": 1}, follow_redirects=False)
        assert response.status_code == 201


def test_not_found_is_logged_with_lookup(client, caplog):
    caplog.set_level(logging.DEBUG, logger="fitness_buddy_api.app.main")
    client.get("/api/profiles/email/nobody@example.com")
    assert "No profile with email='nobody@example.com'" in caplog.text


def test_pending_route_serves_its_own_kind():
    invites = ResourceKind(name="invites", label="Invite", key="invite", pending_requests=True)
    store = ResourceStore(kinds=[BUDDIES, invites])
    store.insert("buddies", {"user_id": "1", "buddy_id": "2", "status": "pending"})
    invite = store.insert("invites", {"user_id": "1", "buddy_id": "9", "status": "pending"})

    app = FastAPI()
    app.state.store = store
    app.include_router(build_record_router(invites))
    client = TestClient(app)

    assert client.get("/invites/pending/1").json() == [invite]
