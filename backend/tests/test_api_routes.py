from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.db.session import get_db
from app.main import app


@pytest.fixture
def client(session_factory, catalog):
    def _override():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_roadmap_endpoint(client, catalog):
    response = client.get(f"/api/career-paths/{catalog['path_id']}/roadmap", headers={"X-Request-ID": "rid-1"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "rid-1"
    body = response.json()
    assert body["request_id"] == "rid-1"
    assert body["error"] is None
    assert len(body["data"]["steps"]) == 4


def test_missing_career_path_is_404_envelope(client, catalog):
    response = client.get("/api/career-paths/9999/roadmap")
    assert response.status_code == 404
    body = response.json()
    assert body["data"] is None
    assert body["error"]["code"] == "NOT_FOUND"


def test_progress_without_goal_is_404(client, catalog):
    response = client.get("/api/users/77/progress")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_assessment_then_progress_flow(client, catalog):
    skills = catalog["skills"]
    response = client.post(
        "/api/users/5/assessment",
        json={
            "skills_assessment": [
                {"skill_id": skills["Python"], "proficiency_level": 4},
                {"skill_id": skills["SQL"], "proficiency_level": 2},
            ],
            "career_goal": catalog["path_id"],
        },
    )
    assert response.status_code == 200
    assert response.json()["data"]["skills_updated"] == 2

    step = catalog["step_ids"][0]
    response = client.put(f"/api/users/5/progress/{step}", json={"progress": 100})
    assert response.status_code == 200
    assert response.json()["data"]["completed"] is True

    response = client.put(f"/api/users/5/progress/{catalog['step_ids'][1]}", json={"progress": 50})
    assert response.status_code == 200

    data = client.get("/api/users/5/progress").json()["data"]
    assert data["overall_progress"] == 38
    assert data["stats"]["acquired_skills"] == 1
    assert data["stats"]["completed_courses"] == 4

    goal = client.get("/api/users/5/goal").json()["data"]
    assert goal["career_path"]["id"] == catalog["path_id"]

    user_skills = client.get("/api/users/5/skills").json()["data"]
    assert {us["skill_details"]["name"] for us in user_skills} == {"Python", "SQL"}


@pytest.mark.parametrize("level", [0, 6])
def test_assessment_bad_level_is_validation_error(client, catalog, level):
    response = client.post(
        "/api/users/5/assessment",
        json={"skills_assessment": [{"skill_id": catalog["skills"]["Python"], "proficiency_level": level}]},
    )
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_progress_out_of_range_is_validation_error(client, catalog):
    response = client.put(f"/api/users/5/progress/{catalog['step_ids'][0]}", json={"progress": 120})
    assert response.status_code == 422


def test_task_lifecycle(client, catalog):
    due = (datetime.now(timezone.utc) + timedelta(days=5)).isoformat()
    response = client.post(
        "/api/users/3/tasks",
        json={"title": "Read Docker book", "due_date": due, "related_resource_id": catalog["resources"]["Docker in Practice"]},
    )
    assert response.status_code == 201
    task_id = response.json()["data"]["id"]

    tasks = client.get("/api/users/3/tasks").json()["data"]
    assert tasks[0]["resource"]["title"] == "Docker in Practice"
    assert tasks[0]["days_left"] in (5, 6)

    done = client.patch(f"/api/tasks/{task_id}", json={"completed": True}).json()["data"]
    assert done["status"] == "completed"
    reopened = client.patch(f"/api/tasks/{task_id}", json={"completed": False}).json()["data"]
    assert reopened["status"] == "in_progress"

    assert client.patch(f"/api/tasks/{task_id}", json={"priority": "urgent"}).status_code == 422
    assert client.patch("/api/tasks/9999", json={"completed": True}).status_code == 404

    assert client.delete(f"/api/tasks/{task_id}").status_code == 204
    assert client.get("/api/users/3/tasks").json()["data"] == []


def test_resources_by_skills(client, catalog):
    skills = catalog["skills"]
    response = client.get(f"/api/resources/by-skills?skill_ids={skills['SQL']},{skills['Docker']}")
    assert response.status_code == 200
    assert [r["title"] for r in response.json()["data"]] == ["Intro to SQL", "Docker in Practice"]

    assert client.get("/api/resources/by-skills?skill_ids=a,b").status_code == 422


def test_recommended_resources(client, catalog):
    client.post(
        "/api/users/6/assessment",
        json={"skills_assessment": [{"skill_id": catalog["skills"]["SQL"], "proficiency_level": 2}]},
    )
    data = client.get("/api/users/6/recommended-resources").json()["data"]
    assert [r["title"] for r in data] == ["Intro to SQL"]


def test_catalog_listing(client, catalog):
    assert len(client.get("/api/skills").json()["data"]) == 5
    paths = client.get("/api/career-paths").json()["data"]
    assert {p["title"] for p in paths} == {"Backend Developer", "Explorer"}
    assert client.get("/api/career-paths/9999").status_code == 404


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_user(client, catalog):
    client.post(
        "/api/users/8/assessment",
        json={"skills_assessment": [{"skill_id": catalog["skills"]["Python"], "proficiency_level": 3}]},
    )
    response = client.get("/api/users/8")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == 8

    missing = client.get("/api/users/9999")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


def test_get_resource(client, catalog):
    rid = catalog["resources"]["Docker in Practice"]
    response = client.get(f"/api/resources/{rid}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Docker in Practice"

    missing = client.get("/api/resources/9999")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


def test_resources_filtered_by_type(client, catalog):
    data = client.get("/api/resources?type=book").json()["data"]
    assert [r["title"] for r in data] == ["Docker in Practice"]


@pytest.mark.parametrize("limit", [0, -1])
def test_recommended_resources_rejects_non_positive_limit(client, catalog, limit):
    response = client.get(f"/api/users/6/recommended-resources?limit={limit}")
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
