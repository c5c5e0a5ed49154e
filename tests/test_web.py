#!/usr/bin/env python3
"""Tests for the Flask dashboard API."""

import pytest

from engine import TaskStatus, load_tasks
from web.app import app

TASKS_YAML = """
tasks:
  - id: 1
    equipmentId: 1
    description: Lubricate press bearings
    taskDate: '2025-03-03'
    status: Pending
  - id: 2
    equipmentId: 2
    description: Replace conveyor belt
    taskDate: '2025-03-12'
    status: In Progress
  - id: 3
    equipmentId: 2
    description: Tighten drive chain
    taskDate: '2025-03-05'
    status: Completed
"""


@pytest.fixture
def tasks_file(tmp_path):
    path = tmp_path / "tasks.yaml"
    path.write_text(TASKS_YAML)
    return path


@pytest.fixture
def client(tasks_file):
    app.config.update(TESTING=True, TASKS_FILE=tasks_file, MAINT_TZ="UTC")
    with app.test_client() as client:
        yield client


def as_role(role):
    return {"X-Role": role}


class TestViewEndpoints:
    """Tests for read-only endpoints."""

    def test_view_requires_known_role(self, client):
        assert client.get("/tasks").status_code == 403
        response = client.get("/tasks", headers=as_role("visitor"))
        assert response.status_code == 403
        assert "may not view" in response.get_json()["error"]

    def test_summary(self, client):
        response = client.get("/?today=2025-03-10", headers=as_role("user"))
        assert response.status_code == 200
        body = response.get_json()
        assert body["total"] == 3
        assert body["overdue"] == 1
        assert body["pending"] == 1
        assert body["in_progress"] == 1
        assert body["by_status"]["Completed"] == 1
        assert body["actions"] == ["view"]

    def test_summary_actions_for_admin(self, client):
        body = client.get("/?today=2025-03-10", headers=as_role("admin")).get_json()
        assert body["actions"] == sorted(
            ["view", "add", "edit", "delete", "register", "manage_users"]
        )

    def test_tasks_with_alerts(self, client):
        response = client.get("/tasks?today=2025-03-10", headers=as_role("user"))
        tasks = {t["id"]: t for t in response.get_json()["tasks"]}
        assert tasks[1]["alert"]["tier"] == "overdue"
        assert tasks[1]["alert"]["message"] == "OVERDUE by 7 days! Complete immediately!"
        assert tasks[1]["task_date"] == "2025-03-03"
        assert tasks[2]["alert"]["tier"] == "upcoming_soon"
        assert tasks[2]["alert"]["days_until_due"] == 2
        assert tasks[3]["alert"]["tier"] == "completed"
        assert tasks[3]["alert"]["color"] == "blue"

    def test_invalid_today(self, client):
        response = client.get("/tasks?today=soon", headers=as_role("user"))
        assert response.status_code == 400

    def test_calendar(self, client):
        response = client.get(
            "/calendar?month=2025-03&today=2025-03-10", headers=as_role("operator")
        )
        body = response.get_json()
        cells = body["cells"]
        assert len(cells) == 37
        assert cells[:6] == [None] * 6
        by_day = {c["day"]: c for c in cells if c is not None}
        assert by_day[3]["alert"] == {"day": "2025-03-03", "severity": "red", "count": 1}
        assert by_day[12]["alert"]["severity"] == "orange"
        assert by_day[5]["alert"] is None
        assert by_day[10]["today"] is True

    def test_calendar_invalid_month(self, client):
        response = client.get("/calendar?month=03-2025", headers=as_role("user"))
        assert response.status_code == 400


class TestMutatingEndpoints:
    """Tests for permission-gated changes."""

    def test_add_denied_for_user(self, client, tasks_file):
        response = client.post(
            "/tasks",
            json={"equipment_id": 1, "description": "x", "task_date": "2025-03-20"},
            headers=as_role("user"),
        )
        assert response.status_code == 403
        assert len(load_tasks(tasks_file)) == 3

    def test_add_by_operator(self, client, tasks_file):
        response = client.post(
            "/tasks",
            json={"equipment_id": 1, "description": "Oil", "task_date": "2025-03-20"},
            headers=as_role("operator"),
        )
        assert response.status_code == 201
        assert response.get_json()["id"] == 4
        assert load_tasks(tasks_file)[-1].description == "Oil"

    def test_add_missing_fields(self, client):
        response = client.post(
            "/tasks", json={"description": "Oil"}, headers=as_role("admin")
        )
        assert response.status_code == 400

    def test_add_bad_date(self, client):
        response = client.post(
            "/tasks",
            json={"equipment_id": 1, "description": "Oil", "task_date": "03/20/2025"},
            headers=as_role("admin"),
        )
        assert response.status_code == 400

    def test_update_status(self, client, tasks_file):
        response = client.post(
            "/tasks/1/status", json={"status": "Completed"}, headers=as_role("operator")
        )
        assert response.status_code == 200
        assert response.get_json()["status"] == "Completed"
        assert load_tasks(tasks_file)[0].status == TaskStatus.COMPLETED

    def test_update_status_rejects_unknown_status(self, client, tasks_file):
        response = client.post(
            "/tasks/3/status", json={"status": "Bogus"}, headers=as_role("operator")
        )
        assert response.status_code == 400
        assert "Invalid status" in response.get_json()["error"]
        assert load_tasks(tasks_file)[2].status == TaskStatus.COMPLETED

    def test_add_rejects_unknown_status(self, client, tasks_file):
        response = client.post(
            "/tasks",
            json={
                "equipment_id": 1,
                "description": "Oil",
                "task_date": "2025-03-20",
                "status": "Finished",
            },
            headers=as_role("admin"),
        )
        assert response.status_code == 400
        assert len(load_tasks(tasks_file)) == 3

    def test_update_status_unknown_task(self, client):
        response = client.post(
            "/tasks/99/status", json={"status": "Completed"}, headers=as_role("admin")
        )
        assert response.status_code == 404

    def test_delete_admin_only(self, client, tasks_file):
        assert client.delete("/tasks/1", headers=as_role("operator")).status_code == 403
        assert client.delete("/tasks/1", headers=as_role("admin")).status_code == 200
        assert [t.id for t in load_tasks(tasks_file)] == [2, 3]

    def test_delete_unknown_task(self, client):
        assert client.delete("/tasks/42", headers=as_role("admin")).status_code == 404
