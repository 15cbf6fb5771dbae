"""
Name: Attendance Endpoint Tests

Responsibilities:
  - check-in / check-out HTTP contract (201 / 409)
  - /today aggregation shape
  - /all admin listing with branch forcing
"""

import pytest

from portal.identity.users import UserRole

pytestmark = pytest.mark.unit


def test_check_in_then_check_out(client, register_user):
    _, headers = register_user()

    check_in = client.post(
        "/api/attendance/check-in", json={"remarks": "office"}, headers=headers
    )
    assert check_in.status_code == 201
    assert check_in.json()["data"]["status"] == "active"

    check_out = client.post("/api/attendance/check-out", headers=headers)
    assert check_out.status_code == 200
    data = check_out.json()["data"]
    assert data["status"] == "completed"
    assert data["id"] == check_in.json()["data"]["id"]
    assert data["duration_minutes"] >= 0


def test_double_check_in_is_conflict(client, register_user):
    _, headers = register_user()
    client.post("/api/attendance/check-in", headers=headers)

    response = client.post("/api/attendance/check-in", headers=headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_ACTIVE"


def test_check_out_without_session_is_conflict(client, register_user):
    _, headers = register_user()

    response = client.post("/api/attendance/check-out", headers=headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NO_ACTIVE_SESSION"


def test_today(client, register_user):
    _, headers = register_user()

    empty = client.get("/api/attendance/today", headers=headers).json()["data"]
    assert empty == {
        "status": "inactive",
        "active_session": None,
        "logs": [],
        "total_minutes": 0,
        "formatted_total": "0h 0m",
    }

    client.post("/api/attendance/check-in", headers=headers)
    active = client.get("/api/attendance/today", headers=headers).json()["data"]
    assert active["status"] == "active"
    assert active["active_session"]["id"] == active["logs"][0]["id"]


def test_requires_authentication(client):
    assert client.post("/api/attendance/check-in").status_code == 401


class TestAdminListing:
    def _seed(self, client, register_user):
        for branch in ("NYC", "LA"):
            _, headers = register_user(branch=branch, first_name=f"Emp{branch}")
            client.post("/api/attendance/check-in", headers=headers)

    def test_employee_cannot_list(self, client, register_user):
        _, headers = register_user()

        assert client.get("/api/attendance/all", headers=headers).status_code == 403

    def test_admin_sees_own_branch_only(self, client, register_user):
        self._seed(client, register_user)
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")

        data = client.get("/api/attendance/all?branch=LA", headers=admin).json()["data"]

        assert data["count"] == 1
        assert data["logs"][0]["branch"] == "NYC"
        assert data["logs"][0]["first_name"] == "EmpNYC"

    def test_superadmin_branch_parameter(self, client, register_user):
        self._seed(client, register_user)
        _, root = register_user(role=UserRole.SUPERADMIN, branch=None)

        everyone = client.get("/api/attendance/all", headers=root).json()["data"]
        la = client.get("/api/attendance/all?branch=LA", headers=root).json()["data"]

        assert everyone["count"] == 2
        assert [log["branch"] for log in la["logs"]] == ["LA"]

    def test_branchless_admin_is_forbidden(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN, branch=None)

        response = client.get("/api/attendance/all", headers=admin)

        assert response.status_code == 403

    def test_bad_date_filter(self, client, register_user):
        _, root = register_user(role=UserRole.SUPERADMIN, branch=None)

        response = client.get("/api/attendance/all?date=yesterday", headers=root)

        assert response.status_code == 400
