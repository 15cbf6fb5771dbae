"""
Name: Auth Endpoint Tests

Responsibilities:
  - Login / me / logout / change-password through HTTP
  - Registration (public and administrative)
  - Admin user listing and status toggle
  - Birthdays / recent joined directory endpoints
"""

from datetime import date

import pytest

from portal.identity.users import UserRole

pytestmark = pytest.mark.unit


def _login(client, email, password="password123", branch=None):
    body = {"email": email, "password": password}
    if branch:
        body["branch"] = branch
    return client.post("/api/auth/login", json=body)


class TestLogin:
    def test_login_returns_token_and_profile(self, client, register_user):
        user, _ = register_user(email="ana@example.com")

        response = _login(client, "ANA@example.com")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] > 0
        assert data["user"]["id"] == user.id
        assert data["user"]["last_login"] is None
        assert "password_hash" not in data["user"]

        me = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
        )
        assert me.status_code == 200
        assert me.json()["data"]["last_login"] is not None

    def test_wrong_password(self, client, register_user):
        register_user(email="ana@example.com")

        response = _login(client, "ana@example.com", password="nope")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    def test_branch_mismatch(self, client, register_user):
        register_user(email="ana@example.com", branch="NYC")

        response = _login(client, "ana@example.com", branch="LA")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_inactive_account(self, client, register_user):
        target, _ = register_user(email="ana@example.com")
        _, admin = register_user(role=UserRole.ADMIN, email="boss@example.com")
        client.patch(
            f"/api/auth/admin/users/{target.id}/status",
            json={"status": "inactive"},
            headers=admin,
        )

        response = _login(client, "ana@example.com")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"


class TestSession:
    def test_me_requires_bearer(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"

    def test_logout_is_stateless(self, client, register_user):
        _, headers = register_user()

        response = client.post("/api/auth/logout", headers=headers)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_change_password(self, client, register_user):
        user, headers = register_user(email="ana@example.com")

        wrong = client.post(
            "/api/auth/change-password",
            json={"current_password": "bad-password", "new_password": "new-password-1"},
            headers=headers,
        )
        assert wrong.status_code == 401

        done = client.post(
            "/api/auth/change-password",
            json={"current_password": "password123", "new_password": "new-password-1"},
            headers=headers,
        )
        assert done.status_code == 200
        assert _login(client, "ana@example.com", password="new-password-1").status_code == 200


class TestRegistration:
    def _payload(self, **overrides):
        body = {
            "email": "new@example.com",
            "password": "password123",
            "first_name": "Grace",
            "last_name": "Hopper",
            "branch": "NYC",
        }
        body.update(overrides)
        return body

    def test_public_registration_is_employee(self, client):
        response = client.post(
            "/api/auth/register", json=self._payload(role="admin")
        )

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "employee"

    def test_duplicate_email_conflict(self, client):
        client.post("/api/auth/register", json=self._payload())

        response = client.post("/api/auth/register", json=self._payload())

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_missing_fields_are_400(self, client):
        response = client.post("/api/auth/register", json={"email": "x@example.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["errors"]

    def test_admin_creation_forces_branch(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")

        response = client.post(
            "/api/auth/admin/users",
            json=self._payload(role="manager", branch="LA"),
            headers=admin,
        )

        assert response.status_code == 201
        assert response.json()["data"]["branch"] == "NYC"
        assert response.json()["data"]["role"] == "manager"

    def test_admin_endpoint_rejects_employees(self, client, register_user):
        _, employee = register_user()

        response = client.post(
            "/api/auth/admin/users", json=self._payload(), headers=employee
        )

        assert response.status_code == 403


class TestAdminUsers:
    def test_listing_is_branch_forced(self, client, register_user):
        register_user(branch="NYC", first_name="Nyc")
        register_user(branch="LA", first_name="La")
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")

        response = client.get("/api/auth/admin/users?branch=LA", headers=admin)

        assert response.status_code == 200
        branches = {u["branch"] for u in response.json()["data"]["users"]}
        assert branches == {"NYC"}

    def test_superadmin_sees_everyone(self, client, register_user):
        register_user(branch="NYC", first_name="Nyc")
        register_user(branch="LA", first_name="La")
        _, root = register_user(role=UserRole.SUPERADMIN, branch=None)

        data = client.get("/api/auth/admin/users", headers=root).json()["data"]

        assert data["count"] == 3

    def test_invalid_status_value(self, client, register_user):
        target, _ = register_user(first_name="Target")
        _, admin = register_user(role=UserRole.ADMIN)

        response = client.patch(
            f"/api/auth/admin/users/{target.id}/status",
            json={"status": "sleeping"},
            headers=admin,
        )

        assert response.status_code == 400


class TestDirectory:
    def test_birthdays_of_current_month(self, client, register_user):
        today = date.today()
        register_user(first_name="Bday", birth_date=today.replace(year=1992))
        _, viewer = register_user(first_name="Viewer")

        data = client.get("/api/auth/birthdays", headers=viewer).json()["data"]

        assert [u["first_name"] for u in data["users"]] == ["Bday"]

    def test_recent_joined_limit_bounds(self, client, register_user):
        _, headers = register_user()

        assert client.get("/api/auth/recent-joined?limit=0", headers=headers).status_code == 400
        ok = client.get("/api/auth/recent-joined?limit=5", headers=headers)
        assert ok.status_code == 200
        assert ok.json()["data"]["count"] == 1
