"""
Name: Content Endpoint Tests

Responsibilities:
  - Holidays / thoughts branch scoping over HTTP
  - Announcements / HR policies admin-only writes
  - Ideas (likes, comments) and events (multipart galleries)
"""

import pytest

from portal.identity.users import UserRole

pytestmark = pytest.mark.unit


class TestHolidays:
    def test_scope_and_creator_visibility(self, client, register_user):
        _, root = register_user(role=UserRole.SUPERADMIN, branch=None)
        _, la_admin = register_user(role=UserRole.ADMIN, branch="LA")
        _, employee = register_user(branch="NYC")

        client.post("/api/holidays", json={"name": "New Year", "date": "2025-01-01"}, headers=root)
        created = client.post(
            "/api/holidays",
            json={"name": "LA Day", "date": "2025-06-01", "branch": "NYC"},
            headers=la_admin,
        )
        assert created.status_code == 201
        assert created.json()["data"]["branch"] == "LA"

        seen = client.get("/api/holidays", headers=employee).json()["data"]
        assert seen["is_admin"] is False
        assert [h["name"] for h in seen["holidays"]] == ["New Year"]
        assert seen["holidays"][0].get("creator_email") is None

        admin_view = client.get("/api/holidays?year=2025", headers=la_admin).json()["data"]
        assert admin_view["is_admin"] is True
        assert {h["name"] for h in admin_view["holidays"]} == {"New Year", "LA Day"}

    def test_admin_cannot_delete_company_wide(self, client, register_user):
        _, root = register_user(role=UserRole.SUPERADMIN, branch=None)
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")
        holiday = client.post(
            "/api/holidays", json={"name": "New Year", "date": "2025-01-01"}, headers=root
        ).json()["data"]

        response = client.delete(f"/api/holidays/{holiday['id']}", headers=admin)

        assert response.status_code == 403
        assert client.delete(f"/api/holidays/{holiday['id']}", headers=root).status_code == 200
        assert client.delete(f"/api/holidays/{holiday['id']}", headers=root).status_code == 404

    def test_employee_cannot_create(self, client, register_user):
        _, employee = register_user()

        response = client.post(
            "/api/holidays", json={"name": "x", "date": "2025-01-01"}, headers=employee
        )

        assert response.status_code == 403


class TestThoughts:
    def test_branch_endpoints(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")
        _, employee = register_user(branch="NYC")
        client.post("/api/thoughts", json={"content": "Be kind", "author": "Anon"}, headers=admin)

        mine = client.get("/api/thoughts/branch/NYC", headers=employee)
        assert mine.json()["data"]["count"] == 1
        assert client.get("/api/thoughts/branch/LA", headers=employee).status_code == 403

        random_pick = client.get("/api/thoughts/random/NYC", headers=employee)
        assert random_pick.json()["data"]["content"] == "Be kind"
        assert client.get("/api/thoughts/all", headers=employee).json()["data"]["count"] == 1

    def test_soft_delete(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN, branch="NYC")
        thought = client.post(
            "/api/thoughts", json={"content": "x", "author": "y"}, headers=admin
        ).json()["data"]

        assert client.delete(f"/api/thoughts/{thought['id']}", headers=admin).status_code == 200
        assert client.get("/api/thoughts", headers=admin).json()["data"]["count"] == 0


class TestAnnouncementsAndPolicies:
    def test_announcements(self, client, register_user):
        admin_user, admin = register_user(role=UserRole.ADMIN, first_name="Boss")
        _, employee = register_user()

        denied = client.post(
            "/api/announcements", json={"title": "t", "content": "c"}, headers=employee
        )
        assert denied.status_code == 403

        created = client.post(
            "/api/announcements", json={"title": "Hi", "content": "Hello"}, headers=admin
        )
        assert created.status_code == 201

        listed = client.get("/api/announcements", headers=employee).json()["data"]
        assert listed[0]["priority"] == "Normal"
        assert listed[0]["first_name"] == "Boss"

    def test_hr_policy_lifecycle(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN, first_name="Helen", last_name="Rios")
        _, employee = register_user()

        created = client.post(
            "/api/hr/create",
            json={"title": "Leave", "category": "Time off", "content": "..."},
            headers=admin,
        )
        assert created.status_code == 201
        policy = created.json()["data"]
        assert policy["prepared_by"] == "Helen Rios"

        updated = client.put(
            f"/api/hr/update/{policy['id']}", json={"version": "2"}, headers=admin
        ).json()["data"]
        assert updated["version"] == "2"
        assert updated["title"] == "Leave"

        assert client.get(f"/api/hr/{policy['id']}", headers=employee).status_code == 200
        assert client.delete(f"/api/hr/delete/{policy['id']}", headers=employee).status_code == 403
        assert client.delete(f"/api/hr/delete/{policy['id']}", headers=admin).status_code == 200
        assert client.get(f"/api/hr/{policy['id']}", headers=employee).status_code == 404


class TestIdeas:
    def test_like_and_comment_flow(self, client, register_user):
        _, author = register_user(first_name="Author")
        _, other = register_user(first_name="Other")

        idea = client.post(
            "/api/ideas", json={"title": "Cafe", "content": "Better coffee"}, headers=author
        ).json()["data"]

        liked = client.post(f"/api/ideas/{idea['id']}/like", headers=other)
        assert liked.json()["data"] == {"liked": True}

        comment = client.post(
            f"/api/ideas/{idea['id']}/comments", json={"comment": "+1"}, headers=other
        )
        assert comment.status_code == 201

        detail = client.get(f"/api/ideas/{idea['id']}", headers=other).json()["data"]
        assert detail["likes_count"] == 1
        assert detail["is_liked"] is True
        assert [c["comment"] for c in detail["comments"]] == ["+1"]

        comment_id = comment.json()["data"]["id"]
        assert client.delete(f"/api/ideas/comments/{comment_id}", headers=author).status_code == 403
        assert client.delete(f"/api/ideas/comments/{comment_id}", headers=other).status_code == 200

    def test_only_author_deletes(self, client, register_user):
        _, author = register_user(first_name="Author")
        _, other = register_user(first_name="Other")
        idea = client.post(
            "/api/ideas", json={"title": "t", "content": "c"}, headers=author
        ).json()["data"]

        assert client.delete(f"/api/ideas/{idea['id']}", headers=other).status_code == 403
        assert client.delete(f"/api/ideas/{idea['id']}", headers=author).status_code == 200


class TestEvents:
    def _form(self, **overrides):
        data = {
            "title": "Party",
            "description": "Yearly party",
            "event_date": "2025-12-20",
        }
        data.update(overrides)
        return data

    def test_create_with_gallery_and_serve_file(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN)
        files = [
            ("images", ("a.png", b"png-bytes", "image/png")),
            ("images", ("b.mp4", b"mp4-bytes", "video/mp4")),
        ]

        response = client.post(
            "/api/events", data=self._form(cover_index="1"), files=files, headers=admin
        )

        assert response.status_code == 201
        event = response.json()["data"]
        assert len(event["images"]) == 2
        assert event["image_url"] == event["images"][1]
        assert event["image_type"] == "video"

        served = client.get(event["images"][0])
        assert served.status_code == 200
        assert served.content == b"png-bytes"

    def test_unsupported_file_type(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN)

        response = client.post(
            "/api/events",
            data=self._form(),
            files=[("images", ("run.sh", b"#!/bin/sh", "text/x-sh"))],
            headers=admin,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_update_and_delete(self, client, register_user):
        _, admin = register_user(role=UserRole.ADMIN)
        _, employee = register_user(first_name="Emp")
        event = client.post(
            "/api/events", data=self._form(image_url="https://cdn.example.com/x.jpg"), headers=admin
        ).json()["data"]

        updated = client.put(
            f"/api/events/{event['id']}", data={"title": "Party 2"}, headers=admin
        ).json()["data"]
        assert updated["title"] == "Party 2"
        assert updated["image_url"] == "https://cdn.example.com/x.jpg"

        assert client.get("/api/events", headers=employee).json()["data"][0]["id"] == event["id"]
        assert client.delete(f"/api/events/{event['id']}", headers=employee).status_code == 403
        assert client.delete(f"/api/events/{event['id']}", headers=admin).status_code == 200
        assert client.get(f"/api/events/{event['id']}", headers=employee).status_code == 404
