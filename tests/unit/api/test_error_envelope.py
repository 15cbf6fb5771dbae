"""
Name: Error Envelope Tests

Responsibilities:
  - {success:false, message, error:{code, request_id?, error_id?, errors?}}
  - X-Request-Id generation / echo
  - Validation -> 400, unknown route -> 404, typed / untyped errors -> 500
  - /healthz
"""

import pytest

from portal.api.main import app
from portal.container import get_list_events_use_case
from portal.crosscutting.exceptions import DatabaseError

pytestmark = pytest.mark.unit


class _Exploding:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def execute(self, *args, **kwargs):
        raise self._exc


@pytest.fixture
def override_events():
    def _install(exc: Exception) -> None:
        app.dependency_overrides[get_list_events_use_case] = lambda: _Exploding(exc)

    yield _install
    app.dependency_overrides.pop(get_list_events_use_case, None)


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["db"] == "connected"
    assert body["request_id"]


def test_request_id_is_echoed(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert response.json()["request_id"] == "req-123"


def test_request_id_generated_when_missing(client):
    response = client.get("/healthz")

    assert len(response.headers["X-Request-Id"]) == 36


def test_unknown_route(client):
    response = client.get("/api/nope", headers={"X-Request-Id": "abc"})

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["error"]["request_id"] == "abc"
    assert "data" not in body


def test_validation_errors_are_listed(client, register_user):
    _, headers = register_user()

    response = client.get("/api/holidays?year=abc", headers=headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["errors"][0]["loc"] == ["query", "year"]


def test_database_error_has_error_id(client, register_user, override_events):
    _, headers = register_user()
    override_events(DatabaseError("pool agotado"))

    response = client.get("/api/events", headers=headers)

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["error_id"]


def test_unhandled_exception_is_internal_error(client, register_user, override_events):
    _, headers = register_user()
    override_events(RuntimeError("boom"))

    response = client.get("/api/events", headers=headers)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INTERNAL_ERROR"
