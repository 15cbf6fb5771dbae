"""HTTP-level fixtures (TestClient over the real app, in-memory repositories)."""

import pytest
from fastapi.testclient import TestClient

from portal.api.main import app


@pytest.fixture
def client():
    # R: sin context manager => no corre el lifespan (no hay pool en tests).
    return TestClient(app, raise_server_exceptions=False)
