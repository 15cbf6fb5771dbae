"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test repository error translation (UniqueViolation / DatabaseError)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from psycopg.errors import UniqueViolation

from portal.crosscutting.exceptions import DatabaseError
from portal.domain.attendance import AlreadyActiveError


@pytest.fixture
def fake_pool_cls():
    from portal.infrastructure.db import pool as pool_module

    pool_module.reset_pool()
    with patch("portal.infrastructure.db.pool.ConnectionPool") as pool_cls:
        pool_cls.return_value = MagicMock()
        yield pool_cls
    pool_module.reset_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    def test_init_opens_named_pool(self, fake_pool_cls):
        from portal.infrastructure.db.pool import POOL_NAME, init_pool

        result = init_pool("postgresql://test", min_size=2, max_size=10)

        kwargs = fake_pool_cls.call_args.kwargs
        assert result is fake_pool_cls.return_value
        assert (kwargs["min_size"], kwargs["max_size"]) == (2, 10)
        assert kwargs["name"] == POOL_NAME

    def test_statement_timeout_goes_in_connection_options(self, fake_pool_cls):
        from portal.infrastructure.db.pool import init_pool

        init_pool("postgresql://test", 1, 2, statement_timeout_ms=2500)

        assert fake_pool_cls.call_args.kwargs["kwargs"] == {
            "options": "-c statement_timeout=2500"
        }

    def test_zero_timeout_means_no_options(self, fake_pool_cls):
        from portal.infrastructure.db.pool import init_pool

        init_pool("postgresql://test", 1, 2, statement_timeout_ms=0)

        assert fake_pool_cls.call_args.kwargs["kwargs"] == {}

    def test_double_init_is_rejected(self, fake_pool_cls):
        from portal.infrastructure.db.errors import PoolAlreadyInitializedError
        from portal.infrastructure.db.pool import init_pool

        init_pool("postgresql://test", min_size=1, max_size=2)

        with pytest.raises(PoolAlreadyInitializedError, match="already initialized"):
            init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_before_init(self):
        from portal.infrastructure.db.errors import PoolNotInitializedError
        from portal.infrastructure.db.pool import get_pool, reset_pool

        reset_pool()

        with pytest.raises(PoolNotInitializedError, match="not initialized"):
            get_pool()

    def test_close_clears_singleton(self, fake_pool_cls):
        from portal.infrastructure.db.pool import close_pool, get_pool, init_pool

        init_pool("postgresql://test", min_size=1, max_size=2)
        close_pool()
        close_pool()

        fake_pool_cls.return_value.close.assert_called_once()
        with pytest.raises(RuntimeError):
            get_pool()

    def test_reset_tolerates_close_errors(self, fake_pool_cls):
        from portal.infrastructure.db.pool import init_pool, reset_pool

        fake_pool_cls.return_value.close.side_effect = OSError("boom")
        init_pool("postgresql://test", min_size=1, max_size=2)

        reset_pool()

        init_pool("postgresql://test", min_size=1, max_size=2)


def _pool_whose_cursor_raises(exc: Exception) -> MagicMock:
    pool = MagicMock()
    conn = pool.connection.return_value.__enter__.return_value
    cur = conn.cursor.return_value.__enter__.return_value
    cur.execute.side_effect = exc
    return pool


@pytest.mark.unit
class TestRepositoryErrors:
    """Test Postgres repositories translate driver errors."""

    def test_repository_uses_injected_pool(self):
        from portal.infrastructure.repositories.postgres.base import PostgresRepository

        mock_pool = MagicMock()

        assert PostgresRepository(pool=mock_pool)._get_pool() == mock_pool

    def test_repository_falls_back_to_global_pool(self):
        from portal.infrastructure.db.pool import init_pool, reset_pool
        from portal.infrastructure.repositories.postgres.base import PostgresRepository

        reset_pool()

        with patch("portal.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=1, max_size=2)

            assert PostgresRepository()._get_pool() == mock_pool

        reset_pool()

    def test_unique_violation_on_check_in_means_already_active(self):
        from portal.infrastructure.repositories import PostgresAttendanceRepository

        repo = PostgresAttendanceRepository(
            pool=_pool_whose_cursor_raises(UniqueViolation("duplicate key"))
        )

        with pytest.raises(AlreadyActiveError):
            repo.create_session(
                user_id=1,
                day=date(2025, 6, 2),
                check_in=datetime(2025, 6, 2, 9, tzinfo=timezone.utc),
                remarks=None,
            )

    def test_other_failures_become_database_error(self):
        from portal.infrastructure.repositories import PostgresAttendanceRepository

        repo = PostgresAttendanceRepository(
            pool=_pool_whose_cursor_raises(OSError("connection reset"))
        )

        with pytest.raises(DatabaseError):
            repo.get_active_session(1, date(2025, 6, 2))
