"""
Name: Attendance Use Case Tests

Responsibilities:
  - Check-in / check-out orchestration with an injected clock
  - Daily status aggregation
  - Admin listing with branch forcing
"""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from portal.application.usecases.attendance import (
    CheckInUseCase,
    CheckOutUseCase,
    GetDailyStatusUseCase,
    ListAttendanceUseCase,
)
from portal.application.usecases.results import ServiceErrorCode
from portal.domain.attendance import DayStatus
from portal.domain.entities import AttendanceStatus
from portal.identity.users import Claims, UserRole
from portal.infrastructure.repositories import (
    InMemoryAttendanceRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 6, 2, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def repo():
    return InMemoryAttendanceRepository()


@pytest.fixture
def employee():
    return Claims(user_id=10, email="e@example.com", role=UserRole.EMPLOYEE, branch="NYC")


class TestCheckIn:
    def test_opens_session_with_server_time(self, repo, clock, employee):
        result = CheckInUseCase(repo, clock).execute(employee, remarks="  morning  ")

        assert result.ok
        session = result.value
        assert session.status == AttendanceStatus.ACTIVE
        assert session.check_in == clock.now
        assert session.date == date(2025, 6, 2)
        assert session.check_in_remarks == "morning"

    def test_second_check_in_is_rejected(self, repo, clock, employee):
        use_case = CheckInUseCase(repo, clock)
        use_case.execute(employee)
        clock.advance(minutes=5)

        result = use_case.execute(employee)

        assert not result.ok
        assert result.error.code == ServiceErrorCode.ALREADY_ACTIVE
        assert len(repo.list_sessions_for_day(employee.user_id, clock.now.date())) == 1

    def test_store_constraint_wins_a_race(self, repo, clock, employee):
        """Pre-check sees nothing but the store already has an active session."""
        repo.create_session(
            user_id=employee.user_id, day=clock.now.date(), check_in=clock.now, remarks=None
        )
        original = repo.get_active_session
        repo.get_active_session = lambda user_id, day: None
        try:
            result = CheckInUseCase(repo, clock).execute(employee)
        finally:
            repo.get_active_session = original

        assert result.error.code == ServiceErrorCode.ALREADY_ACTIVE

    def test_new_cycle_after_check_out(self, repo, clock, employee):
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(hours=1)
        CheckOutUseCase(repo, clock).execute(employee)
        clock.advance(minutes=30)

        result = CheckInUseCase(repo, clock).execute(employee)

        assert result.ok
        assert len(repo.list_sessions_for_day(employee.user_id, clock.now.date())) == 2


class TestCheckOut:
    def test_without_session(self, repo, clock, employee):
        result = CheckOutUseCase(repo, clock).execute(employee)

        assert result.error.code == ServiceErrorCode.NO_ACTIVE_SESSION

    def test_closes_with_floor_minutes(self, repo, clock, employee):
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(hours=2, minutes=5, seconds=59)

        result = CheckOutUseCase(repo, clock).execute(employee, remarks="done")

        assert result.ok
        assert result.value.status == AttendanceStatus.COMPLETED
        assert result.value.duration_minutes == 125
        assert result.value.check_out == clock.now
        assert result.value.check_out_remarks == "done"
        assert repo.get_active_session(employee.user_id, clock.now.date()) is None

    def test_negative_duration_is_stored_and_logged(self, repo, clock, employee, caplog):
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(minutes=-3)

        with caplog.at_level(logging.WARNING):
            result = CheckOutUseCase(repo, clock).execute(employee)

        assert result.ok
        assert result.value.duration_minutes == -3
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_sessions_of_other_days_are_ignored(self, repo, clock, employee):
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(days=1)

        result = CheckOutUseCase(repo, clock).execute(employee)

        assert result.error.code == ServiceErrorCode.NO_ACTIVE_SESSION


class TestDailyStatus:
    def test_inactive_day(self, repo, clock, employee):
        status = GetDailyStatusUseCase(repo, clock).execute(employee).value

        assert status.status == DayStatus.INACTIVE
        assert status.sessions == []
        assert status.formatted_total == "0h 0m"

    def test_active_elapsed_counts(self, repo, clock, employee):
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(minutes=30)
        CheckOutUseCase(repo, clock).execute(employee)
        clock.advance(minutes=10)
        CheckInUseCase(repo, clock).execute(employee)
        clock.advance(minutes=20, seconds=40)

        status = GetDailyStatusUseCase(repo, clock).execute(employee).value

        assert status.status == DayStatus.ACTIVE
        assert status.active_session is not None
        assert status.total_minutes == 50


class TestListAttendance:
    @pytest.fixture
    def populated(self, clock):
        users = InMemoryUserRepository()
        repo = InMemoryAttendanceRepository(users=users)
        nyc = users.create_user(
            email="nyc@example.com",
            password_hash="x",
            first_name="Nora",
            last_name="York",
            role=UserRole.EMPLOYEE,
            branch="NYC",
            employee_id="E-1",
        )
        la = users.create_user(
            email="la@example.com",
            password_hash="x",
            first_name="Luis",
            last_name="Angeles",
            role=UserRole.EMPLOYEE,
            branch="LA",
            employee_id="E-2",
        )
        for user in (nyc, la):
            repo.create_session(
                user_id=user.id, day=clock.now.date(), check_in=clock.now, remarks=None
            )
        return repo

    def test_admin_sees_only_own_branch(self, populated):
        admin = Claims(user_id=99, email="a@example.com", role=UserRole.ADMIN, branch="NYC")

        rows = ListAttendanceUseCase(populated).execute(admin, branch="LA").value

        assert [r.branch for r in rows] == ["NYC"]
        assert rows[0].first_name == "Nora"

    def test_superadmin_filters_by_parameter(self, populated):
        root = Claims(user_id=1, email="r@example.com", role=UserRole.SUPERADMIN)

        assert len(ListAttendanceUseCase(populated).execute(root).value) == 2
        rows = ListAttendanceUseCase(populated).execute(root, branch="LA").value
        assert [r.employee_id for r in rows] == ["E-2"]

    def test_name_search_and_employee_filter(self, populated):
        root = Claims(user_id=1, email="r@example.com", role=UserRole.SUPERADMIN)
        use_case = ListAttendanceUseCase(populated)

        assert [r.first_name for r in use_case.execute(root, search="ANG").value] == ["Luis"]
        assert [r.first_name for r in use_case.execute(root, employee_id="E-1").value] == [
            "Nora"
        ]

    def test_admin_without_branch_is_forbidden(self, populated):
        admin = Claims(user_id=99, email="a@example.com", role=UserRole.ADMIN, branch=None)

        result = ListAttendanceUseCase(populated).execute(admin)

        assert result.error.code == ServiceErrorCode.FORBIDDEN
