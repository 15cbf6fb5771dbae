"""
Name: Attendance State Machine Tests

Responsibilities:
  - Transitions NO_SESSION -> ACTIVE -> COMPLETED (and new cycles)
  - Floor-minute durations, negative durations kept as-is
  - Day summary (completed + elapsed active)
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from portal.domain.attendance import (
    AlreadyActiveError,
    AttendanceAction,
    DayStatus,
    NoActiveSessionError,
    SessionState,
    duration_minutes,
    format_minutes,
    next_state,
    summarize_day,
)
from portal.domain.entities import AttendanceSession, AttendanceStatus

pytestmark = pytest.mark.unit

T0 = datetime(2025, 6, 2, 9, 0, tzinfo=timezone.utc)


def _session(
    session_id: int,
    start: datetime,
    *,
    minutes: int | None = None,
) -> AttendanceSession:
    completed = minutes is not None
    return AttendanceSession(
        id=session_id,
        user_id=1,
        date=start.date(),
        check_in=start,
        check_out=start + timedelta(minutes=minutes) if completed else None,
        duration_minutes=minutes,
        status=AttendanceStatus.COMPLETED if completed else AttendanceStatus.ACTIVE,
    )


class TestTransitions:
    def test_check_in_from_no_session(self):
        assert (
            next_state(SessionState.NO_SESSION, AttendanceAction.CHECK_IN)
            == SessionState.ACTIVE
        )

    def test_check_in_while_active_is_rejected(self):
        with pytest.raises(AlreadyActiveError):
            next_state(SessionState.ACTIVE, AttendanceAction.CHECK_IN)

    def test_check_out_closes_active(self):
        assert (
            next_state(SessionState.ACTIVE, AttendanceAction.CHECK_OUT)
            == SessionState.COMPLETED
        )

    @pytest.mark.parametrize("state", [SessionState.NO_SESSION, SessionState.COMPLETED])
    def test_check_out_without_active(self, state):
        with pytest.raises(NoActiveSessionError):
            next_state(state, AttendanceAction.CHECK_OUT)

    def test_completed_allows_a_new_cycle(self):
        assert (
            next_state(SessionState.COMPLETED, AttendanceAction.CHECK_IN)
            == SessionState.ACTIVE
        )


class TestDurations:
    def test_floor_minutes(self):
        assert duration_minutes(T0, T0 + timedelta(minutes=59, seconds=59)) == 59

    def test_sub_minute_is_zero(self):
        assert duration_minutes(T0, T0 + timedelta(seconds=30)) == 0

    def test_negative_is_not_clamped(self):
        assert duration_minutes(T0, T0 - timedelta(minutes=5)) == -5

    @pytest.mark.parametrize(
        "minutes, expected", [(0, "0h 0m"), (90, "1h 30m"), (615, "10h 15m"), (-5, "-0h 5m")]
    )
    def test_format(self, minutes, expected):
        assert format_minutes(minutes) == expected


class TestSummarizeDay:
    def test_empty_day(self):
        summary = summarize_day([], now=T0)

        assert summary.status == DayStatus.INACTIVE
        assert summary.active_session is None
        assert summary.total_minutes == 0
        assert summary.formatted_total == "0h 0m"

    def test_completed_plus_elapsed_active(self):
        morning = _session(1, T0, minutes=90)
        afternoon = _session(2, T0 + timedelta(hours=4))
        now = afternoon.check_in + timedelta(minutes=45, seconds=10)

        summary = summarize_day([afternoon, morning], now=now)

        assert summary.status == DayStatus.ACTIVE
        assert summary.active_session.id == 2
        assert [s.id for s in summary.sessions] == [1, 2]
        assert summary.total_minutes == 135
        assert summary.formatted_total == "2h 15m"

    def test_only_completed(self):
        summary = summarize_day(
            [_session(1, T0, minutes=30), _session(2, T0 + timedelta(hours=1), minutes=15)],
            now=T0 + timedelta(hours=8),
        )

        assert summary.status == DayStatus.INACTIVE
        assert summary.total_minutes == 45

    def test_session_date_is_kept(self):
        assert _session(1, T0).date == date(2025, 6, 2)
