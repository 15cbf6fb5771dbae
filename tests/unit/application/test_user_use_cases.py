"""
Name: Principal Use Case Tests

Responsibilities:
  - Registration rules per creator (anonymous / admin / superadmin)
  - Password change, status toggle, listings with branch forcing
"""

from datetime import date

import pytest

from portal.application.usecases.results import ServiceErrorCode
from portal.application.usecases.users import (
    ChangePasswordUseCase,
    ListBirthdaysUseCase,
    ListRecentJoinedUseCase,
    ListUsersUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    SetUserStatusUseCase,
)
from portal.identity.auth_users import verify_password
from portal.identity.users import Claims, UserRole, UserStatus
from portal.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

ROOT = Claims(user_id=1000, email="root@example.com", role=UserRole.SUPERADMIN)
NYC_ADMIN = Claims(user_id=1001, email="adm@example.com", role=UserRole.ADMIN, branch="NYC")


def _input(**overrides) -> RegisterUserInput:
    base = dict(
        email="new@example.com",
        password="password123",
        first_name="Grace",
        last_name="Hopper",
        branch="NYC",
    )
    base.update(overrides)
    return RegisterUserInput(**base)


@pytest.fixture
def users():
    return InMemoryUserRepository()


class TestRegister:
    def test_anonymous_always_gets_employee(self, users):
        result = RegisterUserUseCase(users).execute(
            None, _input(role="superadmin", email=" NEW@Example.com ")
        )

        assert result.ok
        assert result.value.role == UserRole.EMPLOYEE
        assert result.value.email == "new@example.com"
        assert verify_password("password123", result.value.password_hash)

    def test_admin_branch_is_forced(self, users):
        result = RegisterUserUseCase(users).execute(
            NYC_ADMIN, _input(role="manager", branch="LA")
        )

        assert result.value.role == UserRole.MANAGER
        assert result.value.branch == "NYC"

    def test_admin_cannot_create_superadmin(self, users):
        result = RegisterUserUseCase(users).execute(NYC_ADMIN, _input(role="superadmin"))

        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_superadmin_creates_branchless_superadmin(self, users):
        result = RegisterUserUseCase(users).execute(
            ROOT, _input(role="superadmin", branch=None)
        )

        assert result.value.role == UserRole.SUPERADMIN
        assert result.value.branch is None

    def test_branch_required_for_regular_roles(self, users):
        result = RegisterUserUseCase(users).execute(None, _input(branch="  "))

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    @pytest.mark.parametrize(
        "overrides",
        [{"email": ""}, {"first_name": " "}, {"password": "short"}, {"role": "janitor"}],
    )
    def test_invalid_input(self, users, overrides):
        result = RegisterUserUseCase(users).execute(ROOT, _input(**overrides))

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_duplicate_email_and_employee_id(self, users):
        use_case = RegisterUserUseCase(users)
        use_case.execute(None, _input(employee_id="E-1"))

        dup_email = use_case.execute(None, _input(employee_id="E-2"))
        dup_employee = use_case.execute(None, _input(email="other@example.com", employee_id="E-1"))

        assert dup_email.error.code == ServiceErrorCode.CONFLICT
        assert "email" in dup_email.error.message
        assert dup_employee.error.code == ServiceErrorCode.CONFLICT
        assert "employee_id" in dup_employee.error.message


class TestChangePassword:
    def test_wrong_current_password(self, users):
        user = RegisterUserUseCase(users).execute(None, _input()).value
        claims = Claims(user_id=user.id, email=user.email, role=user.role, branch="NYC")

        result = ChangePasswordUseCase(users).execute(
            claims, current_password="nope-nope", new_password="brand-new-pass"
        )

        assert result.error.code == ServiceErrorCode.INVALID_CREDENTIALS

    def test_updates_hash(self, users):
        user = RegisterUserUseCase(users).execute(None, _input()).value
        claims = Claims(user_id=user.id, email=user.email, role=user.role, branch="NYC")

        result = ChangePasswordUseCase(users).execute(
            claims, current_password="password123", new_password="brand-new-pass"
        )

        assert result.ok
        assert verify_password("brand-new-pass", users.get_user_by_id(user.id).password_hash)


class TestAdministration:
    @pytest.fixture
    def seeded(self, users):
        register = RegisterUserUseCase(users)
        nyc = register.execute(ROOT, _input(email="n@example.com", branch="NYC")).value
        la = register.execute(ROOT, _input(email="l@example.com", branch="LA")).value
        return users, nyc, la

    def test_admin_listing_forced_to_own_branch(self, seeded):
        users, nyc, _ = seeded

        listed = ListUsersUseCase(users).execute(NYC_ADMIN, branch="LA").value

        assert [u.id for u in listed] == [nyc.id]

    def test_admin_listing_without_branch_is_forbidden(self, seeded):
        users, _, _ = seeded
        branchless = Claims(user_id=5, email="b@example.com", role=UserRole.ADMIN)

        result = ListUsersUseCase(users).execute(branchless)

        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_invalid_filter(self, seeded):
        users, _, _ = seeded

        result = ListUsersUseCase(users).execute(ROOT, role="janitor")

        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_status_toggle_and_scope(self, seeded):
        users, nyc, la = seeded
        use_case = SetUserStatusUseCase(users)

        assert use_case.execute(NYC_ADMIN, nyc.id, "inactive").value.status == UserStatus.INACTIVE
        assert use_case.execute(NYC_ADMIN, la.id, "inactive").error.code == ServiceErrorCode.FORBIDDEN
        assert use_case.execute(NYC_ADMIN, 999, "inactive").error.code == ServiceErrorCode.NOT_FOUND
        assert use_case.execute(NYC_ADMIN, nyc.id, "asleep").error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_cannot_deactivate_self(self, users):
        result = SetUserStatusUseCase(users).execute(ROOT, ROOT.user_id, "inactive")

        assert result.error.code == ServiceErrorCode.FORBIDDEN


class TestDirectory:
    def test_birthdays_of_the_month_in_scope(self, users):
        register = RegisterUserUseCase(users)
        register.execute(
            ROOT, _input(email="a@example.com", branch="NYC", birth_date=date(1990, 6, 20))
        )
        register.execute(
            ROOT, _input(email="b@example.com", branch="NYC", birth_date=date(1985, 7, 1))
        )
        register.execute(
            ROOT, _input(email="c@example.com", branch="LA", birth_date=date(1992, 6, 3))
        )
        employee = Claims(user_id=1, email="x@example.com", role=UserRole.EMPLOYEE, branch="NYC")

        rows = ListBirthdaysUseCase(users).execute(employee, today=date(2025, 6, 1)).value

        assert [u.email for u in rows] == ["a@example.com"]
        everyone = ListBirthdaysUseCase(users).execute(ROOT, today=date(2025, 6, 1)).value
        assert [u.email for u in everyone] == ["c@example.com", "a@example.com"]

    def test_recent_joined_respects_limit(self, users):
        register = RegisterUserUseCase(users)
        for i in range(3):
            register.execute(ROOT, _input(email=f"u{i}@example.com"))

        rows = ListRecentJoinedUseCase(users).execute(ROOT, limit=2).value

        assert len(rows) == 2
