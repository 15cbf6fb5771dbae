"""
===============================================================================
TARJETA CRC — portal/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, storage, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para repositorios/adapters.
  - Elegir implementaciones según Settings (in-memory en tests, Postgres en runtime).

Colaboradores:
  - portal.crosscutting.config.get_settings
  - portal.domain.repositories.* (puertos)
  - portal.infrastructure.* (implementaciones)
  - portal.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - Los repositorios in-memory comparten el repo de usuarios para emular JOINs.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    AddIdeaCommentUseCase,
    ChangePasswordUseCase,
    CheckInUseCase,
    CheckOutUseCase,
    CreateAnnouncementUseCase,
    CreateEventUseCase,
    CreateHolidayUseCase,
    CreateHrPolicyUseCase,
    CreateIdeaUseCase,
    CreateThoughtUseCase,
    DeleteAnnouncementUseCase,
    DeleteEventUseCase,
    DeleteHolidayUseCase,
    DeleteHrPolicyUseCase,
    DeleteIdeaCommentUseCase,
    DeleteIdeaUseCase,
    DeleteThoughtUseCase,
    GetCurrentUserUseCase,
    GetDailyStatusUseCase,
    GetEventUseCase,
    GetHrPolicyUseCase,
    GetIdeaUseCase,
    ListAnnouncementsUseCase,
    ListAttendanceUseCase,
    ListBirthdaysUseCase,
    ListBranchThoughtsUseCase,
    ListEventsUseCase,
    ListHolidaysUseCase,
    ListHrPoliciesUseCase,
    ListIdeasUseCase,
    ListRecentJoinedUseCase,
    ListThoughtsAdminUseCase,
    ListThoughtsInScopeUseCase,
    ListUsersUseCase,
    RandomThoughtUseCase,
    RegisterUserUseCase,
    SetUserStatusUseCase,
    ToggleIdeaLikeUseCase,
    UpdateEventUseCase,
    UpdateHolidayUseCase,
    UpdateHrPolicyUseCase,
    UpdateIdeaUseCase,
    UpdateThoughtUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AnnouncementRepository,
    AttendanceRepository,
    EventRepository,
    HolidayRepository,
    HrPolicyRepository,
    IdeaRepository,
    ThoughtRepository,
    UserRepository,
)
from .domain.services import MediaStoragePort
from .infrastructure.repositories import (
    InMemoryAnnouncementRepository,
    InMemoryAttendanceRepository,
    InMemoryEventRepository,
    InMemoryHolidayRepository,
    InMemoryHrPolicyRepository,
    InMemoryIdeaRepository,
    InMemoryThoughtRepository,
    InMemoryUserRepository,
    PostgresAnnouncementRepository,
    PostgresAttendanceRepository,
    PostgresEventRepository,
    PostgresHolidayRepository,
    PostgresHrPolicyRepository,
    PostgresIdeaRepository,
    PostgresThoughtRepository,
    PostgresUserRepository,
)
from .infrastructure.storage import LocalFileStorage

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => in-memory adapters."""
    return get_settings().is_test()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_attendance_repository() -> AttendanceRepository:
    if _is_test_env():
        return InMemoryAttendanceRepository(users=get_user_repository())
    return PostgresAttendanceRepository()


@lru_cache(maxsize=1)
def get_holiday_repository() -> HolidayRepository:
    if _is_test_env():
        return InMemoryHolidayRepository(users=get_user_repository())
    return PostgresHolidayRepository()


@lru_cache(maxsize=1)
def get_thought_repository() -> ThoughtRepository:
    if _is_test_env():
        return InMemoryThoughtRepository(users=get_user_repository())
    return PostgresThoughtRepository()


@lru_cache(maxsize=1)
def get_announcement_repository() -> AnnouncementRepository:
    if _is_test_env():
        return InMemoryAnnouncementRepository(users=get_user_repository())
    return PostgresAnnouncementRepository()


@lru_cache(maxsize=1)
def get_hr_policy_repository() -> HrPolicyRepository:
    if _is_test_env():
        return InMemoryHrPolicyRepository(users=get_user_repository())
    return PostgresHrPolicyRepository()


@lru_cache(maxsize=1)
def get_idea_repository() -> IdeaRepository:
    if _is_test_env():
        return InMemoryIdeaRepository(users=get_user_repository())
    return PostgresIdeaRepository()


@lru_cache(maxsize=1)
def get_event_repository() -> EventRepository:
    if _is_test_env():
        return InMemoryEventRepository(users=get_user_repository())
    return PostgresEventRepository()


# =============================================================================
# Adapters
# =============================================================================


@lru_cache(maxsize=1)
def get_media_storage() -> MediaStoragePort:
    settings = get_settings()
    return LocalFileStorage(
        settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_bytes=settings.max_upload_bytes,
    )


def reset_container() -> None:
    """Descarta singletons (tests)."""
    for factory in (
        get_user_repository,
        get_attendance_repository,
        get_holiday_repository,
        get_thought_repository,
        get_announcement_repository,
        get_hr_policy_repository,
        get_idea_repository,
        get_event_repository,
        get_media_storage,
    ):
        factory.cache_clear()


# =============================================================================
# Casos de uso: principals
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(get_user_repository())


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(get_user_repository())


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_set_user_status_use_case() -> SetUserStatusUseCase:
    return SetUserStatusUseCase(get_user_repository())


def get_list_birthdays_use_case() -> ListBirthdaysUseCase:
    return ListBirthdaysUseCase(get_user_repository())


def get_list_recent_joined_use_case() -> ListRecentJoinedUseCase:
    return ListRecentJoinedUseCase(get_user_repository())


# =============================================================================
# Casos de uso: asistencia
# =============================================================================


def get_check_in_use_case() -> CheckInUseCase:
    return CheckInUseCase(get_attendance_repository())


def get_check_out_use_case() -> CheckOutUseCase:
    return CheckOutUseCase(get_attendance_repository())


def get_daily_status_use_case() -> GetDailyStatusUseCase:
    return GetDailyStatusUseCase(get_attendance_repository())


def get_list_attendance_use_case() -> ListAttendanceUseCase:
    return ListAttendanceUseCase(get_attendance_repository())


# =============================================================================
# Casos de uso: feriados / pensamientos
# =============================================================================


def get_list_holidays_use_case() -> ListHolidaysUseCase:
    return ListHolidaysUseCase(get_holiday_repository())


def get_create_holiday_use_case() -> CreateHolidayUseCase:
    return CreateHolidayUseCase(
        get_holiday_repository(),
        default_branch=get_settings().default_content_branch,
    )


def get_update_holiday_use_case() -> UpdateHolidayUseCase:
    return UpdateHolidayUseCase(get_holiday_repository())


def get_delete_holiday_use_case() -> DeleteHolidayUseCase:
    return DeleteHolidayUseCase(get_holiday_repository())


def get_list_thoughts_in_scope_use_case() -> ListThoughtsInScopeUseCase:
    return ListThoughtsInScopeUseCase(get_thought_repository())


def get_list_branch_thoughts_use_case() -> ListBranchThoughtsUseCase:
    return ListBranchThoughtsUseCase(get_thought_repository())


def get_random_thought_use_case() -> RandomThoughtUseCase:
    return RandomThoughtUseCase(get_thought_repository())


def get_list_thoughts_admin_use_case() -> ListThoughtsAdminUseCase:
    return ListThoughtsAdminUseCase(get_thought_repository())


def get_create_thought_use_case() -> CreateThoughtUseCase:
    return CreateThoughtUseCase(get_thought_repository())


def get_update_thought_use_case() -> UpdateThoughtUseCase:
    return UpdateThoughtUseCase(get_thought_repository())


def get_delete_thought_use_case() -> DeleteThoughtUseCase:
    return DeleteThoughtUseCase(get_thought_repository())


# =============================================================================
# Casos de uso: anuncios / políticas RRHH
# =============================================================================


def get_list_announcements_use_case() -> ListAnnouncementsUseCase:
    return ListAnnouncementsUseCase(get_announcement_repository())


def get_create_announcement_use_case() -> CreateAnnouncementUseCase:
    return CreateAnnouncementUseCase(get_announcement_repository())


def get_delete_announcement_use_case() -> DeleteAnnouncementUseCase:
    return DeleteAnnouncementUseCase(get_announcement_repository())


def get_list_hr_policies_use_case() -> ListHrPoliciesUseCase:
    return ListHrPoliciesUseCase(get_hr_policy_repository())


def get_hr_policy_use_case() -> GetHrPolicyUseCase:
    return GetHrPolicyUseCase(get_hr_policy_repository())


def get_create_hr_policy_use_case() -> CreateHrPolicyUseCase:
    return CreateHrPolicyUseCase(get_hr_policy_repository(), get_user_repository())


def get_update_hr_policy_use_case() -> UpdateHrPolicyUseCase:
    return UpdateHrPolicyUseCase(get_hr_policy_repository())


def get_delete_hr_policy_use_case() -> DeleteHrPolicyUseCase:
    return DeleteHrPolicyUseCase(get_hr_policy_repository())


# =============================================================================
# Casos de uso: ideas
# =============================================================================


def get_list_ideas_use_case() -> ListIdeasUseCase:
    return ListIdeasUseCase(get_idea_repository())


def get_idea_use_case() -> GetIdeaUseCase:
    return GetIdeaUseCase(get_idea_repository())


def get_create_idea_use_case() -> CreateIdeaUseCase:
    return CreateIdeaUseCase(get_idea_repository())


def get_update_idea_use_case() -> UpdateIdeaUseCase:
    return UpdateIdeaUseCase(get_idea_repository())


def get_delete_idea_use_case() -> DeleteIdeaUseCase:
    return DeleteIdeaUseCase(get_idea_repository())


def get_toggle_idea_like_use_case() -> ToggleIdeaLikeUseCase:
    return ToggleIdeaLikeUseCase(get_idea_repository())


def get_add_idea_comment_use_case() -> AddIdeaCommentUseCase:
    return AddIdeaCommentUseCase(get_idea_repository())


def get_delete_idea_comment_use_case() -> DeleteIdeaCommentUseCase:
    return DeleteIdeaCommentUseCase(get_idea_repository())


# =============================================================================
# Casos de uso: eventos
# =============================================================================


def get_list_events_use_case() -> ListEventsUseCase:
    return ListEventsUseCase(get_event_repository())


def get_event_use_case() -> GetEventUseCase:
    return GetEventUseCase(get_event_repository())


def get_create_event_use_case() -> CreateEventUseCase:
    return CreateEventUseCase(
        get_event_repository(),
        get_media_storage(),
        max_images=get_settings().max_event_images,
    )


def get_update_event_use_case() -> UpdateEventUseCase:
    return UpdateEventUseCase(
        get_event_repository(),
        get_media_storage(),
        max_images=get_settings().max_event_images,
    )


def get_delete_event_use_case() -> DeleteEventUseCase:
    return DeleteEventUseCase(get_event_repository(), get_media_storage())
