"""
===============================================================================
USE CASES PACKAGE (Public API / Exports)
===============================================================================

Punto único de importación de los casos de uso del portal y de los
modelos de resultado compartidos.
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------
from .results import ServiceError, ServiceErrorCode, ServiceResult

# -----------------------------------------------------------------------------
# Principals
# -----------------------------------------------------------------------------
from .users import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    ListBirthdaysUseCase,
    ListRecentJoinedUseCase,
    ListUsersUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    SetUserStatusUseCase,
)

# -----------------------------------------------------------------------------
# Attendance
# -----------------------------------------------------------------------------
from .attendance import (
    CheckInUseCase,
    CheckOutUseCase,
    GetDailyStatusUseCase,
    ListAttendanceUseCase,
)

# -----------------------------------------------------------------------------
# Branch-scoped content
# -----------------------------------------------------------------------------
from .holidays import (
    CreateHolidayUseCase,
    DeleteHolidayUseCase,
    HolidayInput,
    HolidayListing,
    ListHolidaysUseCase,
    UpdateHolidayUseCase,
)
from .thoughts import (
    CreateThoughtUseCase,
    DeleteThoughtUseCase,
    ListBranchThoughtsUseCase,
    ListThoughtsAdminUseCase,
    ListThoughtsInScopeUseCase,
    RandomThoughtUseCase,
    ThoughtInput,
    UpdateThoughtUseCase,
)

# -----------------------------------------------------------------------------
# Company-wide content
# -----------------------------------------------------------------------------
from .announcements import (
    AnnouncementInput,
    CreateAnnouncementUseCase,
    DeleteAnnouncementUseCase,
    ListAnnouncementsUseCase,
)
from .hr_policies import (
    CreateHrPolicyUseCase,
    DeleteHrPolicyUseCase,
    GetHrPolicyUseCase,
    HrPolicyInput,
    ListHrPoliciesUseCase,
    UpdateHrPolicyUseCase,
)
from .ideas import (
    AddIdeaCommentUseCase,
    CreateIdeaUseCase,
    DeleteIdeaCommentUseCase,
    DeleteIdeaUseCase,
    GetIdeaUseCase,
    ListIdeasUseCase,
    ToggleIdeaLikeUseCase,
    UpdateIdeaUseCase,
)
from .events import (
    CreateEventUseCase,
    DeleteEventUseCase,
    EventInput,
    GetEventUseCase,
    ListEventsUseCase,
    UpdateEventUseCase,
)

__all__ = [
    # Results
    "ServiceError",
    "ServiceErrorCode",
    "ServiceResult",
    # Principals
    "RegisterUserInput",
    "RegisterUserUseCase",
    "GetCurrentUserUseCase",
    "ChangePasswordUseCase",
    "ListUsersUseCase",
    "SetUserStatusUseCase",
    "ListBirthdaysUseCase",
    "ListRecentJoinedUseCase",
    # Attendance
    "CheckInUseCase",
    "CheckOutUseCase",
    "GetDailyStatusUseCase",
    "ListAttendanceUseCase",
    # Holidays
    "HolidayInput",
    "HolidayListing",
    "ListHolidaysUseCase",
    "CreateHolidayUseCase",
    "UpdateHolidayUseCase",
    "DeleteHolidayUseCase",
    # Thoughts
    "ThoughtInput",
    "ListThoughtsInScopeUseCase",
    "ListBranchThoughtsUseCase",
    "RandomThoughtUseCase",
    "ListThoughtsAdminUseCase",
    "CreateThoughtUseCase",
    "UpdateThoughtUseCase",
    "DeleteThoughtUseCase",
    # Announcements
    "AnnouncementInput",
    "ListAnnouncementsUseCase",
    "CreateAnnouncementUseCase",
    "DeleteAnnouncementUseCase",
    # HR policies
    "HrPolicyInput",
    "ListHrPoliciesUseCase",
    "GetHrPolicyUseCase",
    "CreateHrPolicyUseCase",
    "UpdateHrPolicyUseCase",
    "DeleteHrPolicyUseCase",
    # Ideas
    "ListIdeasUseCase",
    "GetIdeaUseCase",
    "CreateIdeaUseCase",
    "UpdateIdeaUseCase",
    "DeleteIdeaUseCase",
    "ToggleIdeaLikeUseCase",
    "AddIdeaCommentUseCase",
    "DeleteIdeaCommentUseCase",
    # Events
    "EventInput",
    "ListEventsUseCase",
    "GetEventUseCase",
    "CreateEventUseCase",
    "UpdateEventUseCase",
    "DeleteEventUseCase",
]
