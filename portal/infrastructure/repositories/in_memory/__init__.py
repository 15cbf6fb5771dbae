"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .attendance import InMemoryAttendanceRepository
from .content import (
    InMemoryAnnouncementRepository,
    InMemoryHolidayRepository,
    InMemoryHrPolicyRepository,
    InMemoryThoughtRepository,
)
from .event import InMemoryEventRepository
from .idea import InMemoryIdeaRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryAttendanceRepository",
    "InMemoryHolidayRepository",
    "InMemoryThoughtRepository",
    "InMemoryAnnouncementRepository",
    "InMemoryHrPolicyRepository",
    "InMemoryIdeaRepository",
    "InMemoryEventRepository",
]
