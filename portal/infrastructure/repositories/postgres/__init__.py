"""
PostgreSQL Repository Implementations.

Production implementations using psycopg 3 (raw, parameterized SQL).
"""

from .announcement import PostgresAnnouncementRepository
from .attendance import PostgresAttendanceRepository
from .base import PostgresRepository
from .event import PostgresEventRepository
from .holiday import PostgresHolidayRepository
from .hr_policy import PostgresHrPolicyRepository
from .idea import PostgresIdeaRepository
from .thought import PostgresThoughtRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresRepository",
    "PostgresUserRepository",
    "PostgresAttendanceRepository",
    "PostgresHolidayRepository",
    "PostgresThoughtRepository",
    "PostgresAnnouncementRepository",
    "PostgresHrPolicyRepository",
    "PostgresIdeaRepository",
    "PostgresEventRepository",
]
