"""
============================================================
TARJETA CRC
============================================================
Class: portal.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo, psycopg 3)
- Repositorios InMemory (tests / dev local)
============================================================
"""

from .in_memory import (
    InMemoryAnnouncementRepository,
    InMemoryAttendanceRepository,
    InMemoryEventRepository,
    InMemoryHolidayRepository,
    InMemoryHrPolicyRepository,
    InMemoryIdeaRepository,
    InMemoryThoughtRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresAnnouncementRepository,
    PostgresAttendanceRepository,
    PostgresEventRepository,
    PostgresHolidayRepository,
    PostgresHrPolicyRepository,
    PostgresIdeaRepository,
    PostgresThoughtRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresUserRepository",
    "PostgresAttendanceRepository",
    "PostgresHolidayRepository",
    "PostgresThoughtRepository",
    "PostgresAnnouncementRepository",
    "PostgresHrPolicyRepository",
    "PostgresIdeaRepository",
    "PostgresEventRepository",
    # In-memory
    "InMemoryUserRepository",
    "InMemoryAttendanceRepository",
    "InMemoryHolidayRepository",
    "InMemoryThoughtRepository",
    "InMemoryAnnouncementRepository",
    "InMemoryHrPolicyRepository",
    "InMemoryIdeaRepository",
    "InMemoryEventRepository",
]
