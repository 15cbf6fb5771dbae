"""
===============================================================================
TARJETA CRC — routers/__init__.py
===============================================================================

Responsabilidades:
  - Exponer sub-routers por feature para que router.py los componga.

Colaboradores:
  - auth / attendance / holidays / thoughts / announcements / hr / ideas / events
===============================================================================
"""

from .announcements import router as announcements_router
from .attendance import router as attendance_router
from .auth import router as auth_router
from .events import router as events_router
from .holidays import router as holidays_router
from .hr import router as hr_router
from .ideas import router as ideas_router
from .thoughts import router as thoughts_router

__all__ = [
    "announcements_router",
    "attendance_router",
    "auth_router",
    "events_router",
    "holidays_router",
    "hr_router",
    "ideas_router",
    "thoughts_router",
]
