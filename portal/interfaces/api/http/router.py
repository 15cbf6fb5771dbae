"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses de error (envelope) para OpenAPI.
  - Componer routers por feature.

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects al importar.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Este router se incluye desde portal/api/main.py con prefix="/api".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import (
    announcements_router,
    attendance_router,
    auth_router,
    events_router,
    holidays_router,
    hr_router,
    ideas_router,
    thoughts_router,
)


def build_router() -> APIRouter:
    """Construye el router raíz /api."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    # Identidad y asistencia primero; contenido después.
    api_router.include_router(auth_router)
    api_router.include_router(attendance_router)
    api_router.include_router(announcements_router)
    api_router.include_router(events_router)
    api_router.include_router(holidays_router)
    api_router.include_router(hr_router)
    api_router.include_router(ideas_router)
    api_router.include_router(thoughts_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
