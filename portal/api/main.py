"""
===============================================================================
TARJETA CRC — portal/api/main.py
===============================================================================

Componente:
  Aplicación FastAPI del portal (create_app + instancia `app`)

Responsabilidades:
  - Lifespan: crear el directorio de uploads y abrir/cerrar el pool psycopg.
  - Middlewares: contexto de request (X-Request-Id) y CORS.
  - Montar el router bajo /api y servir los archivos de galerías.
  - GET /healthz con el estado de la DB.

Colaboradores:
  - crosscutting.config / crosscutting.middleware / crosscutting.logger
  - interfaces.api.http.router
  - api.exception_handlers

Notas:
  - Con APP_ENV=test no se abre el pool: el container usa repos en memoria.
  - Starlette ejecuta primero el último middleware agregado (CORS).
===============================================================================
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ..container import get_user_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

_TAGS = [
    ("auth", "Login, registro y administración de usuarios (JWT)"),
    ("attendance", "Sesiones de check-in / check-out"),
    ("holidays", "Feriados por sucursal"),
    ("thoughts", "Pensamiento del día por sucursal"),
    ("announcements", "Comunicados de la empresa"),
    ("hr", "Políticas de RR.HH."),
    ("ideas", "Buzón de ideas con likes y comentarios"),
    ("events", "Eventos con galería de imágenes"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    os.makedirs(settings.upload_dir, exist_ok=True)

    pooled = not settings.is_test()
    if pooled:
        init_pool(
            settings.database_url,
            settings.db_pool_min_size,
            settings.db_pool_max_size,
        )
    logger.info(
        "Portal API iniciada",
        extra={"app_env": settings.app_env, "pooled": pooled},
    )
    try:
        yield
    finally:
        if pooled:
            close_pool()
        logger.info("Portal API detenida")


def _install_middlewares(app: FastAPI, settings: Settings | None) -> None:
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=(
            settings.get_allowed_origins_list() if settings else ["http://localhost:3000"]
        ),
        allow_credentials=settings.cors_allow_credentials if settings else False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )


def _mount_uploads(app: FastAPI, settings: Settings | None) -> None:
    if settings is None:
        logger.warning("Sin settings: no se montan los uploads")
        return
    # check_dir=False: el lifespan crea el directorio
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )


def _load_settings() -> Settings | None:
    try:
        return get_settings()
    except Exception as exc:
        # p.ej. herramientas que importan la app sin DATABASE_URL
        logger.warning("Settings no disponibles al importar", extra={"error": str(exc)})
        return None


def create_app() -> FastAPI:
    settings = _load_settings()
    app = FastAPI(
        title="Company Portal API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[{"name": n, "description": d} for n, d in _TAGS],
    )
    _install_middlewares(app, settings)
    app.include_router(router, prefix="/api")
    _mount_uploads(app, settings)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz(request: Request) -> dict:
        """{ok, db: connected|disconnected, request_id}."""
        try:
            reachable = bool(get_user_repository().ping())
        except Exception as exc:
            logger.warning("healthz: DB no responde", extra={"error": str(exc)})
            reachable = False
        return {
            "ok": reachable,
            "db": "connected" if reachable else "disconnected",
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
