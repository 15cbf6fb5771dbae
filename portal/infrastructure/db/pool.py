"""
===============================================================================
TARJETA CRC — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool psycopg del proceso (uno solo, abierto en el lifespan de la app)

Responsabilidades:
  - init_pool / get_pool / close_pool para el ciclo de vida de la API.
  - statement_timeout por conexión vía `options` del conninfo.
  - reset_pool() para tests (descarta el singleton aunque close falle).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config (db_statement_timeout_ms)
  - infrastructure.db.errors

Restricciones:
  - Doble init o uso sin init fallan con errores tipados.
===============================================================================
"""

from __future__ import annotations

import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

POOL_NAME = "portal-db"

_lock = threading.Lock()
_state: dict[str, ConnectionPool] = {}


def _statement_timeout_ms() -> int:
    from ...crosscutting.config import get_settings

    return int(get_settings().db_statement_timeout_ms)


def _connection_kwargs(statement_timeout_ms: int) -> dict[str, object]:
    if statement_timeout_ms <= 0:
        return {}
    return {"options": f"-c statement_timeout={statement_timeout_ms}"}


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int | None = None,
) -> ConnectionPool:
    """Abre el pool del proceso. Llamarlo dos veces es un error."""
    timeout = (
        _statement_timeout_ms() if statement_timeout_ms is None else statement_timeout_ms
    )
    with _lock:
        if POOL_NAME in _state:
            raise PoolAlreadyInitializedError("DB pool already initialized.")

        pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            kwargs=_connection_kwargs(timeout),
            name=POOL_NAME,
            open=True,
        )
        _state[POOL_NAME] = pool

    logger.info(
        "Pool DB abierto",
        extra={"min_size": min_size, "max_size": max_size, "statement_timeout_ms": timeout},
    )
    return pool


def get_pool() -> ConnectionPool:
    pool = _state.get(POOL_NAME)
    if pool is None:
        raise PoolNotInitializedError("DB pool not initialized; call init_pool().")
    return pool


def close_pool() -> None:
    """Cierra el pool si está abierto."""
    with _lock:
        pool = _state.pop(POOL_NAME, None)
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")


def reset_pool() -> None:
    with _lock:
        pool = _state.pop(POOL_NAME, None)
    if pool is None:
        return
    try:
        pool.close()
    except Exception as exc:
        logger.warning("reset_pool: close falló", extra={"error": str(exc)})
