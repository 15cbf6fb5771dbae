"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Responsibilities:
  - Acceso al pool global (inyectable para tests).
  - Ejecutar SQL parametrizado con manejo de errores consistente:
      * UniqueViolation se re-lanza intacta (el repo la traduce a dominio).
      * Cualquier otra falla -> logger.exception + DatabaseError.
  - Devolver filas como dict (psycopg dict_row) para mappings legibles.

Collaborators:
  - psycopg / psycopg_pool
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError

Constraints:
  - SQL parametrizado siempre (%s); nunca interpolar input de usuario.
  - Sin reintentos: una escritura fallida se reporta de inmediato.
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from psycopg import Connection
from psycopg.errors import UniqueViolation
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger

Row = dict[str, Any]


@contextmanager
def _guarded(log_msg: str, log_extra: dict[str, object]) -> Iterator[None]:
    """UniqueViolation y DatabaseError pasan; el resto se loguea y se envuelve."""
    try:
        yield
    except (UniqueViolation, DatabaseError):
        raise
    except Exception as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc


class PostgresRepository:
    """Base de los repositorios Postgres; sin pool explícito usa el del proceso."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _connection(self):
        return self._get_pool().connection()

    @contextmanager
    def _transaction(
        self, *, log_msg: str, log_extra: dict[str, object]
    ) -> Iterator[Connection]:
        """Transacción explícita para escrituras de varias sentencias."""
        with _guarded(log_msg, log_extra):
            with self._connection() as conn, conn.transaction():
                yield conn

    def _query(self, query: str, params: Iterable[object], fetch: str) -> Any:
        with self._connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, tuple(params))
                if fetch == "one":
                    return cur.fetchone()
                if fetch == "all":
                    return cur.fetchall()
                return cur.rowcount

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> Row | None:
        with _guarded(log_msg, log_extra):
            return self._query(query, params, "one")

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> list[Row]:
        with _guarded(log_msg, log_extra):
            return self._query(query, params, "all")

    def _execute(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> int:
        """UPDATE/DELETE; devuelve rowcount."""
        with _guarded(log_msg, log_extra):
            return self._query(query, params, "count")

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1 AS ok",
            log_msg="PostgresRepository: ping failed",
            log_extra={},
        )
        return bool(row and row.get("ok") == 1)


def constraint_name(exc: UniqueViolation) -> str:
    """Nombre del constraint violado (o '' si el driver no lo informa)."""
    diag = getattr(exc, "diag", None)
    return (getattr(diag, "constraint_name", None) or "") if diag else ""
