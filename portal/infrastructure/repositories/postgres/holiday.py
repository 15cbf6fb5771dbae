"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/holiday.py
============================================================
Class: PostgresHolidayRepository

Responsibilities:
  - CRUD de feriados por sucursal.
  - Listado filtrado por año y por conjunto de sucursales visibles.
  - Join con users para datos del creador.

Collaborators:
  - PostgresRepository
  - domain.entities.Holiday

Constraints / Notes:
  - El filtro de sucursal llega resuelto (None = sin filtro).
  - Orden: date ASC.
============================================================
"""

from __future__ import annotations

from datetime import date

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Holiday
from .base import PostgresRepository, Row

_SELECT = """
    SELECT h.id, h.name, h.date, h.description, h.branch, h.created_by, h.created_at,
           u.first_name AS creator_first_name,
           u.last_name AS creator_last_name,
           u.email AS creator_email
    FROM holidays h
    LEFT JOIN users u ON u.id = h.created_by
"""


def _row_to_holiday(row: Row) -> Holiday:
    return Holiday(
        id=row["id"],
        name=row["name"],
        date=row["date"],
        description=row["description"],
        branch=row["branch"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        creator_first_name=row.get("creator_first_name"),
        creator_last_name=row.get("creator_last_name"),
        creator_email=row.get("creator_email"),
    )


class PostgresHolidayRepository(PostgresRepository):
    def list_holidays(
        self, *, year: int | None, branches: list[str] | None
    ) -> list[Holiday]:
        clauses: list[str] = []
        params: list[object] = []
        if year is not None:
            clauses.append("EXTRACT(YEAR FROM h.date) = %s")
            params.append(year)
        if branches is not None:
            clauses.append("h.branch = ANY(%s)")
            params.append(list(branches))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._fetchall(
            query=f"{_SELECT} {where} ORDER BY h.date ASC, h.id ASC",
            params=params,
            log_msg="PostgresHolidayRepository: list_holidays failed",
            log_extra={"year": year},
        )
        return [_row_to_holiday(r) for r in rows]

    def get_holiday(self, holiday_id: int) -> Holiday | None:
        row = self._fetchone(
            query=f"{_SELECT} WHERE h.id = %s",
            params=(holiday_id,),
            log_msg="PostgresHolidayRepository: get_holiday failed",
            log_extra={"holiday_id": holiday_id},
        )
        return _row_to_holiday(row) if row else None

    def create_holiday(
        self,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
        created_by: int,
    ) -> Holiday:
        row = self._fetchone(
            query="""
                INSERT INTO holidays (name, date, description, branch, created_by)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id
            """,
            params=(name, day, description, branch, created_by),
            log_msg="PostgresHolidayRepository: create_holiday failed",
            log_extra={"branch": branch},
        )
        if not row:
            raise DatabaseError("PostgresHolidayRepository: insert returned no row")
        created = self.get_holiday(row["id"])
        if created is None:
            raise DatabaseError("PostgresHolidayRepository: created row not found")
        return created

    def update_holiday(
        self,
        holiday_id: int,
        *,
        name: str,
        day: date,
        description: str | None,
        branch: str,
    ) -> Holiday | None:
        count = self._execute(
            query="""
                UPDATE holidays
                SET name = %s, date = %s, description = %s, branch = %s
                WHERE id = %s
            """,
            params=(name, day, description, branch, holiday_id),
            log_msg="PostgresHolidayRepository: update_holiday failed",
            log_extra={"holiday_id": holiday_id},
        )
        if count == 0:
            return None
        return self.get_holiday(holiday_id)

    def delete_holiday(self, holiday_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM holidays WHERE id = %s",
            params=(holiday_id,),
            log_msg="PostgresHolidayRepository: delete_holiday failed",
            log_extra={"holiday_id": holiday_id},
        )
        return count > 0
