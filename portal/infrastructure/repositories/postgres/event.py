"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/event.py
============================================================
Class: PostgresEventRepository

Responsibilities:
  - Persistir eventos y su galería (event_images).
  - Alta/actualización de evento + imágenes en una misma transacción.
  - Lectura con galería agregada (array_agg ordenado por posición).

Collaborators:
  - PostgresRepository
  - domain.entities.Event

Constraints / Notes:
  - La galería se deduplica al leer (preservando orden).
  - Updates parciales via allowlist `_UPDATABLE`; nuevas imágenes se anexan.
============================================================
"""

from __future__ import annotations

from psycopg import Connection

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Event, unique_in_order
from .base import PostgresRepository, Row

_SELECT = """
    SELECT e.id, e.title, e.description, e.event_date, e.event_time, e.location,
           e.image_url, e.created_by, e.created_at,
           u.first_name AS creator_first_name,
           u.last_name AS creator_last_name,
           COALESCE(
               (SELECT array_agg(ei.image_url ORDER BY ei.position, ei.id)
                FROM event_images ei WHERE ei.event_id = e.id),
               ARRAY[]::text[]
           ) AS images
    FROM events e
    LEFT JOIN users u ON u.id = e.created_by
"""

_UPDATABLE = ("title", "description", "event_date", "event_time", "location", "image_url")


def _row_to_event(row: Row) -> Event:
    return Event(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        event_date=row["event_date"],
        event_time=row["event_time"],
        location=row["location"],
        image_url=row["image_url"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        creator_first_name=row.get("creator_first_name"),
        creator_last_name=row.get("creator_last_name"),
        images=unique_in_order(list(row.get("images") or [])),
    )


def _append_images(conn: Connection, event_id: int, images: list[str]) -> None:
    if not images:
        return
    row = conn.execute(
        "SELECT COALESCE(MAX(position), -1) FROM event_images WHERE event_id = %s",
        (event_id,),
    ).fetchone()
    start = (row[0] if row else -1) + 1
    with conn.cursor() as cur:
        cur.executemany(
            "INSERT INTO event_images (event_id, image_url, position) VALUES (%s, %s, %s)",
            [(event_id, url, start + i) for i, url in enumerate(images)],
        )


class PostgresEventRepository(PostgresRepository):
    def list_events(self) -> list[Event]:
        rows = self._fetchall(
            query=f"{_SELECT} ORDER BY e.event_date DESC, e.id DESC",
            log_msg="PostgresEventRepository: list_events failed",
            log_extra={},
        )
        return [_row_to_event(r) for r in rows]

    def get_event(self, event_id: int) -> Event | None:
        row = self._fetchone(
            query=f"{_SELECT} WHERE e.id = %s",
            params=(event_id,),
            log_msg="PostgresEventRepository: get_event failed",
            log_extra={"event_id": event_id},
        )
        return _row_to_event(row) if row else None

    def create_event(self, event: Event, images: list[str]) -> Event:
        with self._transaction(
            log_msg="PostgresEventRepository: create_event failed",
            log_extra={"images": len(images)},
        ) as conn:
            row = conn.execute(
                """
                INSERT INTO events (
                    title, description, event_date, event_time, location, image_url, created_by
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    event.title,
                    event.description,
                    event.event_date,
                    event.event_time,
                    event.location,
                    event.image_url,
                    event.created_by,
                ),
            ).fetchone()
            if not row:
                raise DatabaseError("PostgresEventRepository: insert returned no row")
            event_id = row[0]
            _append_images(conn, event_id, images)

        created = self.get_event(event_id)
        if created is None:
            raise DatabaseError("PostgresEventRepository: created row not found")
        return created

    def update_event(
        self, event_id: int, changes: dict[str, object], new_images: list[str]
    ) -> Event | None:
        columns = [c for c in _UPDATABLE if c in changes]
        with self._transaction(
            log_msg="PostgresEventRepository: update_event failed",
            log_extra={"event_id": event_id, "columns": columns},
        ) as conn:
            exists = conn.execute(
                "SELECT 1 FROM events WHERE id = %s FOR UPDATE", (event_id,)
            ).fetchone()
            if not exists:
                return None
            if columns:
                assignments = ", ".join(f"{c} = %s" for c in columns)
                conn.execute(
                    f"UPDATE events SET {assignments} WHERE id = %s",
                    [changes[c] for c in columns] + [event_id],
                )
            _append_images(conn, event_id, new_images)

        return self.get_event(event_id)

    def delete_event(self, event_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM events WHERE id = %s",
            params=(event_id,),
            log_msg="PostgresEventRepository: delete_event failed",
            log_extra={"event_id": event_id},
        )
        return count > 0
