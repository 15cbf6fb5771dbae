"""Anuncios sobre PostgreSQL (listado, alta y baja física)."""

from __future__ import annotations

from datetime import datetime

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Announcement
from .base import PostgresRepository, Row

_SELECT = """
    SELECT a.id, a.title, a.content, a.priority, a.publish_at, a.expiry_at,
           a.created_by, a.created_at,
           u.first_name AS creator_first_name,
           u.last_name AS creator_last_name
    FROM announcements a
    LEFT JOIN users u ON u.id = a.created_by
"""


def _row_to_announcement(row: Row) -> Announcement:
    return Announcement(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        priority=row["priority"],
        publish_at=row["publish_at"],
        expiry_at=row["expiry_at"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        creator_first_name=row.get("creator_first_name"),
        creator_last_name=row.get("creator_last_name"),
    )


class PostgresAnnouncementRepository(PostgresRepository):
    def list_announcements(self) -> list[Announcement]:
        rows = self._fetchall(
            query=f"{_SELECT} ORDER BY a.created_at DESC, a.id DESC",
            log_msg="PostgresAnnouncementRepository: list failed",
            log_extra={},
        )
        return [_row_to_announcement(r) for r in rows]

    def create_announcement(
        self,
        *,
        title: str,
        content: str,
        priority: str,
        publish_at: datetime | None,
        expiry_at: datetime | None,
        created_by: int,
    ) -> Announcement:
        row = self._fetchone(
            query="""
                INSERT INTO announcements (title, content, priority, publish_at, expiry_at, created_by)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING id
            """,
            params=(title, content, priority, publish_at, expiry_at, created_by),
            log_msg="PostgresAnnouncementRepository: create failed",
            log_extra={"priority": priority},
        )
        if not row:
            raise DatabaseError("PostgresAnnouncementRepository: insert returned no row")
        created = self._fetchone(
            query=f"{_SELECT} WHERE a.id = %s",
            params=(row["id"],),
            log_msg="PostgresAnnouncementRepository: reload failed",
            log_extra={"announcement_id": row["id"]},
        )
        if not created:
            raise DatabaseError("PostgresAnnouncementRepository: created row not found")
        return _row_to_announcement(created)

    def delete_announcement(self, announcement_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM announcements WHERE id = %s",
            params=(announcement_id,),
            log_msg="PostgresAnnouncementRepository: delete failed",
            log_extra={"announcement_id": announcement_id},
        )
        return count > 0
