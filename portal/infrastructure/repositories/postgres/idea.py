"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/idea.py
============================================================
Class: PostgresIdeaRepository

Responsibilities:
  - CRUD de ideas (muro de ideas de empleados).
  - Contadores de likes/comentarios y flag `is_liked` para el viewer.
  - Toggle de like en una transacción (DELETE o INSERT ... ON CONFLICT).
  - Comentarios (alta, lectura, baja).

Collaborators:
  - PostgresRepository
  - domain.entities.Idea / IdeaComment

Constraints / Notes:
  - Borrar una idea borra likes y comentarios (ON DELETE CASCADE).
  - `uq_idea_likes_idea_user` evita likes duplicados aun con carreras.
============================================================
"""

from __future__ import annotations

from psycopg.rows import dict_row

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Idea, IdeaComment
from .base import PostgresRepository, Row

_IDEA_SELECT = """
    SELECT i.id, i.user_id, i.title, i.content, i.created_at,
           u.first_name, u.last_name, u.position,
           (SELECT COUNT(*) FROM idea_likes l WHERE l.idea_id = i.id) AS likes_count,
           (SELECT COUNT(*) FROM idea_comments c WHERE c.idea_id = i.id) AS comments_count,
           EXISTS (
               SELECT 1 FROM idea_likes l WHERE l.idea_id = i.id AND l.user_id = %s
           ) AS is_liked
    FROM ideas i
    JOIN users u ON u.id = i.user_id
"""

_COMMENT_SELECT = """
    SELECT c.id, c.idea_id, c.user_id, c.comment, c.created_at,
           u.first_name, u.last_name
    FROM idea_comments c
    JOIN users u ON u.id = c.user_id
"""


def _row_to_idea(row: Row) -> Idea:
    return Idea(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        content=row["content"],
        created_at=row["created_at"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        position=row["position"],
        likes_count=int(row["likes_count"] or 0),
        comments_count=int(row["comments_count"] or 0),
        is_liked=bool(row["is_liked"]),
    )


def _row_to_comment(row: Row) -> IdeaComment:
    return IdeaComment(
        id=row["id"],
        idea_id=row["idea_id"],
        user_id=row["user_id"],
        comment=row["comment"],
        created_at=row["created_at"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
    )


class PostgresIdeaRepository(PostgresRepository):
    def list_ideas(self, *, viewer_id: int) -> list[Idea]:
        rows = self._fetchall(
            query=f"{_IDEA_SELECT} ORDER BY i.created_at DESC, i.id DESC",
            params=(viewer_id,),
            log_msg="PostgresIdeaRepository: list_ideas failed",
            log_extra={"viewer_id": viewer_id},
        )
        return [_row_to_idea(r) for r in rows]

    def get_idea(self, idea_id: int, *, viewer_id: int) -> Idea | None:
        row = self._fetchone(
            query=f"{_IDEA_SELECT} WHERE i.id = %s",
            params=(viewer_id, idea_id),
            log_msg="PostgresIdeaRepository: get_idea failed",
            log_extra={"idea_id": idea_id},
        )
        if not row:
            return None

        idea = _row_to_idea(row)
        comment_rows = self._fetchall(
            query=f"{_COMMENT_SELECT} WHERE c.idea_id = %s ORDER BY c.created_at ASC, c.id ASC",
            params=(idea_id,),
            log_msg="PostgresIdeaRepository: list comments failed",
            log_extra={"idea_id": idea_id},
        )
        idea.comments = [_row_to_comment(r) for r in comment_rows]
        return idea

    def create_idea(self, *, user_id: int, title: str, content: str) -> Idea:
        row = self._fetchone(
            query="""
                INSERT INTO ideas (user_id, title, content)
                VALUES (%s, %s, %s)
                RETURNING id
            """,
            params=(user_id, title, content),
            log_msg="PostgresIdeaRepository: create_idea failed",
            log_extra={"user_id": user_id},
        )
        created = self.get_idea(row["id"], viewer_id=user_id) if row else None
        if created is None:
            raise DatabaseError("PostgresIdeaRepository: insert returned no row")
        return created

    def update_idea(self, idea_id: int, *, title: str, content: str) -> bool:
        count = self._execute(
            query="UPDATE ideas SET title = %s, content = %s WHERE id = %s",
            params=(title, content, idea_id),
            log_msg="PostgresIdeaRepository: update_idea failed",
            log_extra={"idea_id": idea_id},
        )
        return count > 0

    def delete_idea(self, idea_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM ideas WHERE id = %s",
            params=(idea_id,),
            log_msg="PostgresIdeaRepository: delete_idea failed",
            log_extra={"idea_id": idea_id},
        )
        return count > 0

    def toggle_like(self, idea_id: int, *, user_id: int) -> bool:
        with self._transaction(
            log_msg="PostgresIdeaRepository: toggle_like failed",
            log_extra={"idea_id": idea_id, "user_id": user_id},
        ) as conn:
            deleted = conn.execute(
                "DELETE FROM idea_likes WHERE idea_id = %s AND user_id = %s",
                (idea_id, user_id),
            )
            if deleted.rowcount:
                return False
            conn.execute(
                """
                INSERT INTO idea_likes (idea_id, user_id)
                VALUES (%s, %s)
                ON CONFLICT (idea_id, user_id) DO NOTHING
                """,
                (idea_id, user_id),
            )
            return True

    def add_comment(self, idea_id: int, *, user_id: int, comment: str) -> IdeaComment:
        with self._transaction(
            log_msg="PostgresIdeaRepository: add_comment failed",
            log_extra={"idea_id": idea_id, "user_id": user_id},
        ) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO idea_comments (idea_id, user_id, comment)
                    VALUES (%s, %s, %s)
                    RETURNING id
                    """,
                    (idea_id, user_id, comment),
                )
                inserted = cur.fetchone()
                cur.execute(f"{_COMMENT_SELECT} WHERE c.id = %s", (inserted["id"],))
                row = cur.fetchone()
        if not row:
            raise DatabaseError("PostgresIdeaRepository: comment insert returned no row")
        return _row_to_comment(row)

    def get_comment(self, comment_id: int) -> IdeaComment | None:
        row = self._fetchone(
            query=f"{_COMMENT_SELECT} WHERE c.id = %s",
            params=(comment_id,),
            log_msg="PostgresIdeaRepository: get_comment failed",
            log_extra={"comment_id": comment_id},
        )
        return _row_to_comment(row) if row else None

    def delete_comment(self, comment_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM idea_comments WHERE id = %s",
            params=(comment_id,),
            log_msg="PostgresIdeaRepository: delete_comment failed",
            log_extra={"comment_id": comment_id},
        )
        return count > 0
