"""
TARJETA CRC — infrastructure/repositories/postgres/thought.py

Class: PostgresThoughtRepository

Responsibilities:
  - Persistir "pensamientos del día" por sucursal.
  - Listar activos / elegir uno al azar dentro de las sucursales visibles.
  - Baja lógica (is_active = false).
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Thought
from .base import PostgresRepository, Row

_SELECT = """
    SELECT t.id, t.content, t.author, t.branch, t.is_active, t.created_by, t.created_at,
           u.first_name AS creator_first_name,
           u.last_name AS creator_last_name
    FROM thoughts t
    LEFT JOIN users u ON u.id = t.created_by
"""


def _row_to_thought(row: Row) -> Thought:
    return Thought(
        id=row["id"],
        content=row["content"],
        author=row["author"],
        branch=row["branch"],
        is_active=bool(row["is_active"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        creator_first_name=row.get("creator_first_name"),
        creator_last_name=row.get("creator_last_name"),
    )


class PostgresThoughtRepository(PostgresRepository):
    def list_active(self, *, branches: list[str] | None) -> list[Thought]:
        params: list[object] = []
        branch_sql = ""
        if branches is not None:
            branch_sql = "AND t.branch = ANY(%s)"
            params.append(list(branches))
        rows = self._fetchall(
            query=f"""
                {_SELECT}
                WHERE t.is_active = TRUE {branch_sql}
                ORDER BY t.created_at DESC, t.id DESC
            """,
            params=params,
            log_msg="PostgresThoughtRepository: list_active failed",
            log_extra={"branches": branches or []},
        )
        return [_row_to_thought(r) for r in rows]

    def random_active(self, *, branches: list[str]) -> Thought | None:
        row = self._fetchone(
            query=f"""
                {_SELECT}
                WHERE t.is_active = TRUE AND t.branch = ANY(%s)
                ORDER BY random()
                LIMIT 1
            """,
            params=(list(branches),),
            log_msg="PostgresThoughtRepository: random_active failed",
            log_extra={"branches": branches},
        )
        return _row_to_thought(row) if row else None

    def get_thought(self, thought_id: int) -> Thought | None:
        row = self._fetchone(
            query=f"{_SELECT} WHERE t.id = %s",
            params=(thought_id,),
            log_msg="PostgresThoughtRepository: get_thought failed",
            log_extra={"thought_id": thought_id},
        )
        return _row_to_thought(row) if row else None

    def create_thought(
        self, *, content: str, author: str, branch: str, created_by: int
    ) -> Thought:
        row = self._fetchone(
            query="""
                INSERT INTO thoughts (content, author, branch, created_by, is_active)
                VALUES (%s, %s, %s, %s, TRUE)
                RETURNING id
            """,
            params=(content, author, branch, created_by),
            log_msg="PostgresThoughtRepository: create_thought failed",
            log_extra={"branch": branch},
        )
        created = self.get_thought(row["id"]) if row else None
        if created is None:
            raise DatabaseError("PostgresThoughtRepository: insert returned no row")
        return created

    def update_thought(
        self, thought_id: int, *, content: str, author: str
    ) -> Thought | None:
        count = self._execute(
            query="UPDATE thoughts SET content = %s, author = %s WHERE id = %s",
            params=(content, author, thought_id),
            log_msg="PostgresThoughtRepository: update_thought failed",
            log_extra={"thought_id": thought_id},
        )
        return self.get_thought(thought_id) if count else None

    def deactivate_thought(self, thought_id: int) -> bool:
        count = self._execute(
            query="UPDATE thoughts SET is_active = FALSE WHERE id = %s",
            params=(thought_id,),
            log_msg="PostgresThoughtRepository: deactivate_thought failed",
            log_extra={"thought_id": thought_id},
        )
        return count > 0
