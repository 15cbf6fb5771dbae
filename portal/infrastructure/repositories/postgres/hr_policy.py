"""
TARJETA CRC — infrastructure/repositories/postgres/hr_policy.py

Class: PostgresHrPolicyRepository

Responsibilities:
  - CRUD de políticas de RRHH.
  - Updates parciales: solo las columnas de la allowlist `_UPDATABLE`.
  - updated_at se refresca en cada update.

Notes:
  - Orden del listado: effective_date DESC (NULLs al final), created_at DESC.
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import HrPolicy
from .base import PostgresRepository, Row

_SELECT = """
    SELECT p.id, p.title, p.category, p.description, p.content, p.version,
           p.effective_date, p.prepared_by, p.approved_by, p.status,
           p.created_by, p.created_at, p.updated_at,
           u.first_name AS creator_first_name,
           u.last_name AS creator_last_name
    FROM hr_policies p
    LEFT JOIN users u ON u.id = p.created_by
"""

# R: allowlist de columnas editables (los nombres nunca vienen del request).
_UPDATABLE = (
    "title",
    "category",
    "description",
    "content",
    "version",
    "effective_date",
    "prepared_by",
    "approved_by",
    "status",
)


def _row_to_policy(row: Row) -> HrPolicy:
    return HrPolicy(
        id=row["id"],
        title=row["title"],
        category=row["category"],
        description=row["description"],
        content=row["content"],
        version=row["version"],
        effective_date=row["effective_date"],
        prepared_by=row["prepared_by"],
        approved_by=row["approved_by"],
        status=row["status"],
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        creator_first_name=row.get("creator_first_name"),
        creator_last_name=row.get("creator_last_name"),
    )


class PostgresHrPolicyRepository(PostgresRepository):
    def list_policies(self) -> list[HrPolicy]:
        rows = self._fetchall(
            query=f"""
                {_SELECT}
                ORDER BY p.effective_date DESC NULLS LAST, p.created_at DESC
            """,
            log_msg="PostgresHrPolicyRepository: list failed",
            log_extra={},
        )
        return [_row_to_policy(r) for r in rows]

    def get_policy(self, policy_id: int) -> HrPolicy | None:
        row = self._fetchone(
            query=f"{_SELECT} WHERE p.id = %s",
            params=(policy_id,),
            log_msg="PostgresHrPolicyRepository: get failed",
            log_extra={"policy_id": policy_id},
        )
        return _row_to_policy(row) if row else None

    def create_policy(self, policy: HrPolicy) -> HrPolicy:
        row = self._fetchone(
            query="""
                INSERT INTO hr_policies (
                    title, category, description, content, version, effective_date,
                    prepared_by, approved_by, status, created_by
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING id
            """,
            params=(
                policy.title,
                policy.category,
                policy.description,
                policy.content,
                policy.version,
                policy.effective_date,
                policy.prepared_by,
                policy.approved_by,
                policy.status,
                policy.created_by,
            ),
            log_msg="PostgresHrPolicyRepository: create failed",
            log_extra={"category": policy.category},
        )
        created = self.get_policy(row["id"]) if row else None
        if created is None:
            raise DatabaseError("PostgresHrPolicyRepository: insert returned no row")
        return created

    def update_policy(
        self, policy_id: int, changes: dict[str, object]
    ) -> HrPolicy | None:
        columns = [c for c in _UPDATABLE if c in changes]
        if not columns:
            return self.get_policy(policy_id)

        assignments = ", ".join(f"{c} = %s" for c in columns)
        params = [changes[c] for c in columns] + [policy_id]
        count = self._execute(
            query=f"""
                UPDATE hr_policies
                SET {assignments}, updated_at = now()
                WHERE id = %s
            """,
            params=params,
            log_msg="PostgresHrPolicyRepository: update failed",
            log_extra={"policy_id": policy_id, "columns": columns},
        )
        return self.get_policy(policy_id) if count else None

    def delete_policy(self, policy_id: int) -> bool:
        count = self._execute(
            query="DELETE FROM hr_policies WHERE id = %s",
            params=(policy_id,),
            log_msg="PostgresHrPolicyRepository: delete failed",
            log_extra={"policy_id": policy_id},
        )
        return count > 0
