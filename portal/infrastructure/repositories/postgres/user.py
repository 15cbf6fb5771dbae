"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar principals para autenticación (por email / id / employee_id).
  - Crear usuarios y actualizar campos administrables (password, status, last_login).
  - Listados administrativos con filtros (role, branch, status, department).
  - Mapear filas -> `User` validando `UserRole` / `UserStatus`.
  - Traducir UniqueViolation (email / employee_id) -> DuplicateKeyError.

Collaborators:
  - PostgresRepository (helpers de ejecución)
  - identity.users.User / UserRole / UserStatus
  - domain.repositories.DuplicateKeyError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio (forzado de sucursal, etc.).
  - Retorna None cuando no existe el recurso.
  - Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from datetime import date, datetime

from psycopg.errors import UniqueViolation

from ....crosscutting.exceptions import DatabaseError
from ....domain.repositories import DuplicateKeyError
from ....identity.users import User, UserRole, UserStatus
from .base import PostgresRepository, Row, constraint_name

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = """
    id, employee_id, email, password_hash, first_name, last_name, role, branch,
    department, position, birth_date, phone, status, last_login, created_at
"""

_USER_ORDER_BY = "created_at DESC, id DESC"

_UNIQUE_FIELDS = {
    "uq_users_email": "email",
    "uq_users_employee_id": "employee_id",
}


def _row_to_user(row: Row) -> User:
    """
    Convierte una fila de `users` a `User`.

    Role/status estrictos: un valor fuera del enum es drift de datos -> DatabaseError.
    """
    try:
        role = UserRole(row["role"])
        status = UserStatus(row["status"])
    except ValueError as exc:
        raise DatabaseError(
            f"Invalid role/status in database: {row['role']}/{row['status']}"
        ) from exc

    return User(
        id=row["id"],
        employee_id=row["employee_id"],
        email=row["email"],
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=role,
        branch=row["branch"],
        department=row["department"],
        position=row["position"],
        birth_date=row["birth_date"],
        phone=row["phone"],
        status=status,
        last_login=row["last_login"],
        created_at=row["created_at"],
    )


def _branch_clause(branches: list[str] | None, params: list[object]) -> str:
    if branches is None:
        return ""
    params.append(list(branches))
    return " AND branch = ANY(%s)"


class PostgresUserRepository(PostgresRepository):
    """R: Implementación PostgreSQL del repositorio de principals."""

    def _get_by(self, column: str, value: object) -> User | None:
        # column viene de código (no de input de usuario)
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE {column} = %s",
            params=(value,),
            log_msg=f"PostgresUserRepository: get by {column} failed",
            log_extra={column: str(value)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> User | None:
        return self._get_by("email", email)

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._get_by("id", user_id)

    def get_user_by_employee_id(self, employee_id: str) -> User | None:
        return self._get_by("employee_id", employee_id)

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole,
        branch: str | None,
        employee_id: str | None = None,
        department: str | None = None,
        position: str | None = None,
        birth_date: date | None = None,
        phone: str | None = None,
    ) -> User:
        """
        Crea un usuario en estado 'active'.

        Si email/employee_id ya existen, Postgres lanza UniqueViolation y la
        traducimos a DuplicateKeyError(field).
        """
        try:
            row = self._fetchone(
                query=f"""
                    INSERT INTO users (
                        employee_id, email, password_hash, first_name, last_name,
                        role, branch, department, position, birth_date, phone, status
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                """,
                params=(
                    employee_id,
                    email,
                    password_hash,
                    first_name,
                    last_name,
                    role.value,
                    branch,
                    department,
                    position,
                    birth_date,
                    phone,
                    UserStatus.ACTIVE.value,
                ),
                log_msg="PostgresUserRepository: create_user failed",
                log_extra={"email": email, "role": role.value},
            )
        except UniqueViolation as exc:
            field = _UNIQUE_FIELDS.get(constraint_name(exc), "email")
            raise DuplicateKeyError(field) from exc

        if not row:
            raise DatabaseError("PostgresUserRepository: create_user returned no row")
        return _row_to_user(row)

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        self._execute(
            query="UPDATE users SET last_login = %s WHERE id = %s",
            params=(at, user_id),
            log_msg="PostgresUserRepository: touch_last_login failed",
            log_extra={"user_id": user_id},
        )

    def update_password(self, user_id: int, password_hash: str) -> bool:
        count = self._execute(
            query="UPDATE users SET password_hash = %s WHERE id = %s",
            params=(password_hash, user_id),
            log_msg="PostgresUserRepository: update_password failed",
            log_extra={"user_id": user_id},
        )
        return count > 0

    def set_status(self, user_id: int, status: UserStatus) -> User | None:
        row = self._fetchone(
            query=f"""
                UPDATE users SET status = %s
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(status.value, user_id),
            log_msg="PostgresUserRepository: set_status failed",
            log_extra={"user_id": user_id, "status": status.value},
        )
        return _row_to_user(row) if row else None

    def list_users(
        self,
        *,
        role: UserRole | None = None,
        branch: str | None = None,
        status: UserStatus | None = None,
        department: str | None = None,
    ) -> list[User]:
        # R: cláusulas controladas por código; valores siempre como parámetros.
        clauses: list[str] = []
        params: list[object] = []
        if role is not None:
            clauses.append("role = %s")
            params.append(role.value)
        if branch:
            clauses.append("branch = %s")
            params.append(branch)
        if status is not None:
            clauses.append("status = %s")
            params.append(status.value)
        if department:
            clauses.append("department = %s")
            params.append(department)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS} FROM users
                {where}
                ORDER BY {_USER_ORDER_BY}
            """,
            params=params,
            log_msg="PostgresUserRepository: list_users failed",
            log_extra={"filters": len(clauses)},
        )
        return [_row_to_user(r) for r in rows]

    def list_birthdays(self, *, month: int, branches: list[str] | None) -> list[User]:
        params: list[object] = [UserStatus.ACTIVE.value, month]
        branch_sql = _branch_clause(branches, params)
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS} FROM users
                WHERE status = %s
                  AND birth_date IS NOT NULL
                  AND EXTRACT(MONTH FROM birth_date) = %s
                  {branch_sql}
                ORDER BY EXTRACT(DAY FROM birth_date) ASC, first_name ASC
            """,
            params=params,
            log_msg="PostgresUserRepository: list_birthdays failed",
            log_extra={"month": month},
        )
        return [_row_to_user(r) for r in rows]

    def list_recent(self, *, limit: int, branches: list[str] | None) -> list[User]:
        if limit <= 0:
            return []
        params: list[object] = [UserStatus.ACTIVE.value]
        branch_sql = _branch_clause(branches, params)
        params.append(limit)
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS} FROM users
                WHERE status = %s {branch_sql}
                ORDER BY {_USER_ORDER_BY}
                LIMIT %s
            """,
            params=params,
            log_msg="PostgresUserRepository: list_recent failed",
            log_extra={"limit": limit},
        )
        return [_row_to_user(r) for r in rows]
