"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo del portal desde cero.
  - Definir tablas, constraints e índices que los repositorios usan como
    contrato (nombres de constraints incluidos).

Collaborators:
  - PostgreSQL 14+
  - Alembic (framework de migraciones)
  - infrastructure/repositories/postgres/* (SQL parametrizado)

Policy:
  - Migración BASELINE. Downgrade elimina todo (solo entornos de desarrollo).
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer, sa.Identity(), nullable=False)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _created_by(table: str) -> sa.Column:
    return sa.Column(
        "created_by",
        sa.Integer,
        sa.ForeignKey(
            "users.id", name=f"fk_{table}_created_by__users", ondelete="SET NULL"
        ),
        nullable=True,
    )


def upgrade() -> None:
    """
    Orden:
      1) Identity (users)
      2) Attendance
      3) Contenido por sucursal (holidays, thoughts)
      4) Contenido global (announcements, hr_policies)
      5) Ideas (+ likes / comments)
      6) Events (+ galería)
    """

    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("employee_id", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column(
            "role", sa.String(20), nullable=False, server_default=sa.text("'employee'")
        ),
        # NULL solo para superadmin (todas las sucursales)
        sa.Column("branch", sa.String(100), nullable=True),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default=sa.text("'active'")
        ),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("employee_id", name="uq_users_employee_id"),
        sa.CheckConstraint(
            "role IN ('employee','admin','hr','manager','superadmin')",
            name="ck_users_role",
        ),
        sa.CheckConstraint("status IN ('active','inactive')", name="ck_users_status"),
    )
    op.create_index("ix_users_branch", "users", ["branch"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # =========================================================
    # 2) ATTENDANCE
    # =========================================================
    op.create_table(
        "attendance_logs",
        _id(),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey(
                "users.id", name="fk_attendance_logs_user_id__users", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("check_in", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_out", sa.DateTime(timezone=True), nullable=True),
        sa.Column("check_in_remarks", sa.Text, nullable=True),
        sa.Column("check_out_remarks", sa.Text, nullable=True),
        # Con signo: una anomalía de reloj se persiste tal cual.
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default=sa.text("'active'")
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_attendance_logs"),
        sa.CheckConstraint(
            "status IN ('active','completed')", name="ck_attendance_logs_status"
        ),
    )
    op.create_index(
        "ix_attendance_logs_user_id_date", "attendance_logs", ["user_id", "date"]
    )
    op.create_index("ix_attendance_logs_date", "attendance_logs", ["date"])

    # A lo sumo una sesión activa por (usuario, fecha), aun con check-ins concurrentes.
    op.create_index(
        "uq_attendance_active_session",
        "attendance_logs",
        ["user_id", "date"],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
    )

    # =========================================================
    # 3) BRANCH-SCOPED CONTENT
    # =========================================================
    op.create_table(
        "holidays",
        _id(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "branch", sa.String(100), nullable=False, server_default=sa.text("'All'")
        ),
        _created_by("holidays"),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_holidays"),
    )
    op.create_index("ix_holidays_date", "holidays", ["date"])
    op.create_index("ix_holidays_branch", "holidays", ["branch"])

    op.create_table(
        "thoughts",
        _id(),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("author", sa.String(200), nullable=False),
        sa.Column("branch", sa.String(100), nullable=False),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.text("true")
        ),
        _created_by("thoughts"),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_thoughts"),
    )
    op.create_index("ix_thoughts_branch_is_active", "thoughts", ["branch", "is_active"])

    # =========================================================
    # 4) GLOBAL CONTENT
    # =========================================================
    op.create_table(
        "announcements",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column(
            "priority",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Normal'"),
        ),
        sa.Column("publish_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expiry_at", sa.DateTime(timezone=True), nullable=True),
        _created_by("announcements"),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_announcements"),
    )
    op.create_index("ix_announcements_created_at", "announcements", ["created_at"])

    op.create_table(
        "hr_policies",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("version", sa.String(20), nullable=True),
        sa.Column("effective_date", sa.Date, nullable=True),
        sa.Column("prepared_by", sa.String(200), nullable=True),
        sa.Column("approved_by", sa.String(200), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default=sa.text("'Active'")
        ),
        _created_by("hr_policies"),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_hr_policies"),
    )

    # =========================================================
    # 5) IDEAS
    # =========================================================
    op.create_table(
        "ideas",
        _id(),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", name="fk_ideas_user_id__users", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_ideas"),
    )
    op.create_index("ix_ideas_created_at", "ideas", ["created_at"])

    op.create_table(
        "idea_likes",
        _id(),
        sa.Column(
            "idea_id",
            sa.Integer,
            sa.ForeignKey(
                "ideas.id", name="fk_idea_likes_idea_id__ideas", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey(
                "users.id", name="fk_idea_likes_user_id__users", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_idea_likes"),
        sa.UniqueConstraint("idea_id", "user_id", name="uq_idea_likes_idea_user"),
    )

    op.create_table(
        "idea_comments",
        _id(),
        sa.Column(
            "idea_id",
            sa.Integer,
            sa.ForeignKey(
                "ideas.id", name="fk_idea_comments_idea_id__ideas", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey(
                "users.id", name="fk_idea_comments_user_id__users", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        sa.Column("comment", sa.Text, nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_idea_comments"),
    )
    op.create_index("ix_idea_comments_idea_id", "idea_comments", ["idea_id"])

    # =========================================================
    # 6) EVENTS
    # =========================================================
    op.create_table(
        "events",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("event_date", sa.Date, nullable=False),
        sa.Column("event_time", sa.Time, nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        # Portada (cover); la galería completa vive en event_images.
        sa.Column("image_url", sa.Text, nullable=True),
        _created_by("events"),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])

    op.create_table(
        "event_images",
        _id(),
        sa.Column(
            "event_id",
            sa.Integer,
            sa.ForeignKey(
                "events.id", name="fk_event_images_event_id__events", ondelete="CASCADE"
            ),
            nullable=False,
        ),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default=sa.text("0")),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_event_images"),
    )
    op.create_index(
        "ix_event_images_event_id_position", "event_images", ["event_id", "position"]
    )


def downgrade() -> None:
    for table in (
        "event_images",
        "events",
        "idea_comments",
        "idea_likes",
        "ideas",
        "hr_policies",
        "announcements",
        "thoughts",
        "holidays",
        "attendance_logs",
        "users",
    ):
        op.drop_table(table)
