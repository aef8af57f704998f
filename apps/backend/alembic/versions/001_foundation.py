"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema del scheduler desde cero:
      users, duties, duty_assignments, reservations
  - Enforzar en la DB las invariantes que el core también chequea:
      - reservas: start_date <= end_date y sin solapamiento (exclusion
        constraint sobre daterange cerrado '[]')
      - asignaciones: completed_date presente <=> status = 'COMPLETED'
      - duties: estimated_hours >= 0, priority/status dentro del enum

Collaborators:
  - PostgreSQL 14+
  - Repositorios postgres (usan este esquema como contrato)

Policy:
  - Migración BASELINE; evolución futura con migraciones aditivas (002+).
  - Convención de nombres: pk_/uq_/ix_/fk_/ck_<tabla>_<col>.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("first_name", sa.String(50), nullable=True),
        sa.Column("last_name", sa.String(50), nullable=True),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'USER'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.CheckConstraint("role IN ('USER','ADMIN')", name="ck_users_role"),
    )
    # Email único case-insensitive (get_user_by_email usa lower(email)).
    op.execute("CREATE UNIQUE INDEX uq_users_lower_email ON users (lower(email))")
    op.create_index("ix_users_role", "users", ["role"])

    # =========================================================
    # 2) DUTIES (catálogo, soft delete vía is_active)
    # =========================================================
    op.create_table(
        "duties",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("estimated_hours", sa.Integer, nullable=True),
        sa.Column(
            "priority",
            sa.String(10),
            nullable=False,
            server_default=sa.text("'MEDIUM'"),
        ),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_duties"),
        sa.CheckConstraint(
            "priority IN ('LOW','MEDIUM','HIGH','URGENT')",
            name="ck_duties_priority",
        ),
        sa.CheckConstraint(
            "estimated_hours IS NULL OR estimated_hours >= 0",
            name="ck_duties_estimated_hours",
        ),
    )
    op.create_index("ix_duties_priority_is_active", "duties", ["priority", "is_active"])
    op.create_index("ix_duties_created_at", "duties", ["created_at"])

    # =========================================================
    # 3) DUTY ASSIGNMENTS
    # =========================================================
    op.create_table(
        "duty_assignments",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("duty_id", sa.BigInteger, nullable=False),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("assigned_date", sa.Date, nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'ASSIGNED'"),
        ),
        sa.Column("completed_date", sa.Date, nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_duty_assignments"),
        sa.ForeignKeyConstraint(
            ["duty_id"],
            ["duties.id"],
            name="fk_duty_assignments_duty_id__duties",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_duty_assignments_user_id__users",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "status IN ('ASSIGNED','IN_PROGRESS','COMPLETED','CANCELLED')",
            name="ck_duty_assignments_status",
        ),
        sa.CheckConstraint(
            "(completed_date IS NOT NULL) = (status = 'COMPLETED')",
            name="ck_duty_assignments_completed_date",
        ),
    )
    op.create_index("ix_duty_assignments_user_id", "duty_assignments", ["user_id"])
    op.create_index(
        "ix_duty_assignments_status_assigned_date",
        "duty_assignments",
        ["status", "assigned_date"],
    )

    # =========================================================
    # 4) RESERVATIONS (recurso compartido único)
    # =========================================================
    op.create_table(
        "reservations",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'ACTIVE'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_reservations"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_reservations_user_id__users",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "start_date <= end_date", name="ck_reservations_date_order"
        ),
    )
    op.create_index("ix_reservations_user_id", "reservations", ["user_id"])
    op.create_index("ix_reservations_start_date", "reservations", ["start_date"])

    # Intervalos cerrados: daterange(start, end, '[]') hace que compartir el
    # día de borde cuente como solapamiento.
    op.execute(
        "ALTER TABLE reservations ADD CONSTRAINT reservations_no_overlap "
        "EXCLUDE USING gist (daterange(start_date, end_date, '[]') WITH &&)"
    )


def downgrade() -> None:
    """Downgrade NO soportado para la migración fundacional."""
    raise NotImplementedError("Baseline: downgrade no soportado por política.")
