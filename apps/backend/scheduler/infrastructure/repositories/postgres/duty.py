"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/duty.py
============================================================
Class: PostgresDutyRepository

Responsibilities:
  - Catálogo de duties sobre la tabla duties (soft delete vía is_active).
  - "priority DESC" usa el rank del enum (CASE), nunca orden alfabético.
  - Búsqueda ILIKE con comodines escapados.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Duty, DutyPriority
from ._base import PostgresRepositoryBase, escape_like

DUTY_COLUMNS = """
    id, name, description, estimated_hours, priority, is_active,
    created_at, updated_at
"""

# R: CASE generado desde DutyPriority.rank (una sola fuente de verdad).
_PRIORITY_RANK_SQL = (
    "CASE priority "
    + " ".join(f"WHEN '{p.value}' THEN {p.rank}" for p in DutyPriority)
    + " ELSE 0 END"
)


def row_to_duty(row: tuple) -> Duty:
    (
        duty_id,
        name,
        description,
        estimated_hours,
        priority,
        is_active,
        created_at,
        updated_at,
    ) = row
    return Duty(
        id=duty_id,
        name=name,
        description=description,
        estimated_hours=estimated_hours,
        priority=DutyPriority(priority),
        is_active=is_active,
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresDutyRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del catálogo de duties."""

    def _select(
        self, where_sql: str, order_sql: str, params: list, extra: dict
    ) -> List[Duty]:
        rows = self._fetchall(
            query=f"SELECT {DUTY_COLUMNS} FROM duties WHERE {where_sql} ORDER BY {order_sql}",
            params=params,
            context_msg="Error al listar duties",
            extra=extra,
        )
        return [row_to_duty(r) for r in rows]

    def get_duty(self, duty_id: int) -> Optional[Duty]:
        row = self._fetchone(
            query=f"SELECT {DUTY_COLUMNS} FROM duties WHERE id = %s",
            params=[duty_id],
            context_msg="Error al obtener duty",
            extra={"duty_id": duty_id},
        )
        return row_to_duty(row) if row else None

    def create_duty(self, duty: Duty) -> Duty:
        row = self._fetchone(
            query=f"""
                INSERT INTO duties (
                    name, description, estimated_hours, priority, is_active
                )
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {DUTY_COLUMNS}
            """,
            params=[
                duty.name,
                duty.description,
                duty.estimated_hours,
                duty.priority.value,
                duty.is_active,
            ],
            context_msg="Error al crear duty",
            extra={"name": duty.name},
        )
        return row_to_duty(row)

    def set_duty_active(self, duty_id: int, is_active: bool) -> Optional[Duty]:
        row = self._fetchone(
            query=f"""
                UPDATE duties SET is_active = %s, updated_at = now()
                WHERE id = %s
                RETURNING {DUTY_COLUMNS}
            """,
            params=[is_active, duty_id],
            context_msg="Error al actualizar duty",
            extra={"duty_id": duty_id, "is_active": is_active},
        )
        return row_to_duty(row) if row else None

    def list_active_duties(self) -> List[Duty]:
        return self._select(
            "is_active",
            f"{_PRIORITY_RANK_SQL} DESC, created_at DESC, id DESC",
            [],
            {},
        )

    def list_duties_by_priority_and_status(
        self, priority: DutyPriority, is_active: bool
    ) -> List[Duty]:
        return self._select(
            "priority = %s AND is_active = %s",
            "created_at DESC, id DESC",
            [priority.value, is_active],
            {"priority": priority.value, "is_active": is_active},
        )

    def search_duties(self, term: str) -> List[Duty]:
        pattern = f"%{escape_like(term)}%"
        return self._select(
            "is_active AND (name ILIKE %s ESCAPE '\\' "
            "OR description ILIKE %s ESCAPE '\\')",
            f"{_PRIORITY_RANK_SQL} DESC, lower(name) ASC, id ASC",
            [pattern, pattern],
            {},
        )
