"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/reservation.py
============================================================
Class: PostgresReservationRepository

Responsibilities:
  - Reservas del recurso compartido sobre la tabla reservations.
  - book_reservation: check-then-insert en UNA transacción que toma
    LOCK TABLE reservations IN SHARE ROW EXCLUSIVE MODE (serializa
    bookings entre sí, no bloquea lecturas). La exclusion constraint
    reservations_no_overlap es la segunda línea: si igual dispara,
    se traduce a conflicto, nunca a error 5xx.
  - Si el usuario dueño se borra entre el lookup del caso de uso y el
    INSERT, fk_reservations_user_id__users dispara: MissingReferenceError.

Collaborators:
  - domain.scheduling.BookingAttempt
  - PostgresRepositoryBase

Notes:
  - Overlap = intervalo cerrado: start_date <= :end AND end_date >= :start.
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from psycopg import errors as pg_errors

from ....crosscutting.logger import logger
from ....domain.errors import MissingReferenceError
from ....domain.entities import Reservation, ReservationStatus
from ....domain.scheduling import BookingAttempt
from ._base import PostgresRepositoryBase

_COLUMNS = """
    id, start_date, end_date, user_id, notes, status, created_at, updated_at
"""

_OVERLAP_SQL = f"""
    SELECT {_COLUMNS} FROM reservations
    WHERE start_date <= %s AND end_date >= %s
    ORDER BY start_date ASC, id ASC
"""


def _row_to_reservation(row: tuple) -> Reservation:
    (
        reservation_id,
        start_date,
        end_date,
        user_id,
        notes,
        status,
        created_at,
        updated_at,
    ) = row
    return Reservation(
        id=reservation_id,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        notes=notes,
        status=ReservationStatus(status),
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresReservationRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de reservas."""

    def _select(self, where_sql: str, params: list, extra: dict) -> List[Reservation]:
        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS} FROM reservations
                WHERE {where_sql}
                ORDER BY start_date ASC, id ASC
            """,
            params=params,
            context_msg="Error al listar reservas",
            extra=extra,
        )
        return [_row_to_reservation(r) for r in rows]

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM reservations WHERE id = %s",
            params=[reservation_id],
            context_msg="Error al obtener reserva",
            extra={"reservation_id": reservation_id},
        )
        return _row_to_reservation(row) if row else None

    def book_reservation(self, reservation: Reservation) -> BookingAttempt:
        extra = {
            "user_id": reservation.user_id,
            "start_date": reservation.start_date.isoformat(),
            "end_date": reservation.end_date.isoformat(),
        }
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    conn.execute(
                        "LOCK TABLE reservations IN SHARE ROW EXCLUSIVE MODE"
                    )
                    rows = conn.execute(
                        _OVERLAP_SQL,
                        (reservation.end_date, reservation.start_date),
                    ).fetchall()
                    if rows:
                        return BookingAttempt(
                            conflicts=[_row_to_reservation(r) for r in rows]
                        )

                    row = conn.execute(
                        f"""
                        INSERT INTO reservations (
                            start_date, end_date, user_id, notes, status
                        )
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (
                            reservation.start_date,
                            reservation.end_date,
                            reservation.user_id,
                            reservation.notes,
                            reservation.status.value,
                        ),
                    ).fetchone()
                    return BookingAttempt(created=_row_to_reservation(row))
        except pg_errors.ExclusionViolation:
            logger.info("Booking rechazado por exclusion constraint", extra=extra)
            return BookingAttempt(
                conflicts=self.find_overlapping(
                    reservation.start_date, reservation.end_date
                )
            )
        except pg_errors.ForeignKeyViolation as exc:
            logger.info("Booking rechazado: usuario inexistente", extra=extra)
            raise MissingReferenceError("User", reservation.user_id) from exc
        except Exception as exc:
            raise self._fail("Error al reservar", extra, exc) from exc

    def delete_reservation(self, reservation_id: int) -> bool:
        row = self._fetchone(
            query="DELETE FROM reservations WHERE id = %s RETURNING id",
            params=[reservation_id],
            context_msg="Error al borrar reserva",
            extra={"reservation_id": reservation_id},
        )
        return row is not None

    def find_overlapping(self, start_date: date, end_date: date) -> List[Reservation]:
        rows = self._fetchall(
            query=_OVERLAP_SQL,
            params=[end_date, start_date],
            context_msg="Error al buscar solapamientos",
            extra={},
        )
        return [_row_to_reservation(r) for r in rows]

    def list_current_and_future(self, today: date) -> List[Reservation]:
        return self._select("end_date >= %s", [today], {"today": today.isoformat()})

    def list_reservations_by_user(self, user_id: int) -> List[Reservation]:
        return self._select("user_id = %s", [user_id], {"user_id": user_id})

    def list_reservations_between(
        self, start_date: date, end_date: date
    ) -> List[Reservation]:
        return self._select(
            "start_date >= %s AND end_date <= %s", [start_date, end_date], {}
        )
