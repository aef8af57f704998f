"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/duty.py
============================================================
Class: InMemoryDutyRepository

Responsibilities:
  - Catálogo de duties en memoria (soft delete vía is_active).
  - Ordenamientos alineados con Postgres:
      activos:  priority DESC (rank), created_at DESC, id DESC
      filtro:   created_at DESC, id DESC
      búsqueda: priority DESC (rank), lower(name) ASC, id ASC
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from threading import Lock
from typing import Dict, Iterator, List, Optional

from ....domain.entities import Duty, DutyPriority
from ....domain.repositories import DutyRepository
from ._common import created_desc_key, id_sequence, utc_now


class InMemoryDutyRepository(DutyRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._duties: Dict[int, Duty] = {}
        self._next_id = id_sequence()

    def _values(self) -> List[Duty]:
        with self._lock:
            return list(self._duties.values())

    @contextmanager
    def locked_catalog(self) -> Iterator[Dict[int, Duty]]:
        """Retiene el lock mientras el caller lee (join en memoria)."""
        with self._lock:
            yield dict(self._duties)

    def get_duty(self, duty_id: int) -> Optional[Duty]:
        with self._lock:
            return self._duties.get(duty_id)

    def create_duty(self, duty: Duty) -> Duty:
        now = utc_now()
        with self._lock:
            stored = replace(duty, id=self._next_id(), created_at=now, updated_at=now)
            self._duties[stored.id] = stored
            return stored

    def set_duty_active(self, duty_id: int, is_active: bool) -> Optional[Duty]:
        with self._lock:
            current = self._duties.get(duty_id)
            if current is None:
                return None
            updated = replace(current, is_active=is_active, updated_at=utc_now())
            self._duties[duty_id] = updated
            return updated

    def list_active_duties(self) -> List[Duty]:
        return sorted(
            (d for d in self._values() if d.is_active),
            key=lambda d: (-d.priority.rank, created_desc_key(d.created_at, d.id)),
        )

    def list_duties_by_priority_and_status(
        self, priority: DutyPriority, is_active: bool
    ) -> List[Duty]:
        return sorted(
            (
                d
                for d in self._values()
                if d.priority == priority and d.is_active == is_active
            ),
            key=lambda d: created_desc_key(d.created_at, d.id),
        )

    def search_duties(self, term: str) -> List[Duty]:
        needle = term.lower()
        return sorted(
            (
                d
                for d in self._values()
                if d.is_active
                and (
                    needle in d.name.lower()
                    or needle in (d.description or "").lower()
                )
            ),
            key=lambda d: (-d.priority.rank, d.name.lower(), d.id),
        )
