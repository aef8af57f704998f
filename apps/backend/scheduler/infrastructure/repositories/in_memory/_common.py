"""Helpers compartidos por los repos in-memory."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Callable, Iterator


def utc_now() -> datetime:
    """R: Fuente única de tiempo (UTC) para timestamps."""
    return datetime.now(timezone.utc)


def id_sequence() -> Callable[[], int]:
    """R: Emula BIGSERIAL (1, 2, 3, ...)."""
    counter: Iterator[int] = itertools.count(1)
    return lambda: next(counter)


def created_desc_key(created_at: datetime | None, entity_id: int | None) -> tuple:
    """R: Key para ORDER BY created_at DESC NULLS LAST, id DESC."""
    ts = created_at or datetime.min.replace(tzinfo=timezone.utc)
    return (-ts.timestamp(), -(entity_id or 0))
