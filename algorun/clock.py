"""Clock abstraction and validity range units."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum


class Clock:
    """Wall clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class RangeType(str, Enum):
    """Unit used to express how long generated keys stay valid."""

    TIME = "seconds"
    ROUND = "rounds"

    def __str__(self) -> str:
        return self.value