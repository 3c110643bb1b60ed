from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import MealAttendance, MealMarks


class AttendanceRepository(Protocol):
    def upsert(self, *, subscription_id: int, day: date, marks: MealMarks) -> MealAttendance:
        """Atomic insert-or-update keyed by (subscription_id, day).

        On insert, meals missing from ``marks`` default to False. On update they
        keep their stored value.
        """
        raise NotImplementedError

    def list_for_subscription(
        self,
        subscription_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[MealAttendance]:
        """Rows with start <= date <= end (each bound optional), newest date first."""
        raise NotImplementedError
