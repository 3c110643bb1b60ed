from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class MealAttendance:
    """Domain entity: which meals one subscription took on one calendar day."""

    attendance_id: int
    subscription_id: int
    date: date
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "subscriptionId": self.subscription_id,
            "date": to_iso(self.date),
            "breakfast": self.breakfast,
            "lunch": self.lunch,
            "dinner": self.dinner,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(frozen=True)
class MealMarks:
    """A partial update. None means the caller did not send that meal."""

    breakfast: Optional[bool] = None
    lunch: Optional[bool] = None
    dinner: Optional[bool] = None


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int = 0
    breakfast_count: int = 0
    lunch_count: int = 0
    dinner_count: int = 0

    @classmethod
    def of(cls, records: Iterable[MealAttendance]) -> "AttendanceStats":
        records = list(records)
        return cls(
            total_days=len(records),
            breakfast_count=sum(1 for r in records if r.breakfast),
            lunch_count=sum(1 for r in records if r.lunch),
            dinner_count=sum(1 for r in records if r.dinner),
        )

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "breakfastCount": self.breakfast_count,
            "lunchCount": self.lunch_count,
            "dinnerCount": self.dinner_count,
        }
