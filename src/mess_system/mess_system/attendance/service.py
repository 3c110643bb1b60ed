from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import optional_bool
from ..core.enums import SubscriptionStatus
from ..core.exceptions import ValidationError
from ..subscriptions.repository import SubscriptionRepository
from ..subscriptions.service import load_owned_subscription
from .model import AttendanceStats, MealAttendance, MealMarks
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceHistory:
    records: Sequence[MealAttendance]
    stats: AttendanceStats


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, subscriptions: SubscriptionRepository):
        self._attendance = attendance
        self._subscriptions = subscriptions

    def mark_attendance(
        self,
        *,
        subscription_id: int,
        user_id: int,
        day: Any = None,
        breakfast: Any = None,
        lunch: Any = None,
        dinner: Any = None,
        today: Optional[date] = None,
    ) -> MealAttendance:
        sub = load_owned_subscription(
            self._subscriptions,
            subscription_id,
            user_id,
            action="mark attendance for this subscription",
        )
        if sub.status != SubscriptionStatus.ACTIVE:
            raise ValidationError("Cannot mark attendance for inactive subscription")

        target = parse_iso_date(day, "date") if day not in (None, "") else (today or today_local())
        if not sub.covers(target):
            raise ValidationError("Date is outside subscription period")

        marks = MealMarks(
            breakfast=optional_bool(breakfast, "breakfast"),
            lunch=optional_bool(lunch, "lunch"),
            dinner=optional_bool(dinner, "dinner"),
        )
        record = self._attendance.upsert(subscription_id=sub.subscription_id, day=target, marks=marks)
        logger.debug("Attendance subscription=%s date=%s marks=%s", sub.subscription_id, target, marks)
        return record

    def get_attendance(
        self,
        *,
        subscription_id: int,
        user_id: int,
        start_date: Any = None,
        end_date: Any = None,
    ) -> AttendanceHistory:
        sub = load_owned_subscription(
            self._subscriptions,
            subscription_id,
            user_id,
            action="view this attendance",
        )
        start = parse_iso_date(start_date, "startDate") if start_date not in (None, "") else None
        end = parse_iso_date(end_date, "endDate") if end_date not in (None, "") else None

        records = list(self._attendance.list_for_subscription(sub.subscription_id, start=start, end=end))
        return AttendanceHistory(records=records, stats=AttendanceStats.of(records))
