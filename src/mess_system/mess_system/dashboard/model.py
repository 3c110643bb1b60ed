from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..common.datetime_utils import to_iso
from ..core.enums import MealType
from ..messes.model import Mess
from ..users.model import UserSummary


@dataclass(frozen=True)
class SubscriberToday:
    """Read-model row: one active subscription and its attendance for the day.

    Meals default to False when the subscriber has no attendance row yet.
    """

    subscription_id: int
    user: UserSummary
    plan_id: int
    plan_name: str
    meal_type: MealType
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False

    def to_dict(self) -> dict:
        return {
            "subscriptionId": self.subscription_id,
            "user": self.user.to_dict(),
            "plan": {"id": self.plan_id, "name": self.plan_name, "mealType": self.meal_type.value},
            "attendance": {"breakfast": self.breakfast, "lunch": self.lunch, "dinner": self.dinner},
        }


@dataclass(frozen=True)
class TodaySummary:
    day: date
    mess: Mess
    details: Sequence[SubscriberToday]

    @property
    def total_active_subscriptions(self) -> int:
        return len(self.details)

    @property
    def breakfast_count(self) -> int:
        return sum(1 for d in self.details if d.breakfast)

    @property
    def lunch_count(self) -> int:
        return sum(1 for d in self.details if d.lunch)

    @property
    def dinner_count(self) -> int:
        return sum(1 for d in self.details if d.dinner)

    def to_dict(self) -> dict:
        return {
            "date": to_iso(self.day),
            "mess": self.mess.to_brief_dict(),
            "summary": {
                "totalActiveSubscriptions": self.total_active_subscriptions,
                "breakfastCount": self.breakfast_count,
                "lunchCount": self.lunch_count,
                "dinnerCount": self.dinner_count,
            },
            "details": [d.to_dict() for d in self.details],
        }
