from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import MealType, SubscriptionStatus


@dataclass(frozen=True)
class Subscription:
    """Domain entity: a user's purchase of a plan for [start_date, end_date].

    ``price_at_purchase``, ``plan_name_snapshot`` and ``meal_type_snapshot`` are
    copied from the plan on creation and never refreshed afterwards.
    """

    subscription_id: int
    user_id: int
    plan_id: int
    start_date: date
    end_date: date
    status: SubscriptionStatus
    price_at_purchase: Decimal
    plan_name_snapshot: str
    meal_type_snapshot: MealType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.subscription_id,
            "userId": self.user_id,
            "planId": self.plan_id,
            "startDate": to_iso(self.start_date),
            "endDate": to_iso(self.end_date),
            "status": self.status.value,
            "priceAtPurchase": str(self.price_at_purchase),
            "planNameSnapshot": self.plan_name_snapshot,
            "mealTypeSnapshot": self.meal_type_snapshot.value,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
