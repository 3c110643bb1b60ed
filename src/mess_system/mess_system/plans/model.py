from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import DurationType, MealType


@dataclass(frozen=True)
class Plan:
    """Domain entity: a priced meal offering under a mess."""

    plan_id: int
    mess_id: int
    name: str
    price: Decimal
    duration_type: DurationType
    meal_type: MealType
    meals_per_day: int
    is_active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.plan_id,
            "messId": self.mess_id,
            "name": self.name,
            "price": str(self.price),
            "durationType": self.duration_type.value,
            "mealType": self.meal_type.value,
            "mealsPerDay": self.meals_per_day,
            "isActive": self.is_active,
            "createdAt": to_iso(self.created_at),
        }
