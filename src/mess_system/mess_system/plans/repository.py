from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import DurationType, MealType
from .model import Plan


class PlanRepository(Protocol):
    def get_by_id(self, plan_id: int) -> Optional[Plan]:
        raise NotImplementedError

    def create(
        self,
        *,
        mess_id: int,
        name: str,
        price: Decimal,
        duration_type: DurationType,
        meal_type: MealType,
        meals_per_day: int,
    ) -> int:
        raise NotImplementedError

    def list_active_for_mess(self, mess_id: int) -> Sequence[Plan]:
        """Active plans of one mess, cheapest first."""
        raise NotImplementedError
