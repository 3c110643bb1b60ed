from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_enum, require_int_range, require_non_empty, require_price
from ..core.constants import MAX_MEALS_PER_DAY, MIN_MEALS_PER_DAY
from ..core.enums import DurationType, MealType
from ..core.exceptions import NotFoundError, ValidationError
from ..messes.repository import MessRepository
from ..messes.service import load_owned_mess
from .model import Plan
from .repository import PlanRepository

logger = logging.getLogger(__name__)


class PlanService:
    def __init__(self, plans: PlanRepository, messes: MessRepository):
        self._plans = plans
        self._messes = messes

    def create_plan(
        self,
        *,
        mess_id: int,
        owner_id: int,
        name: Any,
        price: Any,
        duration_type: Any,
        meal_type: Any,
        meals_per_day: Any,
    ) -> Plan:
        if name in (None, "") or price in (None, "") or not duration_type or not meal_type or meals_per_day in (None, ""):
            raise ValidationError("Name, price, durationType, mealType, and mealsPerDay are required")

        load_owned_mess(self._messes, mess_id, owner_id, action="create plans for this mess")

        plan_id = self._plans.create(
            mess_id=int(mess_id),
            name=require_non_empty(name, "Plan name"),
            price=require_price(price),
            duration_type=require_enum(duration_type, DurationType, "Duration type must be 'weekly' or 'monthly'"),
            meal_type=require_enum(meal_type, MealType, "Meal type must be 'veg' or 'nonveg'"),
            meals_per_day=require_int_range(meals_per_day, "Meals per day", MIN_MEALS_PER_DAY, MAX_MEALS_PER_DAY),
        )
        logger.info("Plan id=%s created for mess id=%s", plan_id, mess_id)
        return self._plans.get_by_id(plan_id)

    def list_plans(self, mess_id: int) -> list[Plan]:
        if not self._messes.get_by_id(int(mess_id)):
            raise NotFoundError("Mess not found")
        return list(self._plans.list_active_for_mess(int(mess_id)))
