from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import MealType, SubscriptionStatus
from .model import Subscription


class SubscriptionRepository(Protocol):
    def get_by_id(self, subscription_id: int) -> Optional[Subscription]:
        raise NotImplementedError

    def find_active(self, *, user_id: int, plan_id: int) -> Optional[Subscription]:
        raise NotImplementedError

    def create_active(
        self,
        *,
        user_id: int,
        plan_id: int,
        start_date: date,
        end_date: date,
        price_at_purchase: Decimal,
        plan_name_snapshot: str,
        meal_type_snapshot: MealType,
    ) -> int:
        """Insert an active subscription.

        Must raise ConflictError when (user_id, plan_id) already has an active row,
        including when a concurrent insert wins the race.
        """
        raise NotImplementedError

    def transition_status(
        self,
        subscription_id: int,
        *,
        from_status: SubscriptionStatus,
        to_status: SubscriptionStatus,
    ) -> bool:
        """Conditional status change; False if the row was not in ``from_status``."""
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Subscription]:
        """All subscriptions of a user, newest first."""
        raise NotImplementedError
