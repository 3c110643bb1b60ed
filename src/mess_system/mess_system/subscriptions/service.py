from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..attendance.model import MealAttendance
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import add_days, add_months, parse_iso_date
from ..common.validators import require_positive_id
from ..core.constants import DEFAULT_HISTORY_LIMIT, WEEKLY_PLAN_DAYS
from ..core.enums import DurationType, SubscriptionStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..messes.model import Mess
from ..messes.repository import MessRepository
from ..plans.model import Plan
from ..plans.repository import PlanRepository
from .model import Subscription
from .repository import SubscriptionRepository

logger = logging.getLogger(__name__)


def compute_end_date(start: date, duration_type: DurationType) -> date:
    """Weekly plans run 7 days; monthly plans one calendar month, clamped to month end."""
    if duration_type == DurationType.WEEKLY:
        return add_days(start, WEEKLY_PLAN_DAYS)
    if duration_type == DurationType.MONTHLY:
        return add_months(start, 1)
    raise ValidationError(f"Unsupported duration type: {duration_type}")


@dataclass(frozen=True)
class SubscriptionDetail:
    """Subscription plus the plan/mess context shown to the subscriber."""

    subscription: Subscription
    plan: Optional[Plan] = None
    mess: Optional[Mess] = None
    attendance: Optional[Sequence[MealAttendance]] = None

    def to_dict(self) -> dict:
        out = self.subscription.to_dict()
        if self.plan is not None:
            plan = self.plan.to_dict()
            if self.mess is not None:
                plan["mess"] = self.mess.to_dict()
            out["plan"] = plan
        if self.attendance is not None:
            out["attendance"] = [a.to_dict() for a in self.attendance]
        return out


def load_owned_subscription(subscriptions: SubscriptionRepository, subscription_id: int, user_id: int, *, action: str) -> Subscription:
    """Fetch a subscription and check that ``user_id`` owns it (NotFound, then Forbidden)."""
    sub = subscriptions.get_by_id(int(subscription_id))
    if not sub:
        raise NotFoundError("Subscription not found")
    if sub.user_id != int(user_id):
        raise AuthorizationError(f"You are not authorized to {action}")
    return sub


class SubscriptionService:
    def __init__(
        self,
        subscriptions: SubscriptionRepository,
        plans: PlanRepository,
        messes: MessRepository,
        attendance: AttendanceRepository,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._subscriptions = subscriptions
        self._plans = plans
        self._messes = messes
        self._attendance = attendance
        self._history_limit = int(history_limit)

    def create_subscription(self, *, user_id: int, plan_id: Any, start_date: Any) -> SubscriptionDetail:
        if plan_id in (None, "") or start_date in (None, ""):
            raise ValidationError("Plan ID and start date are required")

        plan_id = require_positive_id(plan_id, "Plan ID")
        start = parse_iso_date(start_date, "start date")

        plan = self._plans.get_by_id(plan_id)
        if not plan or not plan.is_active:
            raise NotFoundError("Plan not found or inactive")

        if self._subscriptions.find_active(user_id=int(user_id), plan_id=plan.plan_id):
            raise ConflictError("You already have an active subscription to this plan")

        end = compute_end_date(start, plan.duration_type)
        subscription_id = self._subscriptions.create_active(
            user_id=int(user_id),
            plan_id=plan.plan_id,
            start_date=start,
            end_date=end,
            price_at_purchase=plan.price,
            plan_name_snapshot=plan.name,
            meal_type_snapshot=plan.meal_type,
        )
        logger.info(
            "Subscription id=%s created user=%s plan=%s %s..%s",
            subscription_id,
            user_id,
            plan.plan_id,
            start.isoformat(),
            end.isoformat(),
        )
        return self._detail(self._subscriptions.get_by_id(subscription_id), plan=plan)

    def cancel_subscription(self, *, subscription_id: int, user_id: int) -> SubscriptionDetail:
        sub = load_owned_subscription(
            self._subscriptions, subscription_id, user_id, action="cancel this subscription"
        )
        if sub.status == SubscriptionStatus.CANCELLED:
            raise ValidationError("Subscription is already cancelled")

        changed = self._subscriptions.transition_status(
            sub.subscription_id,
            from_status=SubscriptionStatus.ACTIVE,
            to_status=SubscriptionStatus.CANCELLED,
        )
        if not changed:
            # Lost a race with another cancel request.
            raise ValidationError("Subscription is already cancelled")

        logger.info("Subscription id=%s cancelled by user=%s", sub.subscription_id, user_id)
        return self._detail(self._subscriptions.get_by_id(sub.subscription_id))

    def my_subscriptions(self, user_id: int) -> list[SubscriptionDetail]:
        out: list[SubscriptionDetail] = []
        for sub in self._subscriptions.list_for_user(int(user_id)):
            recent = self._attendance.list_for_subscription(sub.subscription_id, limit=self._history_limit)
            out.append(self._detail(sub, attendance=list(recent)))
        return out

    def _detail(
        self,
        sub: Subscription,
        *,
        plan: Optional[Plan] = None,
        attendance: Optional[Sequence[MealAttendance]] = None,
    ) -> SubscriptionDetail:
        plan = plan or self._plans.get_by_id(sub.plan_id)
        mess = self._messes.get_by_id(plan.mess_id) if plan else None
        return SubscriptionDetail(subscription=sub, plan=plan, mess=mess, attendance=attendance)
