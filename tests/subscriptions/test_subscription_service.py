from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.mess_system.mess_system.attendance.model import MealMarks
from src.mess_system.mess_system.core.enums import DurationType, MealType, Role, SubscriptionStatus
from src.mess_system.mess_system.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.mess_system.mess_system.subscriptions.service import compute_end_date


def test_monthly_subscription_runs_one_calendar_month(container, student, monthly_plan):
    detail = container.subscription_service.create_subscription(
        user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15"
    )

    sub = detail.subscription
    assert sub.start_date == date(2024, 1, 15)
    assert sub.end_date == date(2024, 2, 15)
    assert sub.status == SubscriptionStatus.ACTIVE
    assert sub.price_at_purchase == Decimal("3000.00")
    assert sub.plan_name_snapshot == "Veg Monthly"
    assert sub.meal_type_snapshot == MealType.VEG

    body = detail.to_dict()
    assert body["startDate"] == "2024-01-15"
    assert body["endDate"] == "2024-02-15"
    assert body["plan"]["mess"]["name"] == "Annapurna Mess"


def test_weekly_subscription_runs_seven_days(store, container, student, mess):
    weekly = store.add_plan(mess, name="Veg Weekly", price="800", duration_type=DurationType.WEEKLY)

    detail = container.subscription_service.create_subscription(
        user_id=student.user_id, plan_id=weekly.plan_id, start_date="2024-01-15"
    )

    assert detail.subscription.end_date == date(2024, 1, 22)


def test_month_end_start_is_clamped():
    assert compute_end_date(date(2024, 1, 31), DurationType.MONTHLY) == date(2024, 2, 29)


def test_timestamp_start_date_is_accepted(container, student, monthly_plan):
    detail = container.subscription_service.create_subscription(
        user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15T10:30:00.000Z"
    )
    assert detail.subscription.start_date == date(2024, 1, 15)


@pytest.mark.parametrize(
    "plan_id,start_date",
    [(None, "2024-01-15"), (1, None), ("", ""), (1, "not-a-date")],
)
def test_missing_or_bad_input_is_rejected(container, student, monthly_plan, plan_id, start_date):
    with pytest.raises(ValidationError):
        container.subscription_service.create_subscription(
            user_id=student.user_id, plan_id=plan_id, start_date=start_date
        )


def test_unknown_or_inactive_plan_is_not_found(store, container, student, mess):
    retired = store.add_plan(mess, name="Old Plan", is_active=False)

    for plan_id in (999, retired.plan_id):
        with pytest.raises(NotFoundError) as exc:
            container.subscription_service.create_subscription(
                user_id=student.user_id, plan_id=plan_id, start_date="2024-01-15"
            )
        assert exc.value.message == "Plan not found or inactive"


def test_second_active_subscription_conflicts_until_cancelled(store, container, student, monthly_plan):
    svc = container.subscription_service
    first = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15")

    with pytest.raises(ConflictError):
        svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-03-01")

    cancelled = svc.cancel_subscription(subscription_id=first.subscription.subscription_id, user_id=student.user_id)
    assert cancelled.subscription.status == SubscriptionStatus.CANCELLED

    again = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-03-01")
    assert again.subscription.status == SubscriptionStatus.ACTIVE
    assert len(store.subscriptions) == 2


def test_store_level_uniqueness_surfaces_as_conflict(container, student, monthly_plan):
    # Simulates the loser of a concurrent create: the pre-check passes, the insert does not.
    repo = container.subscriptions_repo
    repo.create_active(
        user_id=student.user_id,
        plan_id=monthly_plan.plan_id,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 2, 1),
        price_at_purchase=monthly_plan.price,
        plan_name_snapshot=monthly_plan.name,
        meal_type_snapshot=monthly_plan.meal_type,
    )
    with pytest.raises(ConflictError):
        repo.create_active(
            user_id=student.user_id,
            plan_id=monthly_plan.plan_id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 2, 1),
            price_at_purchase=monthly_plan.price,
            plan_name_snapshot=monthly_plan.name,
            meal_type_snapshot=monthly_plan.meal_type,
        )


def test_same_user_may_hold_different_plans(store, container, student, mess, monthly_plan):
    other = store.add_plan(mess, name="Nonveg Monthly", price="3500", meal_type=MealType.NONVEG)
    svc = container.subscription_service

    svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15")
    svc.create_subscription(user_id=student.user_id, plan_id=other.plan_id, start_date="2024-01-15")

    assert len(svc.my_subscriptions(student.user_id)) == 2


def test_cancel_twice_is_rejected(container, student, monthly_plan):
    svc = container.subscription_service
    sub = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15")
    sid = sub.subscription.subscription_id

    svc.cancel_subscription(subscription_id=sid, user_id=student.user_id)
    with pytest.raises(ValidationError) as exc:
        svc.cancel_subscription(subscription_id=sid, user_id=student.user_id)
    assert exc.value.message == "Subscription is already cancelled"


def test_cancel_checks_existence_then_ownership(store, container, student, monthly_plan):
    svc = container.subscription_service
    sub = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15")
    intruder = store.add_user("Other", "other@mess.local")

    with pytest.raises(NotFoundError):
        svc.cancel_subscription(subscription_id=404, user_id=student.user_id)
    with pytest.raises(AuthorizationError):
        svc.cancel_subscription(subscription_id=sub.subscription.subscription_id, user_id=intruder.user_id)

    assert store.subscriptions[sub.subscription.subscription_id].status == SubscriptionStatus.ACTIVE


def test_snapshot_survives_plan_edits(store, container, student, monthly_plan):
    svc = container.subscription_service
    sub = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15")

    store.edit_plan(monthly_plan.plan_id, name="Veg Monthly Deluxe", price=Decimal("4200.00"))

    listed = svc.my_subscriptions(student.user_id)[0]
    assert listed.subscription.price_at_purchase == Decimal("3000.00")
    assert listed.subscription.plan_name_snapshot == "Veg Monthly"
    assert listed.plan.name == "Veg Monthly Deluxe"
    assert sub.subscription.price_at_purchase == Decimal("3000.00")


def test_my_subscriptions_newest_first_with_recent_attendance(store, container, student, mess, monthly_plan):
    weekly = store.add_plan(mess, name="Veg Weekly", price="800", duration_type=DurationType.WEEKLY)
    svc = container.subscription_service
    older = svc.create_subscription(user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-01")
    newer = svc.create_subscription(user_id=student.user_id, plan_id=weekly.plan_id, start_date="2024-01-10")

    older_id = older.subscription.subscription_id
    for day in range(1, 32):
        container.attendance_repo.upsert(
            subscription_id=older_id, day=date(2024, 1, day), marks=MealMarks(lunch=True)
        )

    items = svc.my_subscriptions(student.user_id)

    assert [d.subscription.subscription_id for d in items] == [newer.subscription.subscription_id, older_id]
    assert items[0].attendance == []
    recent = items[1].attendance
    assert len(recent) == 30
    assert recent[0].date == date(2024, 1, 31)
    assert recent[-1].date == date(2024, 1, 2)


def test_my_subscriptions_is_scoped_to_caller(store, container, student, monthly_plan):
    other = store.add_user("Other", "other@mess.local", role=Role.USER)
    container.subscription_service.create_subscription(
        user_id=student.user_id, plan_id=monthly_plan.plan_id, start_date="2024-01-15"
    )

    assert container.subscription_service.my_subscriptions(other.user_id) == []
