from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import MealType, SubscriptionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subscription
from .repository import SubscriptionRepository

_COLUMNS = """
    subscription_id, user_id, plan_id, start_date, end_date, status,
    price_at_purchase, plan_name_snapshot, meal_type_snapshot, created_at, updated_at
"""


def _row_to_subscription(r: dict) -> Subscription:
    return Subscription(
        subscription_id=int(r["subscription_id"]),
        user_id=int(r["user_id"]),
        plan_id=int(r["plan_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=SubscriptionStatus(r["status"]),
        price_at_purchase=Decimal(str(r["price_at_purchase"])),
        plan_name_snapshot=r["plan_name_snapshot"],
        meal_type_snapshot=MealType(r["meal_type_snapshot"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLSubscriptionRepository(SubscriptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, subscription_id: int) -> Optional[Subscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subscriptions WHERE subscription_id=%s", (int(subscription_id),))
            r = fetchone(cur)
            return _row_to_subscription(r) if r else None

    def find_active(self, *, user_id: int, plan_id: int) -> Optional[Subscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM subscriptions WHERE user_id=%s AND plan_id=%s AND status=%s",
                (int(user_id), int(plan_id), SubscriptionStatus.ACTIVE.value),
            )
            r = fetchone(cur)
            return _row_to_subscription(r) if r else None

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
        # uq_subscriptions_active rejects a second active row for the same (user, plan).
        with db_cursor(
            self._conn_factory,
            conflict_message="You already have an active subscription to this plan",
        ) as (_, cur):
            cur.execute(
                """
                INSERT INTO subscriptions(
                    user_id, plan_id, start_date, end_date, status,
                    price_at_purchase, plan_name_snapshot, meal_type_snapshot
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    int(plan_id),
                    start_date,
                    end_date,
                    SubscriptionStatus.ACTIVE.value,
                    price_at_purchase,
                    plan_name_snapshot,
                    meal_type_snapshot.value,
                ),
            )
            return int(cur.lastrowid)

    def transition_status(
        self,
        subscription_id: int,
        *,
        from_status: SubscriptionStatus,
        to_status: SubscriptionStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE subscriptions SET status=%s WHERE subscription_id=%s AND status=%s",
                (to_status.value, int(subscription_id), from_status.value),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int) -> Sequence[Subscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM subscriptions
                WHERE user_id=%s
                ORDER BY created_at DESC, subscription_id DESC
                """,
                (int(user_id),),
            )
            return [_row_to_subscription(r) for r in fetchall(cur)]
