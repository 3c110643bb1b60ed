from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import MealType, SubscriptionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall
from ..users.model import UserSummary
from .model import SubscriberToday
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_subscribers_on(self, *, mess_id: int, day: date) -> Sequence[SubscriberToday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.subscription_id,
                    u.user_id, u.name, u.email, u.phone,
                    p.plan_id, p.name AS plan_name, p.meal_type,
                    a.breakfast, a.lunch, a.dinner
                FROM subscriptions s
                JOIN plans p ON p.plan_id = s.plan_id
                JOIN users u ON u.user_id = s.user_id
                LEFT JOIN attendance a ON a.subscription_id = s.subscription_id AND a.date = %s
                WHERE p.mess_id = %s
                  AND s.status = %s
                  AND s.start_date <= %s
                  AND s.end_date >= %s
                ORDER BY s.subscription_id ASC
                """,
                (day, int(mess_id), SubscriptionStatus.ACTIVE.value, day, day),
            )
            return [
                SubscriberToday(
                    subscription_id=int(r["subscription_id"]),
                    user=UserSummary(
                        user_id=int(r["user_id"]),
                        name=r["name"],
                        email=r["email"],
                        phone=r.get("phone"),
                    ),
                    plan_id=int(r["plan_id"]),
                    plan_name=r["plan_name"],
                    meal_type=MealType(r["meal_type"]),
                    breakfast=as_bool(r.get("breakfast")),
                    lunch=as_bool(r.get("lunch")),
                    dinner=as_bool(r.get("dinner")),
                )
                for r in fetchall(cur)
            ]
