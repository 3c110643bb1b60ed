from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import DurationType, MealType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Plan
from .repository import PlanRepository

_PLAN_COLUMNS = "plan_id, mess_id, name, price, duration_type, meal_type, meals_per_day, is_active, created_at"


def _row_to_plan(r: dict) -> Plan:
    return Plan(
        plan_id=int(r["plan_id"]),
        mess_id=int(r["mess_id"]),
        name=r["name"],
        price=Decimal(str(r["price"])),
        duration_type=DurationType(r["duration_type"]),
        meal_type=MealType(r["meal_type"]),
        meals_per_day=int(r["meals_per_day"]),
        is_active=as_bool(r.get("is_active")),
        created_at=r.get("created_at"),
    )


class MySQLPlanRepository(PlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, plan_id: int) -> Optional[Plan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PLAN_COLUMNS} FROM plans WHERE plan_id=%s", (int(plan_id),))
            r = fetchone(cur)
            return _row_to_plan(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO plans(mess_id, name, price, duration_type, meal_type, meals_per_day)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(mess_id), name, price, duration_type.value, meal_type.value, int(meals_per_day)),
            )
            return int(cur.lastrowid)

    def list_active_for_mess(self, mess_id: int) -> Sequence[Plan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PLAN_COLUMNS}
                FROM plans
                WHERE mess_id=%s AND is_active=1
                ORDER BY price ASC, plan_id ASC
                """,
                (int(mess_id),),
            )
            return [_row_to_plan(r) for r in fetchall(cur)]
