from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, nullable_bool
from .model import MealAttendance, MealMarks
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, subscription_id, date, breakfast, lunch, dinner, created_at, updated_at"


def _row_to_attendance(r: dict) -> MealAttendance:
    return MealAttendance(
        attendance_id=int(r["attendance_id"]),
        subscription_id=int(r["subscription_id"]),
        date=r["date"],
        breakfast=as_bool(r["breakfast"]),
        lunch=as_bool(r["lunch"]),
        dinner=as_bool(r["dinner"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, subscription_id: int, day: date, marks: MealMarks) -> MealAttendance:
        flags = (nullable_bool(marks.breakfast), nullable_bool(marks.lunch), nullable_bool(marks.dinner))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(subscription_id, date, breakfast, lunch, dinner)
                VALUES(%s, %s, COALESCE(%s, 0), COALESCE(%s, 0), COALESCE(%s, 0))
                ON DUPLICATE KEY UPDATE
                    breakfast=COALESCE(%s, breakfast),
                    lunch=COALESCE(%s, lunch),
                    dinner=COALESCE(%s, dinner)
                """,
                (int(subscription_id), day, *flags, *flags),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE subscription_id=%s AND date=%s",
                (int(subscription_id), day),
            )
            return _row_to_attendance(fetchone(cur))

    def list_for_subscription(
        self,
        subscription_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[MealAttendance]:
        clauses = ["subscription_id=%s"]
        params: list[object] = [int(subscription_id)]
        if start is not None:
            clauses.append("date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("date <= %s")
            params.append(end)

        sql = f"SELECT {_COLUMNS} FROM attendance WHERE {' AND '.join(clauses)} ORDER BY date DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_attendance(r) for r in fetchall(cur)]
