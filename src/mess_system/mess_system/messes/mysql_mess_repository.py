from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, nullable_bool
from ..users.model import UserSummary
from .model import Mess, MessUpdate
from .repository import MessRepository

_SELECT = """
    SELECT m.mess_id, m.owner_id, m.name, m.location, m.description,
           m.veg_available, m.nonveg_available, m.is_active, m.created_at, m.updated_at,
           u.name AS owner_name, u.email AS owner_email, u.phone AS owner_phone
    FROM messes m
    JOIN users u ON u.user_id = m.owner_id
"""

_UPDATABLE = ("name", "location", "description", "veg_available", "nonveg_available", "is_active")


def _row_to_mess(r: dict) -> Mess:
    return Mess(
        mess_id=int(r["mess_id"]),
        owner_id=int(r["owner_id"]),
        name=r["name"],
        location=r["location"],
        description=r.get("description"),
        veg_available=as_bool(r.get("veg_available")),
        nonveg_available=as_bool(r.get("nonveg_available")),
        is_active=as_bool(r.get("is_active")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        owner=UserSummary(
            user_id=int(r["owner_id"]),
            name=r["owner_name"],
            email=r["owner_email"],
            phone=r.get("owner_phone"),
        ),
    )


class MySQLMessRepository(MessRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, mess_id: int) -> Optional[Mess]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.mess_id=%s", (int(mess_id),))
            r = fetchone(cur)
            return _row_to_mess(r) if r else None

    def create(
        self,
        *,
        owner_id: int,
        name: str,
        location: str,
        description: Optional[str],
        veg_available: bool,
        nonveg_available: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO messes(owner_id, name, location, description, veg_available, nonveg_available)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(owner_id), name, location, description, nullable_bool(veg_available), nullable_bool(nonveg_available)),
            )
            return int(cur.lastrowid)

    def update(self, mess_id: int, changes: MessUpdate) -> bool:
        sets: list[str] = []
        params: list[object] = []
        for field in _UPDATABLE:
            value = getattr(changes, field)
            if value is None:
                continue
            sets.append(f"{field}=%s")
            params.append(nullable_bool(value) if isinstance(value, bool) else value)

        if not sets:
            return False

        params.append(int(mess_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE messes SET {', '.join(sets)} WHERE mess_id=%s", tuple(params))
            return cur.rowcount > 0

    def list_active(self) -> Sequence[Mess]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.is_active=1 ORDER BY m.created_at DESC, m.mess_id DESC")
            return [_row_to_mess(r) for r in fetchall(cur)]

    def list_by_owner(self, owner_id: int) -> Sequence[Mess]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE m.owner_id=%s ORDER BY m.created_at DESC, m.mess_id DESC", (int(owner_id),))
            return [_row_to_mess(r) for r in fetchall(cur)]
