from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..messes.repository import MessRepository
from ..messes.service import load_owned_mess
from .model import TodaySummary
from .repository import DashboardRepository


class DashboardService:
    """Owner-facing read side: who is subscribed today and which meals they took."""

    def __init__(self, messes: MessRepository, dashboard: DashboardRepository):
        self._messes = messes
        self._dashboard = dashboard

    def today_summary(self, *, mess_id: int, owner_id: int, today: Optional[date] = None) -> TodaySummary:
        mess = load_owned_mess(self._messes, mess_id, owner_id, action="view this mess's dashboard")
        day = today or today_local()
        rows = self._dashboard.list_subscribers_on(mess_id=mess.mess_id, day=day)
        return TodaySummary(day=day, mess=mess, details=list(rows))
