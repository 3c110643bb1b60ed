from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import SubscriberToday


class DashboardRepository(Protocol):
    def list_subscribers_on(self, *, mess_id: int, day: date) -> Sequence[SubscriberToday]:
        """Active subscriptions to the mess's plans whose window contains ``day``,
        joined with that day's attendance row when one exists.
        """
        raise NotImplementedError
