from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..common.validators import optional_bool, optional_text, require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..plans.model import Plan
from ..plans.repository import PlanRepository
from .model import Mess, MessUpdate
from .repository import MessRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessWithPlans:
    mess: Mess
    plans: Sequence[Plan]

    def to_dict(self) -> dict:
        out = self.mess.to_dict()
        out["plans"] = [p.to_dict() for p in self.plans]
        return out


def load_owned_mess(messes: MessRepository, mess_id: int, owner_id: int, *, action: str) -> Mess:
    """Fetch a mess and check that ``owner_id`` owns it (NotFound, then Forbidden)."""
    mess = messes.get_by_id(int(mess_id))
    if not mess:
        raise NotFoundError("Mess not found")
    if mess.owner_id != int(owner_id):
        raise AuthorizationError(f"You are not authorized to {action}")
    return mess


class MessService:
    def __init__(self, messes: MessRepository, plans: PlanRepository):
        self._messes = messes
        self._plans = plans

    def create_mess(
        self,
        *,
        owner_id: int,
        name: Any,
        location: Any,
        description: Any = None,
        veg_available: Any = None,
        nonveg_available: Any = None,
    ) -> Mess:
        if not name or not location:
            raise ValidationError("Name and location are required")

        mess_id = self._messes.create(
            owner_id=int(owner_id),
            name=require_non_empty(name, "Mess name"),
            location=require_non_empty(location, "Location"),
            description=optional_text(description, "Description"),
            veg_available=bool(optional_bool(veg_available, "vegAvailable")),
            nonveg_available=bool(optional_bool(nonveg_available, "nonvegAvailable")),
        )
        logger.info("Mess id=%s created by owner id=%s", mess_id, owner_id)
        return self._messes.get_by_id(mess_id)

    def list_messes(self) -> list[MessWithPlans]:
        return [self._with_plans(m) for m in self._messes.list_active()]

    def get_mess(self, mess_id: int) -> MessWithPlans:
        mess = self._messes.get_by_id(int(mess_id))
        if not mess:
            raise NotFoundError("Mess not found")
        return self._with_plans(mess)

    def my_messes(self, owner_id: int) -> list[MessWithPlans]:
        return [self._with_plans(m) for m in self._messes.list_by_owner(int(owner_id))]

    def update_mess(self, *, mess_id: int, owner_id: int, data: dict) -> MessWithPlans:
        load_owned_mess(self._messes, mess_id, owner_id, action="update this mess")

        changes = MessUpdate(
            name=require_non_empty(data["name"], "Mess name") if "name" in data else None,
            location=require_non_empty(data["location"], "Location") if "location" in data else None,
            description=optional_text(data.get("description"), "Description"),
            veg_available=optional_bool(data.get("vegAvailable"), "vegAvailable"),
            nonveg_available=optional_bool(data.get("nonvegAvailable"), "nonvegAvailable"),
            is_active=optional_bool(data.get("isActive"), "isActive"),
        )
        if not changes.is_empty():
            self._messes.update(int(mess_id), changes)

        return self._with_plans(self._messes.get_by_id(int(mess_id)))

    def _with_plans(self, mess: Mess) -> MessWithPlans:
        return MessWithPlans(mess=mess, plans=list(self._plans.list_active_for_mess(mess.mess_id)))
