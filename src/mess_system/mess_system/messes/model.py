from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..users.model import UserSummary


@dataclass(frozen=True)
class Mess:
    """Domain entity: a meal provider owned by one mess_owner."""

    mess_id: int
    owner_id: int
    name: str
    location: str
    description: Optional[str] = None
    veg_available: bool = False
    nonveg_available: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: Optional[UserSummary] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.mess_id,
            "ownerId": self.owner_id,
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "vegAvailable": self.veg_available,
            "nonvegAvailable": self.nonveg_available,
            "isActive": self.is_active,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
        if self.owner is not None:
            out["owner"] = self.owner.to_dict()
        return out

    def to_brief_dict(self) -> dict:
        return {"id": self.mess_id, "name": self.name, "location": self.location}


@dataclass(frozen=True)
class MessUpdate:
    """Fields an owner may change. None means "leave as is"."""

    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    veg_available: Optional[bool] = None
    nonveg_available: Optional[bool] = None
    is_active: Optional[bool] = None

    def is_empty(self) -> bool:
        return all(v is None for v in self.__dict__.values())
