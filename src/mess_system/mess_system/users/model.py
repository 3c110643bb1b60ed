from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account. Plain data object with no DB access."""

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "phone": self.phone,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(frozen=True)
class UserSummary:
    """Contact card embedded in mess and dashboard responses."""

    user_id: int
    name: str
    email: str
    phone: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "email": self.email, "phone": self.phone}


@dataclass(frozen=True)
class AuthIdentity:
    """What the bearer token carries; trusted by every service call."""

    user_id: int
    email: str
    role: Role
