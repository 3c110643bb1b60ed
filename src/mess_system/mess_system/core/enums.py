from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for route authorization."""

    USER = "user"
    MESS_OWNER = "mess_owner"
    ADMIN = "admin"


class DurationType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MealType(str, Enum):
    VEG = "veg"
    NONVEG = "nonveg"


class SubscriptionStatus(str, Enum):
    """Lifecycle of a subscription. CANCELLED is terminal."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
