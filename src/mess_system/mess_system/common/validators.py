from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Any) -> str:
    email = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Valid email is required")
    return email.lower()


def optional_bool(value: Any, field_name: str) -> Optional[bool]:
    """Return None when the field was not supplied; reject non-boolean JSON values."""
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def require_enum(value: Any, enum_cls: Type[E], message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)


def require_price(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None or value == "":
        raise ValidationError("Valid price is required")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("Valid price is required")
    if not price.is_finite() or price < 0:
        raise ValidationError("Valid price is required")
    return price.quantize(Decimal("0.01"))


def require_int_range(value: Any, field_name: str, low: int, high: int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_positive_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if number <= 0:
        raise ValidationError(f"{field_name} is required")
    return number
