from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_email, require_enum, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from .model import AuthIdentity, User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str

    def to_dict(self) -> dict:
        return {"user": self.user.to_public_dict(), "token": self.token}


class AuthService:
    """Use cases: register, login, read own profile."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        name: Any,
        email: Any,
        password: Any,
        role: Any = Role.USER.value,
        phone: Any = None,
    ) -> AuthResult:
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = require_enum(
            role or Role.USER.value,
            Role,
            "Invalid role. Must be one of: " + ", ".join(r.value for r in Role),
        )
        phone = optional_text(phone, "Phone")

        if self._users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            phone=phone,
        )
        user = self._users.get_by_id(user_id)
        logger.info("Registered user id=%s role=%s", user_id, role.value)
        return AuthResult(user=user, token=self._issue(user))

    def login(self, email: Any, password: Any) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(str(email).strip().lower())
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, str(password))
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")

        return AuthResult(user=user, token=self._issue(user))

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("User not found")
        return user

    def identify(self, token: Optional[str]) -> AuthIdentity:
        if not token:
            raise AuthenticationError("No token provided")
        return self._tokens.verify(token)

    def _issue(self, user: User) -> str:
        return self._tokens.issue(AuthIdentity(user_id=user.user_id, email=user.email, role=user.role))
