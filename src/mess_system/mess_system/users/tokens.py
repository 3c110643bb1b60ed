from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_MINUTES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import AuthIdentity

JWT_ALG = "HS256"


class TokenService:
    """Issue and verify HS256 bearer tokens carrying {id, email, role}."""

    def __init__(self, secret: str, *, expires_minutes: int = DEFAULT_TOKEN_MINUTES):
        self._secret = secret
        self._expires_minutes = int(expires_minutes)

    def issue(self, identity: AuthIdentity, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(identity.user_id),
            "id": identity.user_id,
            "email": identity.email,
            "role": identity.role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self._expires_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALG)

    def verify(self, token: str) -> AuthIdentity:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALG])
        except ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except JWTError:
            raise AuthenticationError("Invalid token")

        try:
            return AuthIdentity(
                user_id=int(payload["id"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token payload")
