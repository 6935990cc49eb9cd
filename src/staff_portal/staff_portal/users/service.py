from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: str


class AuthService:
    """Use cases: authenticate a user (login) and reload the signed-in user."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email or "", str) or not isinstance(password or "", str):
            raise ValidationError("email and password must be strings")
        email = (email or "").strip().lower()
        if not email or not password:
            raise AuthenticationError("Invalid email or password")

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' from seed.sql
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
        )

    def resolve(self, user_id: int) -> SessionUser:
        """Reload the signed-in user; a session for a removed user is no longer valid."""
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("Sign in to continue")
        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)
