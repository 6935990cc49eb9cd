from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import session

from ..core.exceptions import AuthenticationError
from .model import Actor
from .service import SessionUser


class SessionIdentityProvider:
    """Resolve the current caller from the Flask session cookie."""

    def sign_in(self, user: SessionUser, *, remember: bool = False) -> None:
        session.clear()
        session.permanent = bool(remember)
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role

    def sign_out(self) -> None:
        session.clear()

    def current_user(self) -> Optional[Actor]:
        user_id = session.get("user_id")
        if user_id is None:
            return None
        return Actor(user_id=int(user_id), role=str(session.get("role") or ""), name=session.get("name"))

    def require_user(self) -> Actor:
        actor = self.current_user()
        if actor is None:
            raise AuthenticationError("Sign in to continue")
        return actor


def login_required(identity: SessionIdentityProvider):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity.require_user()
            return view(*args, **kwargs)

        return wrapper

    return decorator
