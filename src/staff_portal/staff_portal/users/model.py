from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a staff member.

    `role` is kept as the raw stored string so new roles need no code change.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: str


@dataclass(frozen=True)
class Actor:
    """The signed-in caller as seen by authorization checks."""

    user_id: int
    role: str
    name: Optional[str] = None
