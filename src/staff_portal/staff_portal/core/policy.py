"""Authorization predicates shared by the services and controllers.

Roles are an open set of strings. Anything other than MANAGER or ADMIN,
including roles this module has never heard of, is non-privileged.
"""

from __future__ import annotations

from typing import Optional, Union

from .enums import Role

PRIVILEGED_ROLES = frozenset({Role.MANAGER.value, Role.ADMIN.value})

RoleLike = Union[Role, str, None]


def normalize_role(role: RoleLike) -> str:
    if role is None:
        return ""
    value = role.value if isinstance(role, Role) else str(role)
    return value.strip().upper()


def is_privileged(role: RoleLike) -> bool:
    return normalize_role(role) in PRIVILEGED_ROLES


def can_approve_or_deny(role: RoleLike) -> bool:
    return is_privileged(role)


def _same_user(actor_id: Optional[int], owner_id: Optional[int]) -> bool:
    return actor_id is not None and owner_id is not None and int(actor_id) == int(owner_id)


def can_delete_time_off(actor_id: Optional[int], actor_role: RoleLike, owner_user_id: Optional[int]) -> bool:
    return _same_user(actor_id, owner_user_id) or is_privileged(actor_role)


def can_manage_rsvp_entry(actor_id: Optional[int], actor_role: RoleLike, entry_owner_id: Optional[int]) -> bool:
    """Used by the events/RSVP module for editing or removing someone's RSVP."""
    return is_privileged(actor_role) or _same_user(actor_id, entry_owner_id)
