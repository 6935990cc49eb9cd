from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Known user roles.

    Roles are stored as plain strings; values outside this enum are allowed
    and treated as non-privileged by the policy functions.
    """

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class TimeOffStatus(str, Enum):
    """Approval state of a time-off request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class EntrySource(str, Enum):
    """Where a clock punch originated."""

    WEB = "web"
    API = "api"
