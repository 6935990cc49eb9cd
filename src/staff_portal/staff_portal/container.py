from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DENIED_VISIBILITY_DAYS, ENTRY_HISTORY_MONTHS
from .database.connection import DBConfig, DatabaseConnection
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import TimeAttendanceService
from .timeoff.mysql_timeoff_repository import MySQLTimeOffRepository
from .timeoff.repository import TimeOffRepository
from .timeoff.service import TimeOffService
from .users.identity import SessionIdentityProvider
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    time_entries_repo: TimeEntryRepository
    timeoff_repo: TimeOffRepository

    identity: SessionIdentityProvider
    auth_service: AuthService
    time_service: TimeAttendanceService
    timeoff_service: TimeOffService


def assemble(
    *,
    users_repo: UserRepository,
    time_entries_repo: TimeEntryRepository,
    timeoff_repo: TimeOffRepository,
    denied_visibility_days: int = DENIED_VISIBILITY_DAYS,
    history_months: int = ENTRY_HISTORY_MONTHS,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    return Container(
        users_repo=users_repo,
        time_entries_repo=time_entries_repo,
        timeoff_repo=timeoff_repo,
        identity=SessionIdentityProvider(),
        auth_service=AuthService(users_repo),
        time_service=TimeAttendanceService(time_entries_repo, history_months=history_months),
        timeoff_service=TimeOffService(timeoff_repo, denied_visibility_days=denied_visibility_days),
    )


def build_container(
    *,
    db_config: dict,
    denied_visibility_days: int = DENIED_VISIBILITY_DAYS,
    history_months: int = ENTRY_HISTORY_MONTHS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        timeoff_repo=MySQLTimeOffRepository(conn),
        denied_visibility_days=denied_visibility_days,
        history_months=history_months,
    )
