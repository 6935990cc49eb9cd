from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.staff_portal.staff_portal.container import assemble
from src.staff_portal.staff_portal.core.enums import TimeOffStatus
from src.staff_portal.staff_portal.core.exceptions import ConflictError
from src.staff_portal.staff_portal.main import create_app
from src.staff_portal.staff_portal.time_entries.model import TimeEntry
from src.staff_portal.staff_portal.timeoff.model import TimeOffRequest
from src.staff_portal.staff_portal.users.model import User

TODAY = date(2025, 9, 10)


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email == email:
                return u
        return None


class InMemoryTimeEntries:
    """Mimics the unique (user_id, open_marker) key of the real table."""

    def __init__(self):
        self.entries: dict[int, TimeEntry] = {}
        self._id = 0

    def find_open_for_user(self, user_id: int) -> Optional[TimeEntry]:
        open_entries = [e for e in self.entries.values() if e.user_id == user_id and e.clock_out is None]
        open_entries.sort(key=lambda e: e.clock_in, reverse=True)
        return open_entries[0] if open_entries else None

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self.entries.get(int(entry_id))

    def create_clock_in(self, *, user_id: int, clock_in: datetime, source: str) -> int:
        if any(e.user_id == user_id and e.clock_out is None for e in self.entries.values()):
            raise ConflictError("Duplicate entry for key 'uq_time_entries_one_open'")
        self._id += 1
        self.entries[self._id] = TimeEntry(
            entry_id=self._id, user_id=user_id, clock_in=clock_in, clock_out=None, source=source
        )
        return self._id

    def close_entry(self, *, entry_id: int, clock_out: datetime) -> bool:
        e = self.entries.get(int(entry_id))
        if not e or e.clock_out is not None:
            return False
        self.entries[e.entry_id] = replace(e, clock_out=clock_out)
        return True

    def list_since(self, *, user_id: int, since: datetime):
        items = [e for e in self.entries.values() if e.user_id == user_id and e.clock_in >= since]
        return sorted(items, key=lambda e: e.clock_in)


class InMemoryTimeOff:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.rows: dict[int, TimeOffRequest] = {}
        self._id = 0
        self._tick = 0

    def _joined(self, r: TimeOffRequest) -> TimeOffRequest:
        owner = self._users.get_by_id(r.user_id)
        return replace(r, user_name=owner.name if owner else None)

    def add(self, *, user_id: int, start_date: date, end_date: date, status=TimeOffStatus.PENDING, reason="x") -> int:
        """Test helper: insert a row directly, bypassing service validation."""
        rid = self.create(user_id=user_id, start_date=start_date, end_date=end_date, reason=reason)
        self.rows[rid] = replace(self.rows[rid], status=status)
        return rid

    def create(self, *, user_id: int, start_date: date, end_date: date, reason: str) -> int:
        self._id += 1
        self._tick += 1
        self.rows[self._id] = TimeOffRequest(
            request_id=self._id,
            user_id=user_id,
            reason=reason,
            status=TimeOffStatus.PENDING,
            start_date=start_date,
            end_date=end_date,
            created_at=datetime(2025, 8, 1, 9, 0, self._tick % 60),
        )
        return self._id

    def get_by_id(self, request_id: int) -> Optional[TimeOffRequest]:
        r = self.rows.get(int(request_id))
        return self._joined(r) if r else None

    def list_overlapping(self, *, range_from, range_to, denied_cutoff, status=None, order_by="start_date"):
        out = []
        for r in self.rows.values():
            if r.end_date < range_from:
                continue
            if range_to is not None and r.start_date > range_to:
                continue
            if r.status == TimeOffStatus.DENIED and r.end_date < denied_cutoff:
                continue
            if status is not None and r.status != status:
                continue
            out.append(self._joined(r))
        key = (lambda r: (r.created_at, r.request_id)) if order_by == "created_at" else (lambda r: (r.start_date, r.request_id))
        return sorted(out, key=key)

    def update_status(self, *, request_id: int, status, decided_by: int, decided_at: datetime) -> None:
        r = self.rows.get(int(request_id))
        if r:
            self.rows[r.request_id] = replace(r, status=status, decided_by=decided_by, decided_at=decided_at)

    def delete(self, request_id: int) -> bool:
        return self.rows.pop(int(request_id), None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 9, 10, 8, 30, 0)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(1, "Maya Manager", "manager@staff.local", generate_password_hash("manager123"), "MANAGER"),
            User(2, "Eli Employee", "eli@staff.local", generate_password_hash("employee123"), "EMPLOYEE"),
            User(3, "Erin Employee", "erin@staff.local", generate_password_hash("employee123"), "EMPLOYEE"),
            User(4, "Ada Admin", "admin@staff.local", generate_password_hash("admin123"), "ADMIN"),
        ]
    )


@pytest.fixture
def entries_repo() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()


@pytest.fixture
def timeoff_repo(users_repo) -> InMemoryTimeOff:
    return InMemoryTimeOff(users_repo)


@pytest.fixture
def container(users_repo, entries_repo, timeoff_repo):
    return assemble(users_repo=users_repo, time_entries_repo=entries_repo, timeoff_repo=timeoff_repo)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int, role: str, name: str = "Test User"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role
            sess["name"] = name
        return client

    return _login
