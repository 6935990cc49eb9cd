from __future__ import annotations

import csv
import io
from datetime import date, timedelta

from src.staff_portal.staff_portal.core.enums import TimeOffStatus


def test_status_works_without_session(client):
    resp = client.get("/api/time/status")

    assert resp.status_code == 200
    assert resp.get_json() == {"clockedIn": False, "activeEntryId": None, "since": None}


def test_protected_routes_require_session(client):
    assert client.post("/api/time/clock-in").status_code == 401
    assert client.get("/api/time/entries").status_code == 401
    assert client.get("/api/timeoff").status_code == 401
    assert client.patch("/api/timeoff/1", json={"status": "APPROVED"}).status_code == 401

    body = client.post("/api/timeoff", json={}).get_json()
    assert body["error"] == "unauthenticated"


def test_login_me_logout_flow(client):
    resp = client.post("/auth/login", json={"email": "eli@staff.local", "password": "employee123"})
    assert resp.status_code == 200
    assert resp.get_json()["role"] == "EMPLOYEE"
    assert set(resp.get_json()) == {"id", "name", "email", "role"}

    assert client.get("/auth/me").get_json()["id"] == 2

    assert client.post("/auth/logout").status_code == 204
    assert client.get("/auth/me").status_code == 401


def test_login_with_bad_password(client):
    resp = client.post("/auth/login", json={"email": "eli@staff.local", "password": "nope"})

    assert resp.status_code == 401


def test_clock_in_twice_then_out(login_as):
    client = login_as(2, "EMPLOYEE")

    first = client.post("/api/time/clock-in", json={"source": "api"})
    assert first.status_code == 201
    assert first.get_json()["entry"]["source"] == "api"
    assert first.get_json()["entry"]["clockOut"] is None

    second = client.post("/api/time/clock-in")
    assert second.status_code == 409
    assert second.get_json()["error"] == "already_clocked_in"

    status = client.get("/api/time/status").get_json()
    assert status["clockedIn"] is True
    assert status["activeEntryId"] == first.get_json()["entry"]["id"]

    out = client.post("/api/time/clock-out")
    assert out.status_code == 200
    assert out.get_json()["entry"]["clockOut"] is not None

    again = client.post("/api/time/clock-out")
    assert again.status_code == 404
    assert again.get_json()["error"] == "no_open_entry"


def test_clock_in_rejects_unknown_source(login_as):
    resp = login_as(2, "EMPLOYEE").post("/api/time/clock-in", json={"source": "fax"})

    assert resp.status_code == 400


def test_entries_summary_and_csv(login_as):
    client = login_as(2, "EMPLOYEE")
    client.post("/api/time/clock-in")
    client.post("/api/time/clock-out")

    entries = client.get("/api/time/entries").get_json()["entries"]
    assert len(entries) == 1

    days = client.get("/api/time/summary?group=day").get_json()["days"]
    assert sum(len(rows) for rows in days.values()) == 1

    weeks = client.get("/api/time/summary?group=week").get_json()["weeks"]
    assert len(weeks) == 1

    assert client.get("/api/time/summary?group=month").status_code == 400

    resp = client.get("/api/time/entries.csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    rows = list(csv.DictReader(io.StringIO(resp.data.decode("utf-8-sig"))))
    assert len(rows) == 1
    assert rows[0]["source"] == "web"


def test_entries_rejects_bad_since(login_as):
    resp = login_as(2, "EMPLOYEE").get("/api/time/entries?since=yesterday")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"


def test_create_timeoff_and_validation(login_as, timeoff_repo):
    client = login_as(2, "EMPLOYEE")

    resp = client.post(
        "/api/timeoff", json={"startDate": "2025-09-01", "endDate": "2025-09-03", "reason": "trip"}
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["status"] == "PENDING"
    assert body["user"] == {"id": 2, "name": "Eli Employee"}
    assert body["startDate"] == "2025-09-01T00:00:00"

    reversed_range = client.post(
        "/api/timeoff", json={"startDate": "2025-09-03", "endDate": "2025-09-01", "reason": "trip"}
    )
    assert reversed_range.status_code == 400
    assert reversed_range.get_json()["error"] == "invalid_range"

    missing_reason = client.post("/api/timeoff", json={"startDate": "2025-09-01", "endDate": "2025-09-01"})
    assert missing_reason.status_code == 400

    assert len(timeoff_repo.rows) == 1


def test_list_timeoff_by_range_and_day(login_as, timeoff_repo):
    rid = timeoff_repo.add(user_id=2, start_date=date(2031, 5, 1), end_date=date(2031, 5, 3))
    client = login_as(3, "EMPLOYEE")

    listed = client.get("/api/timeoff?from=2031-05-01&to=2031-05-31").get_json()
    assert [r["id"] for r in listed] == [rid]

    on_day = client.get("/api/timeoff/day?date=2031-05-02").get_json()
    assert [r["id"] for r in on_day] == [rid]

    assert client.get("/api/timeoff/day?date=2031-05-04").get_json() == []
    assert client.get("/api/timeoff/day").status_code == 400

    bad = client.get("/api/timeoff?from=2031-05-31&to=2031-05-01")
    assert bad.status_code == 400
    assert bad.get_json()["error"] == "invalid_range"

    assert client.get("/api/timeoff?from=2031-05-01&status=bogus").status_code == 400


def test_calendar_endpoint(login_as, timeoff_repo):
    timeoff_repo.add(user_id=2, start_date=date(2031, 5, 1), end_date=date(2031, 5, 2))

    cal = login_as(2, "EMPLOYEE").get("/api/timeoff/calendar?from=2031-05-01&to=2031-05-31").get_json()

    assert sorted(cal) == ["2031-05-01", "2031-05-02"]


def test_employee_cannot_approve(login_as, timeoff_repo):
    rid = timeoff_repo.add(user_id=2, start_date=date(2031, 5, 1), end_date=date(2031, 5, 2))

    resp = login_as(2, "EMPLOYEE").patch(f"/api/timeoff/{rid}", json={"status": "APPROVED"})

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "forbidden"
    assert timeoff_repo.rows[rid].status == TimeOffStatus.PENDING


def test_manager_approves(login_as, timeoff_repo):
    rid = timeoff_repo.add(user_id=2, start_date=date(2031, 5, 1), end_date=date(2031, 5, 2))
    client = login_as(1, "MANAGER")

    resp = client.patch(f"/api/timeoff/{rid}", json={"status": "approved"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "APPROVED"
    assert resp.get_json()["decidedBy"] == 1

    assert client.patch(f"/api/timeoff/{rid}", json={"status": "PENDING"}).status_code == 400
    assert client.patch("/api/timeoff/999", json={"status": "DENIED"}).status_code == 404


def test_delete_rules(login_as, timeoff_repo):
    rid = timeoff_repo.add(user_id=2, start_date=date(2031, 5, 1), end_date=date(2031, 5, 2))
    client = login_as(3, "EMPLOYEE")

    assert client.delete(f"/api/timeoff/{rid}").status_code == 403

    login_as(2, "EMPLOYEE")
    assert client.delete(f"/api/timeoff/{rid}").status_code == 204
    assert client.delete(f"/api/timeoff/{rid}").status_code == 404


def test_old_denied_requests_hidden_from_listing(login_as, timeoff_repo):
    today = date.today()
    timeoff_repo.add(
        user_id=2,
        start_date=today - timedelta(days=12),
        end_date=today - timedelta(days=10),
        status=TimeOffStatus.DENIED,
    )

    client = login_as(1, "MANAGER")
    day = (today - timedelta(days=11)).isoformat()

    assert client.get(f"/api/timeoff/day?date={day}").get_json() == []


def test_me_reads_profile_from_store(login_as):
    client = login_as(4, "ADMIN", name="Stale Name")

    body = client.get("/auth/me").get_json()

    assert body == {"id": 4, "name": "Ada Admin", "email": "admin@staff.local", "role": "ADMIN"}


def test_me_with_session_for_removed_user(login_as):
    resp = login_as(77, "EMPLOYEE").get("/auth/me")

    assert resp.status_code == 401


def test_create_timeoff_rejects_non_text_fields(login_as, timeoff_repo):
    client = login_as(2, "EMPLOYEE")
    bad_bodies = [
        {"startDate": 20250901, "endDate": "2025-09-03", "reason": "trip"},
        {"startDate": "2025-09-01", "endDate": 20250903, "reason": "trip"},
        {"startDate": "2025-09-01", "endDate": "2025-09-03", "reason": 5},
    ]

    for body in bad_bodies:
        resp = client.post("/api/timeoff", json=body)
        assert resp.status_code == 400, body
        assert resp.get_json()["error"] == "invalid_input"

    assert timeoff_repo.rows == {}


def test_json_bodies_must_be_objects(login_as):
    client = login_as(1, "MANAGER")

    for method, path in [
        ("post", "/api/timeoff"),
        ("patch", "/api/timeoff/1"),
        ("post", "/api/time/clock-in"),
        ("post", "/auth/login"),
    ]:
        resp = getattr(client, method)(path, json=["x"])
        assert resp.status_code == 400, path
        assert resp.get_json()["error"] == "invalid_input"


def test_login_with_non_text_email(client):
    resp = client.post("/auth/login", json={"email": 5, "password": "manager123"})

    assert resp.status_code == 400
