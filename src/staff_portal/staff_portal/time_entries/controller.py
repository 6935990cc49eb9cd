from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import iso_datetime, json_body
from ..container import Container
from ..core.enums import EntrySource
from ..core.exceptions import ValidationError
from .model import ClockStatus, TimeEntry
from .summary import summarize_by_day, summarize_by_week, worked_minutes


def entry_to_dict(e: TimeEntry) -> dict:
    return {
        "id": e.entry_id,
        "userId": e.user_id,
        "clockIn": iso_datetime(e.clock_in),
        "clockOut": iso_datetime(e.clock_out),
        "source": e.source,
    }


def status_to_dict(s: ClockStatus) -> dict:
    return {
        "clockedIn": s.clocked_in,
        "activeEntryId": s.active_entry_id,
        "since": iso_datetime(s.since),
    }


def _serialize_rows(rows: list[dict]) -> list[dict]:
    return [
        {"id": r["id"], "clockIn": iso_datetime(r["clock_in"]), "clockOut": iso_datetime(r["clock_out"]), "hours": r["hours"]}
        for r in rows
    ]


def register(app: Flask, container: Container) -> None:
    identity = container.identity
    service = container.time_service

    def _source() -> str:
        raw = json_body().get("source") or EntrySource.WEB.value
        try:
            return EntrySource(str(raw).strip().lower()).value
        except ValueError:
            raise ValidationError(f"Unknown source: {raw}")

    @app.route("/api/time/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        actor = identity.require_user()
        entry = service.clock_in(actor.user_id, source=_source())
        return jsonify({"message": "Clocked in", "entry": entry_to_dict(entry)}), 201

    @app.route("/api/time/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        actor = identity.require_user()
        entry = service.clock_out(actor.user_id)
        return jsonify({"message": "Clocked out", "entry": entry_to_dict(entry)})

    @app.route("/api/time/status", methods=["GET"], endpoint="clock_status")
    def clock_status():
        actor = identity.current_user()
        status = service.get_status(actor.user_id if actor else None)
        return jsonify(status_to_dict(status))

    @app.route("/api/time/entries", methods=["GET"], endpoint="time_entries")
    def time_entries():
        actor = identity.require_user()
        since = parse_optional_date(request.args.get("since"), "since")
        entries = service.list_entries(actor.user_id, since)
        return jsonify({"entries": [entry_to_dict(e) for e in entries]})

    @app.route("/api/time/summary", methods=["GET"], endpoint="time_summary")
    def time_summary():
        actor = identity.require_user()
        since = parse_optional_date(request.args.get("since"), "since")
        group = (request.args.get("group") or "day").strip().lower()
        entries = service.list_entries(actor.user_id, since)

        if group == "day":
            days = summarize_by_day(entries)
            return jsonify({"days": {k: _serialize_rows(v) for k, v in days.items()}})
        if group == "week":
            weeks = summarize_by_week(entries)
            out = {}
            for key, week in weeks.items():
                out[key] = {
                    name: (_serialize_rows(value) if isinstance(value, list) else value)
                    for name, value in week.items()
                }
            return jsonify({"weeks": out})
        raise ValidationError("group must be 'day' or 'week'")

    @app.route("/api/time/entries.csv", methods=["GET"], endpoint="time_entries_csv")
    def time_entries_csv():
        actor = identity.require_user()
        since = parse_optional_date(request.args.get("since"), "since")
        entries = service.list_entries(actor.user_id, since)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["date", "clock_in", "clock_out", "minutes", "source"])
        writer.writeheader()
        for e in entries:
            writer.writerow(
                {
                    "date": e.clock_in.strftime("%Y-%m-%d"),
                    "clock_in": e.clock_in.strftime("%H:%M"),
                    "clock_out": e.clock_out.strftime("%H:%M") if e.clock_out else "-",
                    "minutes": worked_minutes(e),
                    "source": e.source,
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=time_entries_{actor.user_id}.csv"},
        )
