from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import iso_datetime, iso_day_start, json_body
from ..container import Container
from ..users.identity import login_required
from .model import TimeOffRequest


def request_to_dict(r: TimeOffRequest) -> dict:
    return {
        "id": r.request_id,
        "userId": r.user_id,
        "user": {"id": r.user_id, "name": r.user_name},
        "reason": r.reason,
        "status": r.status.value,
        "startDate": iso_day_start(r.start_date),
        "endDate": iso_day_start(r.end_date),
        "createdAt": iso_datetime(r.created_at),
        "decidedBy": r.decided_by,
        "decidedAt": iso_datetime(r.decided_at),
    }


def register(app: Flask, container: Container) -> None:
    identity = container.identity
    service = container.timeoff_service

    @app.route("/api/timeoff", methods=["POST"], endpoint="create_timeoff")
    def create_timeoff():
        actor = identity.require_user()
        body = json_body()
        created = service.create(
            user_id=actor.user_id,
            start_date=body.get("startDate"),
            end_date=body.get("endDate"),
            reason=body.get("reason"),
        )
        return jsonify(request_to_dict(created)), 201

    @app.route("/api/timeoff", methods=["GET"], endpoint="list_timeoff")
    @login_required(identity)
    def list_timeoff():
        items = service.list_by_range(
            parse_optional_date(request.args.get("from"), "from"),
            parse_optional_date(request.args.get("to"), "to"),
            status=request.args.get("status"),
        )
        return jsonify([request_to_dict(r) for r in items])

    @app.route("/api/timeoff/day", methods=["GET"], endpoint="list_timeoff_day")
    @login_required(identity)
    def list_timeoff_day():
        day = parse_iso_date(request.args.get("date"), "date")
        items = service.list_for_day(day, status=request.args.get("status"))
        return jsonify([request_to_dict(r) for r in items])

    @app.route("/api/timeoff/calendar", methods=["GET"], endpoint="timeoff_calendar")
    @login_required(identity)
    def timeoff_calendar():
        index = service.calendar(
            parse_optional_date(request.args.get("from"), "from"),
            parse_optional_date(request.args.get("to"), "to"),
            status=request.args.get("status"),
        )
        return jsonify({day: [request_to_dict(r) for r in items] for day, items in index.items()})

    @app.route("/api/timeoff/<int:request_id>", methods=["PATCH"], endpoint="set_timeoff_status")
    @login_required(identity)
    def set_timeoff_status(request_id: int):
        body = json_body()
        updated = service.set_status(
            request_id=request_id,
            new_status=body.get("status"),
            actor=identity.current_user(),
        )
        return jsonify(request_to_dict(updated))

    @app.route("/api/timeoff/<int:request_id>", methods=["DELETE"], endpoint="delete_timeoff")
    @login_required(identity)
    def delete_timeoff(request_id: int):
        service.delete(request_id=request_id, actor=identity.current_user())
        return "", 204
