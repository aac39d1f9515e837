from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request, session

from ..common.http import current_actor, json_body, login_required, parse_date_arg
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..container import Container

# Default window for the record list when no range is given.
DEFAULT_RANGE_DAYS = 30


def register(app: Flask, container: Container) -> None:
    def _location_args(data: dict) -> dict:
        return {
            "office_id": data.get("office_id", ""),
            "latitude": data.get("latitude"),
            "longitude": data.get("longitude"),
            "reason": data.get("reason"),
        }

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        attendance_id = container.attendance_service.check_in(int(session["user_id"]), **_location_args(json_body()))
        return jsonify({"success": True, "attendance_id": attendance_id, "message": "Checked in"}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        attendance_id = container.attendance_service.check_out(int(session["user_id"]), **_location_args(json_body()))
        return jsonify({"success": True, "attendance_id": attendance_id, "message": "Checked out"})

    @app.route("/api/attendance/status", endpoint="attendance_status")
    @login_required
    def attendance_status():
        return jsonify(container.attendance_service.current_status(int(session["user_id"])))

    @app.route("/api/attendance/history", endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        return jsonify({"records": container.attendance_service.history(int(session["user_id"]), limit=limit)})

    @app.route("/api/attendance", endpoint="attendance_list")
    @login_required
    def attendance_list():
        actor = current_actor(container.permission_service)
        end = parse_date_arg(request.args.get("end"), "end") or date.today()
        start = parse_date_arg(request.args.get("start"), "start") or end - timedelta(days=DEFAULT_RANGE_DAYS)

        records = container.attendance_service.list_visible_records(
            viewer_id=actor.user_id,
            role=actor.role,
            permissions=actor.permissions,
            start=start,
            end=end,
        )
        return jsonify({"start": start.isoformat(), "end": end.isoformat(), "records": records})

    @app.route("/api/attendance/<int:attendance_id>", endpoint="attendance_detail")
    @login_required
    def attendance_detail(attendance_id: int):
        actor = current_actor(container.permission_service)
        return jsonify(
            container.attendance_service.get_visible_record(
                attendance_id,
                viewer_id=actor.user_id,
                role=actor.role,
                permissions=actor.permissions,
            )
        )

    @app.route("/api/attendance/summary/<int:year>/<int:month>", endpoint="attendance_summary")
    @login_required
    def attendance_summary(year: int, month: int):
        return jsonify(container.attendance_service.month_summary(int(session["user_id"]), year=year, month=month))
