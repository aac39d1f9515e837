from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_actor, json_body, login_required, parse_date_arg
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-requests", methods=["GET"], endpoint="leave_requests")
    @login_required
    def leave_requests():
        actor = current_actor(container.permission_service)
        rows = container.leave_service.list_requests(
            actor=actor,
            user_id=request.args.get("user_id", type=int),
            status=request.args.get("status") or None,
            year=request.args.get("year", type=int),
            month=request.args.get("month", type=int),
        )
        return jsonify({"leave_requests": rows})

    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        actor = current_actor(container.permission_service)
        data = json_body()
        request_id = container.leave_service.create_request(
            actor=actor,
            leave_type=data.get("leave_type", ""),
            start_date=parse_date_arg(data.get("start_date"), "start_date"),
            end_date=parse_date_arg(data.get("end_date"), "end_date"),
            reason=data.get("reason") or "",
        )
        return jsonify({"success": True, "id": request_id, "message": "Leave request submitted"}), 201

    @app.route("/api/leave-requests/<int:request_id>", methods=["PUT"], endpoint="decide_leave_request")
    @login_required
    def decide_leave_request(request_id: int):
        actor = current_actor(container.permission_service)
        data = json_body()
        updated = container.leave_service.decide(
            actor=actor,
            request_id=request_id,
            status=data.get("status", ""),
            rejection_reason=data.get("rejection_reason"),
            payment_type=data.get("payment_type"),
        )
        return jsonify({"success": True, "leave_request": container.leave_service.to_ui(updated)})

    @app.route("/api/leave-requests/<int:request_id>", methods=["DELETE"], endpoint="delete_leave_request")
    @login_required
    def delete_leave_request(request_id: int):
        actor = current_actor(container.permission_service)
        container.leave_service.delete_request(actor=actor, request_id=request_id)
        return jsonify({"success": True})

    @app.route("/api/leave-balance", endpoint="leave_balance")
    @login_required
    def leave_balance():
        actor = current_actor(container.permission_service)
        return jsonify(
            container.leave_service.leave_balance(
                actor=actor,
                user_id=request.args.get("user_id", type=int),
                year=request.args.get("year", type=int),
                month=request.args.get("month", type=int),
            )
        )
