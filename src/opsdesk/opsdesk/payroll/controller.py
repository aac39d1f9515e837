from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.http import current_actor, login_required
from ..container import Container
from .service import DEFAULT_HISTORY_MONTHS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/me/<int:year>/<int:month>", endpoint="my_payroll")
    @login_required
    def my_payroll(year: int, month: int):
        actor = current_actor(container.permission_service)
        view = container.payroll_service.get_for_user(actor=actor, year=year, month=month)
        return jsonify(asdict(view))

    @app.route("/api/payroll/me/history", endpoint="my_payroll_history")
    @login_required
    def my_payroll_history():
        actor = current_actor(container.permission_service)
        limit = request.args.get("limit", DEFAULT_HISTORY_MONTHS, type=int)
        return jsonify({"payroll": [asdict(v) for v in container.payroll_service.history(actor=actor, limit=limit)]})

    @app.route("/api/payroll/<int:year>/<int:month>", endpoint="payroll_month")
    @login_required
    def payroll_month(year: int, month: int):
        actor = current_actor(container.permission_service)
        user_id = request.args.get("user_id", type=int)
        if user_id is not None:
            view = container.payroll_service.get_for_user(actor=actor, user_id=user_id, year=year, month=month)
            return jsonify(asdict(view))
        rows = container.payroll_service.list_month(actor=actor, year=year, month=month)
        return jsonify({"year": year, "month": month, "payroll": [asdict(v) for v in rows]})
