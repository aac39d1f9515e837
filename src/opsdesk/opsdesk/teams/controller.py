from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, login_required
from ..container import Container
from ..core.constants import TEAMS_MANAGE
from ..permissions.service import require_permission


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/teams", methods=["GET"], endpoint="teams")
    @login_required
    def teams():
        require_permission(current_actor(container.permission_service), TEAMS_MANAGE)
        return jsonify({"teams": container.team_service.list_teams()})

    @app.route("/api/admin/teams", methods=["POST"], endpoint="create_team")
    @login_required
    def create_team():
        actor = current_actor(container.permission_service)
        data = json_body()
        team_id = container.team_service.create_team(
            actor=actor,
            name=data.get("name", ""),
            description=data.get("description"),
        )
        return jsonify({"success": True, "team_id": team_id}), 201

    @app.route("/api/admin/teams/<int:team_id>/members", methods=["POST"], endpoint="add_team_member")
    @login_required
    def add_team_member(team_id: int):
        actor = current_actor(container.permission_service)
        data = json_body()
        member_id = container.team_service.add_member(
            actor=actor,
            team_id=team_id,
            user_id=int(data.get("user_id") or 0),
            role=data.get("role", "member"),
        )
        return jsonify({"success": True, "member_id": member_id}), 201

    @app.route("/api/admin/teams/<int:team_id>/members/<int:user_id>", methods=["DELETE"], endpoint="remove_team_member")
    @login_required
    def remove_team_member(team_id: int, user_id: int):
        actor = current_actor(container.permission_service)
        container.team_service.remove_member(actor=actor, team_id=team_id, user_id=user_id)
        return jsonify({"success": True})
