from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import current_actor, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["team_id"] = s_user.team_id

        return jsonify({
            "success": True,
            "user": {
                "user_id": s_user.user_id,
                "name": s_user.name,
                "role": s_user.role.value,
                "team_id": s_user.team_id,
            },
            "permissions": container.permission_service.permissions_for_role(s_user.role),
        })

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        actor = current_actor(container.permission_service)
        return jsonify({
            "user_id": actor.user_id,
            "name": session.get("name"),
            "role": actor.role.value,
            "team_id": session.get("team_id"),
            "permissions": sorted(actor.permissions),
        })

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @login_required
    def admin_users():
        actor = current_actor(container.permission_service)
        # Listing accounts is gated the same way as creating them.
        container.user_service.require_manager(actor)
        return jsonify({"users": container.user_service.list_users()})

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @login_required
    def add_user():
        actor = current_actor(container.permission_service)
        data = json_body()
        user_id = container.user_service.create_account(
            actor=actor,
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role", "Employee"),
            team_id=data.get("team_id"),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/admin/users/<int:user_id>/active", methods=["PUT"], endpoint="set_user_active")
    @login_required
    def set_user_active(user_id: int):
        actor = current_actor(container.permission_service)
        data = json_body()
        container.user_service.set_active(actor=actor, user_id=user_id, is_active=bool(data.get("is_active", True)))
        return jsonify({"success": True})
