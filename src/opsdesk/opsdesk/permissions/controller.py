from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body, login_required
from ..container import Container
from ..core.constants import ALL_PERMISSIONS, PERMISSIONS_MANAGE
from .service import require_permission


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/permissions", methods=["GET"], endpoint="role_permissions")
    @login_required
    def role_permissions():
        require_permission(current_actor(container.permission_service), PERMISSIONS_MANAGE)
        return jsonify({
            "available": list(ALL_PERMISSIONS),
            "roles": container.permission_service.list_role_permissions(),
        })

    @app.route("/api/admin/permissions/<role>", methods=["PUT"], endpoint="set_role_permissions")
    @login_required
    def set_role_permissions(role: str):
        actor = current_actor(container.permission_service)
        permissions = json_body().get("permissions") or []
        saved = container.permission_service.set_role_permissions(
            actor=actor,
            role=role,
            permissions=[str(p) for p in permissions],
        )
        return jsonify({"success": True, "role": role, "permissions": saved})
