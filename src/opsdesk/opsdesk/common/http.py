"""Shared bits for the JSON controllers: auth guard, actor lookup, error mapping."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, current_app, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ReasonRequiredError,
    ValidationError,
)
from ..permissions.model import Actor
from ..permissions.service import PermissionService
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

CONTAINER_EXTENSION = "opsdesk"


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        # Re-read the stored user so deactivation and role changes apply on the next request.
        permissions = current_app.extensions[CONTAINER_EXTENSION].permission_service
        try:
            g.actor = permissions.actor_for(int(session["user_id"]))
        except AuthenticationError as e:
            session.clear()
            return jsonify({"success": False, "message": str(e)}), 401
        return view(*args, **kwargs)

    return wrapper


def current_actor(permissions: PermissionService) -> Actor:
    actor = g.get("actor")
    if actor is None:
        actor = permissions.actor_for(int(session["user_id"]))
    return actor


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def parse_date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def _fail(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ReasonRequiredError)
    def _reason_required(e: ReasonRequiredError):
        office = e.office
        return _fail(
            str(e),
            422,
            reason_required=True,
            distance_meters=e.distance_meters,
            office={"office_id": office.office_id, "name": office.name} if office is not None else None,
        )

    @app.errorhandler(AuthenticationError)
    def _unauthenticated(e: AuthenticationError):
        return _fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return _fail(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _fail(str(e), 404)

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return _fail(str(e), 400)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return _fail(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return _fail(e.description or e.name, e.code or 500)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        message = f"Internal error: {e}" if app.config.get("DEBUG") else "Internal error"
        return _fail(message, 500)
