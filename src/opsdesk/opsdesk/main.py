from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import CONTAINER_EXTENSION, register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables, seed_reference_data
from .leave.controller import register as register_leave
from .offices.controller import register as register_offices
from .payroll.controller import register as register_payroll
from .permissions.controller import register as register_permissions
from .teams.controller import register as register_teams
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass a container to skip MySQL wiring (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            geofence_radius_meters=getattr(settings, "GEOFENCE_RADIUS_METERS", None),
        )
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_reference_data(container.office_service, container.permission_service)
            ensure_demo_data(db_config)

    app.extensions[CONTAINER_EXTENSION] = container
    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_offices(app, container)
    register_leave(app, container)
    register_payroll(app, container)
    register_permissions(app, container)
    register_teams(app, container)

    return app
