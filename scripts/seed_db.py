from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.opsdesk.opsdesk.container import build_container
from src.opsdesk.opsdesk.database.bootstrap import DEMO_PASSWORD, DEMO_USERS, ensure_demo_data, seed_reference_data


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(
        db_config=db_config,
        geofence_radius_meters=getattr(settings, "GEOFENCE_RADIUS_METERS", None),
    )
    seed_reference_data(container.office_service, container.permission_service)
    ensure_demo_data(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    for name, email, role, _team, _team_role in DEMO_USERS:
        print(f"  {role:<10} {email:<24} password={DEMO_PASSWORD}  ({name})")


if __name__ == "__main__":
    main()
