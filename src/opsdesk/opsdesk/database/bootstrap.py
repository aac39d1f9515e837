from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..offices.service import OfficeService
from ..permissions.service import PermissionService
from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "opsdesk123"

# (name, email, role, team name, team role)
DEMO_USERS = (
    ("Admin Demo", "admin@opsdesk.local", "Admin", None, None),
    ("Hema HR", "hr@opsdesk.local", "HR", None, None),
    ("Tarun Lead", "lead@opsdesk.local", "Team Lead", "Engineering", "lead"),
    ("Esha Employee", "esha@opsdesk.local", "Employee", "Engineering", "member"),
    ("Omar Employee", "omar@opsdesk.local", "Employee", "Sales", "member"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = None
    escape = False

    for ch in _strip_comments(sql):
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied from %s", schema_path)


def seed_reference_data(offices: OfficeService, permissions: PermissionService) -> None:
    """Offices and the default permission matrix, written through their services."""
    offices.seed_default_offices()
    permissions.seed_default_permissions()
    logger.info("default offices and role permissions seeded")


def ensure_demo_data(db_config: dict) -> None:
    """Seed demo teams and demo users.

    Re-running is safe: every write is an upsert keyed on a natural key.
    """
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        team_ids: dict[str, int] = {}
        for team_name in sorted({u[3] for u in DEMO_USERS if u[3]}):
            cur.execute("INSERT IGNORE INTO teams(name) VALUES(%s)", (team_name,))
            cur.execute("SELECT team_id FROM teams WHERE name=%s", (team_name,))
            team_ids[team_name] = int(cur.fetchone()["team_id"])

        password_hash = generate_password_hash(DEMO_PASSWORD)
        for name, email, role, team_name, team_role in DEMO_USERS:
            team_id = team_ids.get(team_name) if team_name else None
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, team_id, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash),
                    role=VALUES(role), team_id=VALUES(team_id), is_active=1
                """,
                (name, email, password_hash, role, team_id),
            )
            if team_id is None:
                continue
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            user_id = int(cur.fetchone()["user_id"])
            cur.execute(
                """
                INSERT INTO team_members(team_id, user_id, role) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE role=VALUES(role)
                """,
                (team_id, user_id, team_role),
            )

        conn.commit()
    finally:
        conn.close()
    logger.info("demo data ready (%d users)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
