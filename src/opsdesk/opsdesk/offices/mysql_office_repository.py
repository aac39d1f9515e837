from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Office
from .repository import OfficeRepository

_COLUMNS = "office_id, name, latitude, longitude, radius_meters, is_active"


def _to_office(r: dict) -> Office:
    return Office(
        office_id=str(r["office_id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius_meters=float(r["radius_meters"]),
        is_active=as_bool(r["is_active"]),
    )


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, office_id: str) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices WHERE office_id=%s", (str(office_id),))
            r = fetchone(cur)
            return _to_office(r) if r else None

    def list_offices(self, *, active_only: bool = True) -> Sequence[Office]:
        where = "WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM offices {where} ORDER BY name")
            return [_to_office(r) for r in fetchall(cur)]

    def upsert(self, office: Office) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO offices(office_id, name, latitude, longitude, radius_meters, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), latitude=VALUES(latitude), longitude=VALUES(longitude),
                    radius_meters=VALUES(radius_meters), is_active=VALUES(is_active)
                """,
                (office.office_id, office.name, office.latitude, office.longitude, office.radius_meters, int(office.is_active)),
            )
