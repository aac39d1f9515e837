from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core.exceptions import NotFoundError
from .defaults import DEFAULT_OFFICES
from .geofence import DistanceCheck, check_distance
from .model import Office
from .repository import OfficeRepository


class OfficeService:
    def __init__(self, offices: OfficeRepository, *, radius_meters: Optional[float] = None):
        self._offices = offices
        # When set, overrides the per-office radius stored with each office.
        self._radius_meters = radius_meters

    def _effective(self, office: Office) -> Office:
        if self._radius_meters is None:
            return office
        return replace(office, radius_meters=float(self._radius_meters))

    def list_offices(self, *, active_only: bool = True) -> list[Office]:
        return [self._effective(o) for o in self._offices.list_offices(active_only=active_only)]

    def get_office(self, office_id: str) -> Office:
        """Active office by id; inactive offices cannot be used for check-in/out."""
        office = self._offices.get_by_id(str(office_id or "").strip())
        if not office or not office.is_active:
            raise NotFoundError("Office not found")
        return self._effective(office)

    def check(self, *, office_id: str, latitude: float, longitude: float) -> DistanceCheck:
        return check_distance(latitude, longitude, self.get_office(office_id))

    def distance_report(self, *, latitude: float, longitude: float) -> list[dict]:
        return [check_distance(latitude, longitude, o).as_dict() for o in self.list_offices()]

    def seed_default_offices(self) -> None:
        for office in DEFAULT_OFFICES:
            self._offices.upsert(self._effective(office))
