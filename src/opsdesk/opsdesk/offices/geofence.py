from __future__ import annotations

import math
from dataclasses import dataclass

from ..common.validators import require_coordinates
from ..core.constants import EARTH_RADIUS_METERS
from .model import Office


@dataclass(frozen=True)
class DistanceCheck:
    distance_meters: float
    within_geofence: bool
    office: Office

    def as_dict(self) -> dict:
        return {
            "office_id": self.office.office_id,
            "office_name": self.office.name,
            "distance_meters": self.distance_meters,
            "radius_meters": self.office.radius_meters,
            "within_geofence": self.within_geofence,
        }


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two lat/lon pairs in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_METERS * c


def check_distance(latitude: float, longitude: float, office: Office) -> DistanceCheck:
    lat, lon = require_coordinates(latitude, longitude)
    distance = haversine_meters(lat, lon, office.latitude, office.longitude)
    # Compare on the raw distance; rounding is for display only.
    return DistanceCheck(
        distance_meters=round(distance, 2),
        within_geofence=distance <= float(office.radius_meters),
        office=office,
    )
