from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS


@dataclass(frozen=True)
class Office:
    """An office with fixed coordinates and the geofence radius around it."""

    office_id: str
    name: str
    latitude: float
    longitude: float
    is_active: bool = True
    radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS
