from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """JSON bodies can carry numbers or lists where text is expected."""
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"{field_name} must be text")


def require_non_empty(value: str, field_name: str) -> str:
    value = optional_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_coordinates(latitude, longitude) -> tuple[float, float]:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Location is not available")

    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lat, lon


def require_month(year: int, month: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if int(year) < 1:
        raise ValidationError("Year is invalid")
    return int(year), int(month)
