from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced entity does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ReasonRequiredError(ValidationError):
    """Raised when a check-in/out is outside the geofence without a justification.

    Carries the measured distance so the caller can prompt for a reason and retry.
    """

    def __init__(self, message: str, *, distance_meters: float, office: Optional[Any] = None):
        super().__init__(message)
        self.distance_meters = distance_meters
        self.office = office
