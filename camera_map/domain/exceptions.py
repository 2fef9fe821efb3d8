"""
Exception hierarchy for the camera map core.

Repositories raise ValidationError, NotFoundError and StorageError; the camera
store records their message and re-raises them. OutOfBoundsError and
GeocodingError are handled where they occur and only ever reach the operator
as a transient notice or an empty result list.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class CameraMapError(Exception):
    """Base exception for all camera map errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Repository
# -----------------------------------------------------------------------------


class ValidationError(CameraMapError):
    """Raised when create/update input is missing required fields or is malformed."""
    pass


class NotFoundError(CameraMapError):
    """Raised when an operation references an unknown camera id."""

    def __init__(self, camera_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"Camera with id {camera_id} not found",
            user_message="The camera no longer exists.",
            details={"camera_id": camera_id},
        )
        self.camera_id = camera_id


class StorageError(CameraMapError):
    """Raised when the storage backend is unreachable, misconfigured or cannot serialize."""
    pass


# -----------------------------------------------------------------------------
# Map workflows
# -----------------------------------------------------------------------------


class OutOfBoundsError(CameraMapError):
    """Raised when a coordinate falls outside the working region."""

    def __init__(self, lat: float, lng: float):
        super().__init__(
            f"Coordinate ({lat}, {lng}) is outside the working area",
            user_message="That location is outside the working area.",
            details={"lat": lat, "lng": lng},
        )
        self.lat = lat
        self.lng = lng


class GeocodingError(CameraMapError):
    """Raised by geocoding providers on network, HTTP or payload failures."""
    pass
