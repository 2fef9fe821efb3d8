# Standard library imports
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

# Local application imports
from ..constants import CameraFields
from ..exceptions import ValidationError
from ...utils.datetime_utils import ensure_utc, to_iso


class CameraType(str, Enum):
    FIXED = "fixed"
    PTZ = "ptz"
    DOME = "dome"
    BULLET = "bullet"


class CameraStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"


def validate_coordinate(lat: Any, lng: Any) -> None:
    """Raise ValidationError unless lat/lng are finite numbers in valid range"""
    for label, value, limit in (("Latitude", lat, 90.0), ("Longitude", lng, 180.0)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{label} must be a number")
        if not math.isfinite(value) or not -limit <= value <= limit:
            raise ValidationError(f"{label} must be between {-limit} and {limit}")


@dataclass
class Camera:
    """
    Pure domain model for Camera entity - no external dependencies.

    Ids and timestamps are assigned by a repository. Attribute names are
    Python style; `to_dict` produces the serialized client shape.
    """
    id: str
    name: str
    type: CameraType
    status: CameraStatus
    lat: float
    lng: float
    created_at: datetime
    updated_at: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    station_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.id or not isinstance(self.id, str):
            raise ValidationError("Camera ID is required")
        if not isinstance(self.name, str) or len(self.name.strip()) < 1:
            raise ValidationError("Camera name is required")
        try:
            self.type = CameraType(self.type)
        except ValueError:
            raise ValidationError(f"Unknown camera type: {self.type!r}")
        try:
            self.status = CameraStatus(self.status)
        except ValueError:
            raise ValidationError(f"Unknown camera status: {self.status!r}")
        validate_coordinate(self.lat, self.lng)
        self.lat = float(self.lat)
        self.lng = float(self.lng)

        if not isinstance(self.created_at, datetime) or not isinstance(self.updated_at, datetime):
            raise ValidationError("Camera timestamps are required")
        self.created_at = ensure_utc(self.created_at)
        self.updated_at = ensure_utc(self.updated_at)
        if self.updated_at < self.created_at:
            raise ValidationError("Camera updated_at cannot precede created_at")

    def to_dict(self) -> Dict[str, Any]:
        return {
            CameraFields.ID: self.id,
            CameraFields.NAME: self.name,
            CameraFields.TYPE: self.type.value,
            CameraFields.STATUS: self.status.value,
            CameraFields.LOCATION: self.location,
            CameraFields.NOTES: self.notes,
            CameraFields.LAT: self.lat,
            CameraFields.LNG: self.lng,
            CameraFields.STATION_ID: self.station_id,
            CameraFields.CREATED_AT: to_iso(self.created_at),
            CameraFields.UPDATED_AT: to_iso(self.updated_at),
        }
