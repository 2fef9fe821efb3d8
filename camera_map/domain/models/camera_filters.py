# Standard library imports
from dataclasses import dataclass
from typing import Optional

# Local application imports
from ..exceptions import ValidationError
from .camera import Camera, CameraStatus, CameraType


@dataclass(frozen=True)
class CameraFilters:
    """
    Optional predicates over the camera collection, combined with AND.

    A field left as None (or an empty string) matches every camera on that
    dimension. `search_text` is a case-insensitive substring match against
    name, location and notes; every other field is an equality match. Type
    and status accept enum members or their string values.
    """
    type: Optional[CameraType] = None
    status: Optional[CameraStatus] = None
    location: Optional[str] = None
    search_text: Optional[str] = None
    station_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type:
            try:
                object.__setattr__(self, "type", CameraType(self.type))
            except ValueError:
                raise ValidationError(f"Unknown camera type filter: {self.type!r}")
        if self.status:
            try:
                object.__setattr__(self, "status", CameraStatus(self.status))
            except ValueError:
                raise ValidationError(f"Unknown camera status filter: {self.status!r}")

    def is_empty(self) -> bool:
        return not (self.type or self.status or self.location or self.search_text or self.station_id)

    def matches(self, camera: Camera) -> bool:
        if self.type and camera.type != self.type:
            return False
        if self.status and camera.status != self.status:
            return False
        if self.location and camera.location != self.location:
            return False
        if self.station_id and camera.station_id != self.station_id:
            return False
        if self.search_text:
            needle = self.search_text.lower()
            haystacks = (camera.name, camera.location or "", camera.notes or "")
            if not any(needle in value.lower() for value in haystacks):
                return False
        return True
