"""Constants for domain model field names"""

from .camera_fields import CameraFields, CameraWireFields
from .stations import STATIONS, Station, get_station_by_id, get_station_color

__all__ = [
    "CameraFields",
    "CameraWireFields",
    "STATIONS",
    "Station",
    "get_station_by_id",
    "get_station_color",
]
