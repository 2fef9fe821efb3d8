from .camera import Camera, CameraType, CameraStatus
from .camera_filters import CameraFilters
from .geo import Coordinate, WorkingBounds

__all__ = [
    "Camera",
    "CameraType",
    "CameraStatus",
    "CameraFilters",
    "Coordinate",
    "WorkingBounds",
]
