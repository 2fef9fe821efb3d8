from .mongo_connection import get_database, get_camera_collection, close_database
from .mongo_camera_repository import MongoCameraRepository
from .local_camera_repository import LocalCameraRepository

__all__ = [
    "get_database",
    "get_camera_collection",
    "close_database",
    "MongoCameraRepository",
    "LocalCameraRepository",
]
