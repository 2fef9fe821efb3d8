from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Union, TYPE_CHECKING
from ..models.camera import Camera
from ..models.camera_filters import CameraFilters

if TYPE_CHECKING:
    from ...application.dto.camera_dto import CreateCameraDto, UpdateCameraDto


class CameraRepository(ABC):
    """
    Repository interface - defines contract for camera data access.

    Every backend assigns ids and timestamps itself and raises the same
    errors: ValidationError for bad input, NotFoundError for unknown ids
    (update and delete alike) and StorageError for backend failures.
    """

    @abstractmethod
    async def get_all(self, filters: Optional[CameraFilters] = None) -> List[Camera]:
        """Find cameras matching every present filter (all cameras if none)"""
        pass

    @abstractmethod
    async def get_by_id(self, camera_id: str) -> Optional[Camera]:
        """Find camera by ID, None when unknown"""
        pass

    @abstractmethod
    async def create(self, data: Union["CreateCameraDto", Mapping[str, Any]]) -> Camera:
        """Create camera with a new id and created_at == updated_at"""
        pass

    @abstractmethod
    async def update(self, camera_id: str, patch: Union["UpdateCameraDto", Mapping[str, Any]]) -> Camera:
        """Apply the fields present in patch and refresh updated_at"""
        pass

    @abstractmethod
    async def delete(self, camera_id: str) -> None:
        """Delete camera; deleting an unknown or already deleted id fails"""
        pass
