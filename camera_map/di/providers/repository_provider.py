from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.camera_repository import CameraRepository
from ...infrastructure.db.local_camera_repository import LocalCameraRepository
from ...infrastructure.db.mongo_camera_repository import MongoCameraRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires the domain interface to one backend"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the camera repository.
        The backend is chosen once here; nothing downstream knows which one it got.
        """
        settings = get_settings()

        if settings.use_remote_storage:
            repository: CameraRepository = MongoCameraRepository(
                camera_collection=container.get("camera_collection")
            )
        else:
            repository = LocalCameraRepository(
                store=container.get("local_store"),
                storage_key=settings.local_storage_key,
            )

        container.register_singleton(CameraRepository, repository)
