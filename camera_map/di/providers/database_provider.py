import logging
from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...infrastructure.db.mongo_connection import get_database, get_camera_collection
from ...infrastructure.storage.json_file_store import JsonFileStore

if TYPE_CHECKING:
    from ..base_container import BaseContainer

logger = logging.getLogger(__name__)


class DatabaseProvider:
    """Storage connection provider - the only place a backend connection is opened"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the storage handle for the configured backend.

        With MONGO_URI set, the database and camera collection are registered;
        otherwise a JSON file store rooted at CAMERA_STORAGE_DIR.
        """
        settings = get_settings()

        if settings.use_remote_storage:
            container.register_singleton("database", get_database())
            container.register_singleton("camera_collection", get_camera_collection())
            logger.info("Using remote camera storage")
        else:
            container.register_singleton("local_store", JsonFileStore(settings.local_storage_dir))
            logger.info(f"Using local camera storage in '{settings.local_storage_dir}'")
