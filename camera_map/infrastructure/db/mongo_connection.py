# Standard library imports
import logging
from typing import Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

# Local application imports
from ...core.config import get_settings
from ...domain.exceptions import StorageError

logger = logging.getLogger(__name__)

# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance

    Raises:
        StorageError: If no MongoDB URI is configured
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    if not settings.mongo_uri:
        raise StorageError("Remote storage is not configured (MONGO_URI is empty)")

    # tz_aware so BSON dates come back as UTC-aware datetimes
    _mongo_client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    _mongo_database = _mongo_client[settings.mongo_database_name]
    logger.info(f"Connected to MongoDB database '{settings.mongo_database_name}'")
    return _mongo_database


def get_camera_collection() -> AsyncIOMotorCollection:
    """
    Get cameras collection from MongoDB

    Returns:
        MongoDB collection for cameras
    """
    return get_database()[get_settings().mongo_camera_collection]


def close_database() -> None:
    """Close the MongoDB client (call on application shutdown)"""
    global _mongo_client, _mongo_database

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
        _mongo_database = None
        logger.info("Closed MongoDB client")
