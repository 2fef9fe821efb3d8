# Standard library imports
import logging
import re
import uuid
from enum import Enum
from typing import Optional, List, Dict, Any, Mapping, Union

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.camera_repository import CameraRepository
from ...domain.models.camera import Camera
from ...domain.models.camera_filters import CameraFilters
from ...domain.constants import CameraWireFields
from ...domain.exceptions import NotFoundError, StorageError, ValidationError
from ...application.dto.camera_dto import (
    CreateCameraDto,
    UpdateCameraDto,
    parse_create_request,
    parse_update_request,
)
from ...utils.datetime_utils import MILLISECOND, ensure_utc, next_timestamp
from .mongo_connection import get_camera_collection

logger = logging.getLogger(__name__)

# Camera attribute -> wire field, for patches
_WIRE_FIELD_BY_ATTRIBUTE: Dict[str, str] = {
    "name": CameraWireFields.NAME,
    "type": CameraWireFields.TYPE,
    "status": CameraWireFields.STATUS,
    "location": CameraWireFields.LOCATION,
    "notes": CameraWireFields.NOTES,
    "lat": CameraWireFields.LAT,
    "lng": CameraWireFields.LNG,
    "station_id": CameraWireFields.STATION_ID,
}

# Never return Mongo's internal _id
_PROJECTION = {CameraWireFields.MONGO_ID: 0}


class MongoCameraRepository(CameraRepository):
    """
    MongoDB implementation of CameraRepository.

    Documents use snake-style wire names (station_id, created_at,
    updated_at); conversion to and from the Camera model happens only in
    this class. Timestamps are stored at BSON millisecond precision.
    """

    def __init__(self, camera_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.camera_collection = camera_collection if camera_collection is not None else get_camera_collection()

    async def get_all(self, filters: Optional[CameraFilters] = None) -> List[Camera]:
        """
        Find cameras matching filters

        Args:
            filters: Optional predicates, combined with AND

        Returns:
            Matching cameras, newest first (ties ordered by id)
        """
        query = self._build_query(filters)
        try:
            # id breaks ties between cameras created in the same millisecond
            cursor = self.camera_collection.find(query, _PROJECTION).sort(
                [(CameraWireFields.CREATED_AT, DESCENDING), (CameraWireFields.ID, ASCENDING)]
            )
            cameras = []
            async for document in cursor:
                cameras.append(self._document_to_camera(document))
            return cameras
        except PyMongoError as e:
            raise StorageError(f"Error listing cameras: {str(e)}") from e

    async def get_by_id(self, camera_id: str) -> Optional[Camera]:
        """
        Find camera by ID

        Args:
            camera_id: The camera ID to find

        Returns:
            Camera domain model if found, None otherwise
        """
        if not camera_id:
            return None

        try:
            document = await self.camera_collection.find_one({CameraWireFields.ID: camera_id}, _PROJECTION)
        except PyMongoError as e:
            raise StorageError(f"Error finding camera by ID: {str(e)}") from e

        if document is None:
            return None
        return self._document_to_camera(document)

    async def create(self, data: Union[CreateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Insert a new camera document

        Raises:
            ValidationError: If required fields are missing or invalid
            StorageError: If the insert fails
        """
        request = parse_create_request(data)
        timestamp = next_timestamp(resolution=MILLISECOND)

        document: Dict[str, Any] = {
            CameraWireFields.ID: str(uuid.uuid4()),
            CameraWireFields.NAME: request.name,
            CameraWireFields.TYPE: request.type.value,
            CameraWireFields.STATUS: request.status.value,
            CameraWireFields.LOCATION: request.location,
            CameraWireFields.NOTES: request.notes,
            CameraWireFields.LAT: request.lat,
            CameraWireFields.LNG: request.lng,
            CameraWireFields.STATION_ID: request.station_id,
            CameraWireFields.CREATED_AT: timestamp,
            CameraWireFields.UPDATED_AT: timestamp,
        }

        try:
            # insert_one adds _id to the dict it is given
            await self.camera_collection.insert_one(dict(document))
        except PyMongoError as e:
            raise StorageError(f"Error creating camera: {str(e)}") from e

        camera = self._document_to_camera(document)
        logger.info(f"Created camera {camera.id} ({camera.name})")
        return camera

    async def update(self, camera_id: str, patch: Union[UpdateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Apply the fields present in patch to a stored camera

        Raises:
            NotFoundError: If camera_id is unknown
            ValidationError: If the patch is invalid
            StorageError: If the update fails
        """
        request = parse_update_request(patch)
        existing = await self.get_by_id(camera_id)
        if existing is None:
            raise NotFoundError(camera_id)

        changes = {
            _WIRE_FIELD_BY_ATTRIBUTE[name]: value.value if isinstance(value, Enum) else value
            for name, value in request.changes().items()
        }
        changes[CameraWireFields.UPDATED_AT] = next_timestamp(existing.updated_at, resolution=MILLISECOND)

        try:
            document = await self.camera_collection.find_one_and_update(
                {CameraWireFields.ID: camera_id},
                {"$set": changes},
                projection=_PROJECTION,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StorageError(f"Error updating camera: {str(e)}") from e

        if document is None:
            raise NotFoundError(camera_id)

        logger.info(f"Updated camera {camera_id}")
        return self._document_to_camera(document)

    async def delete(self, camera_id: str) -> None:
        """
        Delete a camera document

        Raises:
            NotFoundError: If camera_id is unknown (including already deleted)
            StorageError: If the delete fails
        """
        try:
            result = await self.camera_collection.delete_one({CameraWireFields.ID: camera_id})
        except PyMongoError as e:
            raise StorageError(f"Error deleting camera: {str(e)}") from e

        if result.deleted_count == 0:
            raise NotFoundError(camera_id)
        logger.info(f"Deleted camera {camera_id}")

    def _build_query(self, filters: Optional[CameraFilters]) -> Dict[str, Any]:
        """
        Translate CameraFilters into a MongoDB query on wire field names
        """
        query: Dict[str, Any] = {}
        if filters is None:
            return query

        if filters.type:
            query[CameraWireFields.TYPE] = getattr(filters.type, "value", filters.type)
        if filters.status:
            query[CameraWireFields.STATUS] = getattr(filters.status, "value", filters.status)
        if filters.location:
            query[CameraWireFields.LOCATION] = filters.location
        if filters.station_id:
            query[CameraWireFields.STATION_ID] = filters.station_id
        if filters.search_text:
            pattern = {"$regex": re.escape(filters.search_text), "$options": "i"}
            query["$or"] = [
                {CameraWireFields.NAME: pattern},
                {CameraWireFields.LOCATION: pattern},
                {CameraWireFields.NOTES: pattern},
            ]
        return query

    def _document_to_camera(self, document: Dict[str, Any]) -> Camera:
        """
        Convert MongoDB document to Camera domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            Camera domain model

        Raises:
            StorageError: If the stored document is not a valid camera
        """
        if not document:
            raise StorageError("Invalid document: document is None or empty")

        try:
            return Camera(
                id=document.get(CameraWireFields.ID),
                name=document.get(CameraWireFields.NAME),
                type=document.get(CameraWireFields.TYPE),
                status=document.get(CameraWireFields.STATUS),
                lat=document.get(CameraWireFields.LAT),
                lng=document.get(CameraWireFields.LNG),
                created_at=ensure_utc(document.get(CameraWireFields.CREATED_AT)),
                updated_at=ensure_utc(document.get(CameraWireFields.UPDATED_AT)),
                location=document.get(CameraWireFields.LOCATION),
                notes=document.get(CameraWireFields.NOTES),
                station_id=document.get(CameraWireFields.STATION_ID),
            )
        except ValidationError as e:
            raise StorageError(f"Malformed camera document {document.get(CameraWireFields.ID)}: {e}") from e
