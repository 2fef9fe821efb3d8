# Standard library imports
import asyncio
import dataclasses
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

# Local application imports
from ...domain.repositories.camera_repository import CameraRepository
from ...domain.models.camera import Camera
from ...domain.models.camera_filters import CameraFilters
from ...domain.constants import CameraFields
from ...domain.exceptions import NotFoundError, ValidationError
from ...application.dto.camera_dto import (
    CreateCameraDto,
    UpdateCameraDto,
    parse_create_request,
    parse_update_request,
)
from ...utils.datetime_utils import next_timestamp, parse_iso
from ..storage.json_file_store import CorruptRecordError, JsonFileStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "cameras"


class LocalCameraRepository(CameraRepository):
    """
    Local persistence implementation of CameraRepository.

    The whole collection is one named record: a JSON list of cameras in the
    serialized client shape. Every query reads the full record and every
    mutation rewrites it. File I/O runs in a worker thread; mutations hold
    a lock across the read-modify-write so two writers never interleave.
    """

    def __init__(self, store: JsonFileStore, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.storage_key = storage_key
        self._write_lock = asyncio.Lock()

    async def get_all(self, filters: Optional[CameraFilters] = None) -> List[Camera]:
        """
        Find cameras matching filters

        Args:
            filters: Optional predicates, combined with AND

        Returns:
            Matching cameras in insertion order (empty list when none match)
        """
        cameras = await self._load()
        if filters is None or filters.is_empty():
            return cameras
        return [camera for camera in cameras if filters.matches(camera)]

    async def get_by_id(self, camera_id: str) -> Optional[Camera]:
        if not camera_id:
            return None
        for camera in await self._load():
            if camera.id == camera_id:
                return camera
        return None


    async def create(self, data: Union[CreateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Create a camera with a fresh id and identical created/updated timestamps

        Raises:
            ValidationError: If required fields are missing or invalid
            StorageError: If the collection cannot be written
        """
        request = parse_create_request(data)
        async with self._write_lock:
            records = await self._read_records()
            existing_ids = {camera.id for camera in self._parse(records) if camera is not None}
            camera_id = str(uuid.uuid4())
            while camera_id in existing_ids:
                camera_id = str(uuid.uuid4())

            timestamp = next_timestamp()
            new_camera = Camera(
                id=camera_id,
                name=request.name,
                type=request.type,
                status=request.status,
                lat=request.lat,
                lng=request.lng,
                created_at=timestamp,
                updated_at=timestamp,
                location=request.location,
                notes=request.notes,
                station_id=request.station_id,
            )

            records.append(self._camera_to_record(new_camera))
            await self._write_records(records)
        logger.info(f"Created camera {new_camera.id} ({new_camera.name})")
        return new_camera

    async def update(self, camera_id: str, patch: Union[UpdateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Merge the fields present in patch onto a stored camera

        Raises:
            NotFoundError: If camera_id is unknown
            ValidationError: If the patch is invalid
            StorageError: If the collection cannot be written
        """
        request = parse_update_request(patch)
        async with self._write_lock:
            records = await self._read_records()
            for index, camera in enumerate(self._parse(records)):
                if camera is not None and camera.id == camera_id:
                    break
            else:
                raise NotFoundError(camera_id)

            updated_camera = dataclasses.replace(
                camera,
                **request.changes(),
                updated_at=next_timestamp(camera.updated_at),
            )
            records[index] = self._camera_to_record(updated_camera)
            await self._write_records(records)
        logger.info(f"Updated camera {camera_id}")
        return updated_camera

    async def delete(self, camera_id: str) -> None:
        """
        Delete a camera

        Raises:
            NotFoundError: If camera_id is unknown (including already deleted)
            StorageError: If the collection cannot be written
        """
        async with self._write_lock:
            records = await self._read_records()
            remaining = [
                record
                for record, camera in zip(records, self._parse(records))
                if camera is None or camera.id != camera_id
            ]
            if len(remaining) == len(records):
                raise NotFoundError(camera_id)

            await self._write_records(remaining)
        logger.info(f"Deleted camera {camera_id}")

    async def _load(self) -> List[Camera]:
        """Read the full collection, skipping records that are not valid cameras"""
        return [camera for camera in self._parse(await self._read_records()) if camera is not None]

    async def _read_records(self) -> List[Any]:
        """
        Read the raw stored list.

        Unparsable or non-list content is treated as an empty collection.
        """
        try:
            records = await asyncio.to_thread(self.store.read, self.storage_key, [])
        except CorruptRecordError as e:
            logger.error(f"Error parsing cameras from local storage: {e}")
            return []

        if not isinstance(records, list):
            logger.error(
                f"Error parsing cameras from local storage: expected a list, got {type(records).__name__}"
            )
            return []
        return records

    async def _write_records(self, records: List[Any]) -> None:
        await asyncio.to_thread(self.store.write, self.storage_key, records)

    def _parse(self, records: List[Any]) -> List[Optional[Camera]]:
        """
        Convert stored records one by one.

        Invalid records map to None and stay untouched on disk, so a bad
        entry never takes the valid cameras around it down with it.
        """
        cameras: List[Optional[Camera]] = []
        for position, record in enumerate(records):
            try:
                cameras.append(self._record_to_camera(record))
            except ValidationError as e:
                logger.error(f"Skipping invalid camera record at position {position}: {e}")
                cameras.append(None)
        return cameras

    def _record_to_camera(self, record: Any) -> Camera:
        """
        Convert a stored record to Camera domain model

        Raises:
            ValidationError: If the record is not a valid camera
        """
        if not isinstance(record, dict):
            raise ValidationError("Invalid record: expected an object")

        created_at = parse_iso(record.get(CameraFields.CREATED_AT))
        updated_at = parse_iso(record.get(CameraFields.UPDATED_AT))
        return Camera(
            id=record.get(CameraFields.ID),
            name=record.get(CameraFields.NAME),
            type=record.get(CameraFields.TYPE),
            status=record.get(CameraFields.STATUS),
            lat=record.get(CameraFields.LAT),
            lng=record.get(CameraFields.LNG),
            created_at=created_at,
            updated_at=updated_at,
            location=record.get(CameraFields.LOCATION),
            notes=record.get(CameraFields.NOTES),
            station_id=record.get(CameraFields.STATION_ID),
        )

    def _camera_to_record(self, camera: Camera) -> Dict[str, Any]:
        return camera.to_dict()
