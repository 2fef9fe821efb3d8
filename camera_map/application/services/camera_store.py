# Standard library imports
import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

# Local application imports
from ...domain.models.camera import Camera
from ...domain.models.camera_filters import CameraFilters
from ...domain.repositories.camera_repository import CameraRepository
from ...utils.location_colors import LocationColor, get_location_color
from ..dto.camera_dto import CreateCameraDto, UpdateCameraDto

logger = logging.getLogger(__name__)

CamerasListener = Callable[[Sequence[Camera]], None]


def _error_message(error: Exception, fallback: str) -> str:
    return str(error) or fallback


class CameraStore:
    """
    In-memory view of the camera collection, reconciled against a repository.

    Holds two collections: `cameras` (matching the current filters) and
    `all_cameras` (unfiltered, used only for aggregates such as the location
    legend). Mutations are applied locally only after the repository has
    confirmed them, using the repository's result. Listeners are notified
    with the filtered collection each time it settles.
    """

    def __init__(self, camera_repository: CameraRepository, filters: Optional[CameraFilters] = None) -> None:
        self.camera_repository = camera_repository
        self.filters = filters or CameraFilters()
        self.error: Optional[str] = None

        self._cameras: List[Camera] = []
        self._all_cameras: List[Camera] = []
        self._listeners: List[CamerasListener] = []

        self._fetch_seq = 0
        self._fetching = False
        self._mutations_in_flight = 0
        self._mutation_epoch = 0

    @property
    def cameras(self) -> Tuple[Camera, ...]:
        return tuple(self._cameras)

    @property
    def all_cameras(self) -> Tuple[Camera, ...]:
        return tuple(self._all_cameras)

    @property
    def loading(self) -> bool:
        return self._fetching or self._mutations_in_flight > 0

    @property
    def locations(self) -> List[str]:
        """Distinct non-empty location labels across the complete collection"""
        return sorted({camera.location for camera in self._all_cameras if camera.location})

    def location_legend(self) -> List[Tuple[str, LocationColor]]:
        return [(location, get_location_color(location)) for location in self.locations]

    def subscribe(self, listener: CamerasListener) -> Callable[[], None]:
        """
        Register a listener for settled changes of the filtered collection

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def set_filters(self, filters: Optional[CameraFilters]) -> bool:
        self.filters = filters or CameraFilters()
        return await self.refresh()

    async def refresh(self) -> bool:
        """
        Fetch the filtered and complete collections concurrently

        A fetch that has been superseded by a newer one is discarded when it
        resolves. A fetch that overlapped a confirmed mutation is discarded
        and issued again, since its result may predate the mutation.

        Returns:
            True if this fetch was applied, False if it was superseded

        Raises:
            Any repository error of the latest fetch (also recorded in `error`)
        """
        self._fetch_seq += 1
        request_id = self._fetch_seq
        epoch = self._mutation_epoch
        filters = self.filters

        self._fetching = True
        self.error = None
        try:
            filtered, complete = await asyncio.gather(
                self.camera_repository.get_all(filters),
                self.camera_repository.get_all(),
            )
        except Exception as e:
            if request_id != self._fetch_seq:
                logger.debug(f"Ignoring failure of superseded camera fetch #{request_id}: {e}")
                return False
            self._fetching = False
            self.error = _error_message(e, "Error loading cameras")
            logger.error(f"Error loading cameras: {e}")
            raise

        if request_id != self._fetch_seq:
            logger.debug(f"Discarding stale camera fetch #{request_id} (latest is #{self._fetch_seq})")
            return False

        if epoch != self._mutation_epoch:
            logger.debug(f"Camera fetch #{request_id} overlapped a mutation; fetching again")
            return await self.refresh()

        self._cameras = list(filtered)
        self._all_cameras = list(complete)
        self._fetching = False
        logger.debug(f"Loaded {len(self._cameras)} of {len(self._all_cameras)} cameras")
        self._notify()
        return True

    async def create(self, data: Union[CreateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Create a camera and append the confirmed result to both collections

        Raises:
            Repository errors (also recorded in `error`); collections are untouched
        """
        self.error = None
        self._mutations_in_flight += 1
        try:
            camera = await self.camera_repository.create(data)
        except Exception as e:
            self.error = _error_message(e, "Error creating camera")
            raise
        finally:
            self._mutations_in_flight -= 1

        self._mutation_epoch += 1
        self._cameras.append(camera)
        self._all_cameras.append(camera)
        self._notify()
        return camera

    async def update(self, camera_id: str, patch: Union[UpdateCameraDto, Mapping[str, Any]]) -> Camera:
        """
        Update a camera and replace the matching entry in both collections

        Raises:
            Repository errors (also recorded in `error`); collections are untouched
        """
        self.error = None
        self._mutations_in_flight += 1
        try:
            updated = await self.camera_repository.update(camera_id, patch)
        except Exception as e:
            self.error = _error_message(e, "Error updating camera")
            raise
        finally:
            self._mutations_in_flight -= 1

        self._mutation_epoch += 1
        self._cameras = [updated if camera.id == camera_id else camera for camera in self._cameras]
        self._all_cameras = [updated if camera.id == camera_id else camera for camera in self._all_cameras]
        self._notify()
        return updated

    async def delete(self, camera_id: str) -> None:
        """
        Delete a camera and remove it from both collections

        Raises:
            Repository errors (also recorded in `error`); collections are untouched
        """
        self.error = None
        self._mutations_in_flight += 1
        try:
            await self.camera_repository.delete(camera_id)
        except Exception as e:
            self.error = _error_message(e, "Error deleting camera")
            raise
        finally:
            self._mutations_in_flight -= 1

        self._mutation_epoch += 1
        self._cameras = [camera for camera in self._cameras if camera.id != camera_id]
        self._all_cameras = [camera for camera in self._all_cameras if camera.id != camera_id]
        self._notify()

    def _notify(self) -> None:
        snapshot = self.cameras
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Camera listener failed: {e}", exc_info=True)
