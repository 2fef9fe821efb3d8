# Standard library imports
import logging
from typing import Any, Mapping, Optional

# Local application imports
from ...domain.exceptions import OutOfBoundsError, ValidationError
from ...domain.interfaces.geocoder import GeocodeCandidate
from ...domain.interfaces.map_surface import MAP_CLICK, MapSurface, MarkerHandle
from ...domain.models.camera import Camera
from ...domain.models.geo import Coordinate
from ..dto.camera_dto import parse_create_request
from .bounds_guard import BoundsGuard
from .camera_store import CameraStore
from .marker_reconciler import TEMPORARY_PIN_STYLE
from .transient_notice import TransientNotice

logger = logging.getLogger(__name__)


class PlacementWorkflow:
    """
    The only path by which a new camera gets a position.

    Map clicks (while in add mode) and address search selections both go
    through the bounds guard. An accepted position is shown with a temporary
    pin until `submit` creates the camera or the placement is cancelled.
    A rejected position shows a transient notice and places nothing.
    """

    def __init__(
        self,
        surface: MapSurface,
        store: CameraStore,
        guard: BoundsGuard,
        notice: TransientNotice,
        min_zoom: float = 12,
        focus_zoom: float = 19,
    ) -> None:
        self.surface = surface
        self.store = store
        self.guard = guard
        self.notice = notice
        self.min_zoom = min_zoom
        self.focus_zoom = focus_zoom

        self.add_mode = False
        self.pending_position: Optional[Coordinate] = None
        self.pending_location: Optional[str] = None
        self._pin: Optional[MarkerHandle] = None
        self._attached = False

    def attach(self) -> None:
        """Constrain the surface to the working area and listen for map clicks"""
        self.surface.set_max_bounds(self.guard.bounds)
        self.surface.set_min_zoom(self.min_zoom)
        if not self._attached:
            self.surface.on(MAP_CLICK, self.handle_map_click)
            self._attached = True

    def begin_placement(self) -> None:
        self.add_mode = True

    def cancel_placement(self) -> None:
        self.add_mode = False
        self._clear_pending()

    def handle_map_click(self, lat: float, lng: float) -> bool:
        """
        Returns:
            True if the click set a new pending position
        """
        if not self.add_mode:
            self._clear_pending()
            return False

        if not self._accept(lat, lng):
            return False

        self._place_pin(lat, lng)
        self.pending_location = None
        # Add mode ends once a position has been picked; further clicks move nothing
        self.add_mode = False
        return True

    async def select_search_result(self, candidate: GeocodeCandidate) -> bool:
        """
        Fly to a search result and make it the pending position

        Returns:
            False if the result lies outside the working area
        """
        if not self._accept(candidate.lat, candidate.lng):
            return False

        await self.surface.fly_to(candidate.lat, candidate.lng, self.focus_zoom)
        self._place_pin(candidate.lat, candidate.lng)
        self.pending_location = candidate.short_label or None
        self.add_mode = False
        return True

    async def submit(self, details: Mapping[str, Any]) -> Camera:
        """
        Create a camera at the pending position.

        `details` carries the form fields (name, type, status and optionally
        location, notes, stationId). A missing location defaults to the
        selected search result's street name.

        Raises:
            ValidationError: If no position is pending or details are invalid
            Repository errors from the store; the pending pin is kept for a retry
        """
        if self.pending_position is None:
            raise ValidationError(
                "No camera position selected",
                user_message="Select a position on the map first.",
            )

        data = dict(details)
        data["lat"] = self.pending_position.lat
        data["lng"] = self.pending_position.lng
        if not data.get("location") and self.pending_location:
            data["location"] = self.pending_location

        camera = await self.store.create(parse_create_request(data))
        logger.info(f"Placed camera {camera.id} at ({camera.lat}, {camera.lng})")
        self._clear_pending()
        return camera

    def close(self) -> None:
        self.add_mode = False
        self._clear_pending()

    def _accept(self, lat: float, lng: float) -> bool:
        try:
            self.guard.ensure_contains(lat, lng)
        except OutOfBoundsError as e:
            self.notice.show(e.user_message)
            return False
        return True

    def _place_pin(self, lat: float, lng: float) -> None:
        self._remove_pin()
        self._pin = self.surface.add_marker(lat, lng, TEMPORARY_PIN_STYLE)
        self.pending_position = Coordinate(lat, lng)

    def _remove_pin(self) -> None:
        if self._pin is not None:
            self.surface.remove_marker(self._pin)
            self._pin = None

    def _clear_pending(self) -> None:
        self._remove_pin()
        self.pending_position = None
        self.pending_location = None
