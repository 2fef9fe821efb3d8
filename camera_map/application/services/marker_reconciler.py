# Standard library imports
import asyncio
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Coroutine, Dict, Mapping, NamedTuple, Optional, Sequence, Set

# Local application imports
from ...domain.constants.stations import get_station_by_id
from ...domain.interfaces.map_surface import (
    MARKER_CLICK,
    MARKER_HOVER,
    MARKER_HOVER_END,
    MARKER_SECONDARY,
    MapSurface,
    MarkerHandle,
    MarkerPopup,
    MarkerStyle,
)
from ...domain.models.camera import Camera, CameraStatus, CameraType
from ...utils.location_colors import get_location_color

logger = logging.getLogger(__name__)


class StatusStyle(NamedTuple):
    fill: str
    border: str
    glyph: str


STATUS_STYLES: Dict[CameraStatus, StatusStyle] = {
    CameraStatus.ACTIVE: StatusStyle("#10b981", "#059669", "✓"),
    CameraStatus.INACTIVE: StatusStyle("#6b7280", "#4b5563", "○"),
    CameraStatus.MAINTENANCE: StatusStyle("#f59e0b", "#d97706", "⚙"),
    CameraStatus.OFFLINE: StatusStyle("#ef4444", "#dc2626", "✕"),
}

STATUS_LABELS: Dict[CameraStatus, str] = {
    CameraStatus.ACTIVE: "Active",
    CameraStatus.INACTIVE: "Inactive",
    CameraStatus.MAINTENANCE: "Maintenance",
    CameraStatus.OFFLINE: "Offline",
}

TYPE_LABELS: Dict[CameraType, str] = {
    CameraType.FIXED: "Fixed",
    CameraType.PTZ: "PTZ",
    CameraType.DOME: "Dome",
    CameraType.BULLET: "Bullet",
}

# Pin shown while a new camera position is pending
TEMPORARY_PIN_STYLE = MarkerStyle(
    fill="#3b82f6",
    border="#1d4ed8",
    glyph="+",
    location_primary="#3b82f6",
    location_secondary="#1d4ed8",
    temporary=True,
)

PreviewCallback = Callable[[Optional[Camera]], None]
DeleteConfirmer = Callable[[Camera], Awaitable[bool]]
DeleteHandler = Callable[[str], Awaitable[Any]]


def build_marker_style(camera: Camera) -> MarkerStyle:
    status_style = STATUS_STYLES[camera.status]
    location_color = get_location_color(camera.location)
    return MarkerStyle(
        fill=status_style.fill,
        border=status_style.border,
        glyph=status_style.glyph,
        location_primary=location_color.primary,
        location_secondary=location_color.secondary,
    )


def build_popup(camera: Camera) -> MarkerPopup:
    station = get_station_by_id(camera.station_id)
    return MarkerPopup(
        title=camera.name,
        type_label=TYPE_LABELS[camera.type],
        status_label=STATUS_LABELS[camera.status],
        location=camera.location,
        notes=camera.notes,
        station_name=station.name if station else None,
    )


class MarkerReconciler:
    """
    Keeps the markers on a map surface equal to a camera collection.

    Every reconcile is a full replace: all bound markers are removed and the
    collection is drawn again. The first `sync_batch_size` markers are drawn
    immediately, the rest by a background task that yields `render_delay`
    seconds between markers. Starting a new reconcile cancels that task.
    """

    def __init__(
        self,
        surface: MapSurface,
        focus_zoom: float = 19,
        sync_batch_size: int = 10,
        render_delay: float = 0.01,
        on_preview: Optional[PreviewCallback] = None,
        confirm_delete: Optional[DeleteConfirmer] = None,
        on_delete: Optional[DeleteHandler] = None,
    ) -> None:
        self.surface = surface
        self.focus_zoom = focus_zoom
        self.sync_batch_size = max(0, sync_batch_size)
        self.render_delay = render_delay
        self.on_preview = on_preview
        self.confirm_delete = confirm_delete
        self.on_delete = on_delete

        self._markers: Dict[str, MarkerHandle] = {}
        self._cameras: Dict[str, Camera] = {}
        self._render_task: Optional[asyncio.Task] = None
        self._background_tasks: Set[asyncio.Task] = set()

    @property
    def markers(self) -> Mapping[str, MarkerHandle]:
        return MappingProxyType(self._markers)

    @property
    def rendering(self) -> bool:
        return self._render_task is not None and not self._render_task.done()

    def reconcile(self, cameras: Sequence[Camera]) -> None:
        """Replace every rendered marker with markers for cameras"""
        self._cancel_render()
        self._remove_all()

        pending = list(cameras)
        for camera in pending[:self.sync_batch_size]:
            self._render(camera)

        remaining = pending[self.sync_batch_size:]
        if remaining:
            self._render_task = asyncio.get_running_loop().create_task(self._render_incrementally(remaining))
        logger.debug(f"Reconciling {len(pending)} markers ({len(remaining)} deferred)")

    async def wait_idle(self) -> None:
        """Wait until the current incremental render schedule has finished or been cancelled"""
        while self._render_task is not None and not self._render_task.done():
            await asyncio.wait([self._render_task])

    async def focus(self, camera_id: str) -> bool:
        """
        Fly to a camera and open its popup once the transition has completed

        Returns:
            True if the popup was opened
        """
        await self.wait_idle()
        camera = self._cameras.get(camera_id)
        if camera is None:
            logger.debug(f"Cannot focus camera {camera_id}: no marker")
            return False

        await self.surface.fly_to(camera.lat, camera.lng, self.focus_zoom)

        # The collection may have been reconciled during the transition
        handle = self._markers.get(camera_id)
        if handle is None:
            logger.debug(f"Camera {camera_id} disappeared while flying to it")
            return False
        self.surface.open_popup(handle)
        return True

    async def request_delete(self, camera: Camera) -> bool:
        """
        Ask for confirmation, then delete the camera

        Failures are logged; the store keeps the error message for display.
        """
        if self.confirm_delete is None or self.on_delete is None:
            return False
        try:
            if not await self.confirm_delete(camera):
                return False
            await self.on_delete(camera.id)
            return True
        except Exception as e:
            logger.error(f"Failed to delete camera {camera.id}: {e}", exc_info=True)
            return False

    def clear(self) -> None:
        self._cancel_render()
        self._remove_all()

    async def close(self) -> None:
        """Remove all markers and cancel every task started by this reconciler"""
        self.clear()
        tasks = list(self._background_tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._background_tasks.clear()

    async def _render_incrementally(self, cameras: Sequence[Camera]) -> None:
        for camera in cameras:
            await asyncio.sleep(self.render_delay)
            try:
                self._render(camera)
            except Exception as e:
                logger.error(f"Failed to render marker for camera {camera.id}: {e}", exc_info=True)

    def _render(self, camera: Camera) -> None:
        existing = self._markers.pop(camera.id, None)
        if existing is not None:
            self.surface.remove_marker(existing)

        handle = self.surface.add_marker(
            camera.lat,
            camera.lng,
            build_marker_style(camera),
            tooltip=camera.name,
            popup=build_popup(camera),
        )
        self._bind_handlers(handle, camera)
        self._markers[camera.id] = handle
        self._cameras[camera.id] = camera

    def _bind_handlers(self, handle: MarkerHandle, camera: Camera) -> None:
        if self.on_preview is not None:
            preview = self.on_preview
            self.surface.bind_marker_event(handle, MARKER_HOVER, lambda: preview(camera))
            self.surface.bind_marker_event(handle, MARKER_HOVER_END, lambda: preview(None))
        self.surface.bind_marker_event(handle, MARKER_CLICK, lambda: self._spawn(self.focus(camera.id)))
        self.surface.bind_marker_event(handle, MARKER_SECONDARY, lambda: self._spawn(self.request_delete(camera)))

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    def _cancel_render(self) -> None:
        if self._render_task is not None and not self._render_task.done():
            self._render_task.cancel()
        self._render_task = None

    def _remove_all(self) -> None:
        for handle in self._markers.values():
            self.surface.remove_marker(handle)
        self._markers.clear()
        self._cameras.clear()
