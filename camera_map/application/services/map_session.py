# Standard library imports
import logging
from typing import Any, Callable, Optional

# Local application imports
from ...domain.interfaces.geocoder import GeocodeCandidate
from ...domain.interfaces.map_surface import MAP_DRAG, MAP_ZOOM_START, MapSurface
from ...domain.models.camera import Camera
from .bounds_guard import BoundsGuard
from .camera_store import CameraStore
from .geocode_search import GeocodeSearch
from .marker_reconciler import DeleteConfirmer, MarkerReconciler
from .placement_workflow import PlacementWorkflow
from .transient_notice import TransientNotice

logger = logging.getLogger(__name__)


class MapSession:
    """
    Everything that runs against one map surface.

    Wires the store to the marker reconciler, and the guard, notice and
    search to the placement workflow. `start` draws the initial collection;
    `close` cancels every timer and task the session owns.
    """

    def __init__(
        self,
        surface: MapSurface,
        store: CameraStore,
        search: GeocodeSearch,
        guard: BoundsGuard,
        notice: TransientNotice,
        confirm_delete: Optional[DeleteConfirmer] = None,
        focus_zoom: float = 19,
        min_zoom: float = 12,
        sync_batch_size: int = 10,
        render_delay: float = 0.01,
    ) -> None:
        self.surface = surface
        self.store = store
        self.search = search
        self.guard = guard
        self.notice = notice
        self.preview: Optional[Camera] = None

        self.reconciler = MarkerReconciler(
            surface,
            focus_zoom=focus_zoom,
            sync_batch_size=sync_batch_size,
            render_delay=render_delay,
            on_preview=self._set_preview,
            confirm_delete=confirm_delete,
            on_delete=store.delete,
        )
        self.placement = PlacementWorkflow(
            surface,
            store,
            guard,
            notice,
            min_zoom=min_zoom,
            focus_zoom=focus_zoom,
        )
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._listening = False

    async def start(self) -> None:
        """
        Configure the surface and draw the current collection

        Raises:
            Repository errors from the initial fetch (recorded on the store)
        """
        self.placement.attach()
        if not self._listening:
            self.surface.on(MAP_DRAG, self._clear_preview)
            self.surface.on(MAP_ZOOM_START, self._clear_preview)
            self._listening = True
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.reconciler.reconcile)
        await self.store.refresh()
        logger.info(f"Map session started with {len(self.store.cameras)} cameras")

    async def focus(self, camera_id: str) -> bool:
        return await self.reconciler.focus(camera_id)

    async def select_search_result(self, candidate: GeocodeCandidate) -> bool:
        accepted = await self.placement.select_search_result(candidate)
        if accepted:
            self.search.clear()
        return accepted

    async def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.placement.close()
        await self.reconciler.close()
        await self.search.close()
        self.notice.close()
        self.preview = None
        logger.info("Map session closed")

    def _set_preview(self, camera: Optional[Camera]) -> None:
        self.preview = camera

    def _clear_preview(self, *_args: Any) -> None:
        self.preview = None
