from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..models.geo import WorkingBounds

# Marker events the core binds
MARKER_HOVER = "mouseover"
MARKER_HOVER_END = "mouseout"
MARKER_CLICK = "click"
MARKER_SECONDARY = "contextmenu"

# Map events the core listens to
MAP_CLICK = "click"
MAP_DRAG = "drag"
MAP_ZOOM_START = "zoomstart"

MarkerHandle = Any


@dataclass(frozen=True)
class MarkerStyle:
    """Icon description for a camera marker"""
    fill: str
    border: str
    glyph: str
    location_primary: str
    location_secondary: str
    temporary: bool = False


@dataclass(frozen=True)
class MarkerPopup:
    """Detail popup content for a camera marker"""
    title: str
    type_label: str
    status_label: str
    location: Optional[str] = None
    notes: Optional[str] = None
    station_name: Optional[str] = None


class MapSurface(ABC):
    """
    Port to the tile/map rendering surface.

    Implemented by the presentation layer (e.g. a Leaflet bridge). Marker
    handles are opaque to the core. Map click callbacks receive (lat, lng);
    marker event callbacks receive no arguments.
    """

    @abstractmethod
    def add_marker(
        self,
        lat: float,
        lng: float,
        style: MarkerStyle,
        tooltip: Optional[str] = None,
        popup: Optional[MarkerPopup] = None,
    ) -> MarkerHandle:
        """Draw a marker and return its handle"""
        pass

    @abstractmethod
    def remove_marker(self, handle: MarkerHandle) -> None:
        """Detach a marker and every listener bound to it"""
        pass

    @abstractmethod
    def bind_marker_event(self, handle: MarkerHandle, event: str, callback: Callable[[], Any]) -> None:
        pass

    @abstractmethod
    def open_popup(self, handle: MarkerHandle) -> None:
        pass

    @abstractmethod
    async def fly_to(self, lat: float, lng: float, zoom: float) -> None:
        """Pan/zoom to a point; returns once the transition has completed"""
        pass

    @abstractmethod
    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register a map-level listener (click, drag, zoomstart)"""
        pass

    @abstractmethod
    def get_zoom(self) -> float:
        pass

    @abstractmethod
    def get_bounds(self) -> WorkingBounds:
        pass

    @abstractmethod
    def set_max_bounds(self, bounds: WorkingBounds) -> None:
        pass

    @abstractmethod
    def set_min_zoom(self, zoom: float) -> None:
        pass
