"""
Shared pytest fixtures for camera map tests.
"""
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

from camera_map.core.config import reset_settings
from camera_map.di.container import reset_container
from camera_map.domain.interfaces.map_surface import MapSurface, MarkerPopup, MarkerStyle
from camera_map.domain.models.geo import WorkingBounds
from camera_map.infrastructure.storage.json_file_store import JsonFileStore

TRUJILLO_BOUNDS = WorkingBounds(south=-8.20, west=-79.10, north=-8.00, east=-78.95)


class FakeMapSurface(MapSurface):
    """In-memory MapSurface that records every command it receives."""

    def __init__(self) -> None:
        self.drawn: Dict[str, Dict[str, Any]] = {}
        self.handlers: Dict[str, Dict[str, Callable[[], Any]]] = {}
        self.map_listeners: Dict[str, List[Callable[..., Any]]] = {}
        self.removed: List[str] = []
        self.calls: List[tuple] = []
        self.max_bounds: Optional[WorkingBounds] = None
        self.min_zoom: Optional[float] = None
        self.zoom: float = 13
        # When set, fly_to suspends until the event is set
        self.fly_gate = None
        self._counter = 0

    def add_marker(
        self,
        lat: float,
        lng: float,
        style: MarkerStyle,
        tooltip: Optional[str] = None,
        popup: Optional[MarkerPopup] = None,
    ) -> str:
        self._counter += 1
        handle = f"marker-{self._counter}"
        self.drawn[handle] = {"lat": lat, "lng": lng, "style": style, "tooltip": tooltip, "popup": popup}
        return handle

    def remove_marker(self, handle: str) -> None:
        self.drawn.pop(handle, None)
        self.handlers.pop(handle, None)
        self.removed.append(handle)

    def bind_marker_event(self, handle: str, event: str, callback: Callable[[], Any]) -> None:
        self.handlers.setdefault(handle, {})[event] = callback

    def open_popup(self, handle: str) -> None:
        self.calls.append(("open_popup", handle))

    async def fly_to(self, lat: float, lng: float, zoom: float) -> None:
        self.calls.append(("fly_to_start", lat, lng, zoom))
        if self.fly_gate is not None:
            await self.fly_gate.wait()
        self.zoom = zoom
        self.calls.append(("fly_to_end", lat, lng, zoom))

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        self.map_listeners.setdefault(event, []).append(callback)

    def get_zoom(self) -> float:
        return self.zoom

    def get_bounds(self) -> WorkingBounds:
        return self.max_bounds or TRUJILLO_BOUNDS

    def set_max_bounds(self, bounds: WorkingBounds) -> None:
        self.max_bounds = bounds

    def set_min_zoom(self, zoom: float) -> None:
        self.min_zoom = zoom

    # Test helpers

    def emit(self, event: str, *args: Any) -> None:
        for callback in list(self.map_listeners.get(event, [])):
            callback(*args)

    def trigger(self, handle: str, event: str) -> Any:
        return self.handlers[handle][event]()

    def persistent_markers(self) -> Dict[str, Dict[str, Any]]:
        return {h: m for h, m in self.drawn.items() if not m["style"].temporary}

    def temporary_markers(self) -> Dict[str, Dict[str, Any]]:
        return {h: m for h, m in self.drawn.items() if m["style"].temporary}


@pytest.fixture
def mock_env(tmp_path):
    """Fixture to set common test environment variables (local storage under tmp_path)."""
    env_vars = {
        "MONGO_URI": "",
        "MONGO_DB_NAME": "test_camera_map",
        "CAMERA_STORAGE_DIR": str(tmp_path / "storage"),
        "CAMERA_STORAGE_KEY": "cameras",
        "MARKER_RENDER_DELAY": "0",
        "SEARCH_DEBOUNCE_SECONDS": "0.01",
    }
    reset_settings()
    reset_container()
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars
    reset_settings()
    reset_container()


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches the modules that read it."""
    mock = MagicMock()
    mock.mongo_uri = ""
    mock.mongo_database_name = "test_db"
    mock.mongo_camera_collection = "cameras"
    mock.use_remote_storage = False
    mock.working_bounds = TRUJILLO_BOUNDS
    mock.geocoder_url = "https://geocoder.test"
    mock.geocoder_user_agent = "CameraManagementApp/1.0"
    mock.geocoder_viewbox = "-79.0405,-8.1129,-78.9904,-8.0869"
    mock.geocoder_region = "Trujillo,La Libertad,Peru"
    mock.geocoder_timeout = 5.0

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("camera_map.core.config.get_settings", return_value=mock), patch(
        "camera_map.infrastructure.external.nominatim_client.get_settings", return_value=mock
    ), patch("camera_map.infrastructure.db.mongo_connection.get_settings", return_value=mock), patch(
        "camera_map.infrastructure.http_client_factory.get_settings", return_value=mock
    ):
        yield mock


@pytest.fixture
def local_store(tmp_path):
    """JSON file store rooted in a per-test temporary directory."""
    return JsonFileStore(tmp_path / "storage")


@pytest.fixture
def fake_surface():
    return FakeMapSurface()
