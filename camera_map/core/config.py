# Standard library imports
import os
from typing import Final, Optional

# Local application imports
from ..domain.models.geo import Coordinate, WorkingBounds


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the camera map core.
    All settings are loaded from environment variables with sensible defaults
    for the Trujillo (La Libertad, Peru) working area.
    """

    def __init__(self) -> None:
        # Storage Configuration - a non-empty MONGO_URI selects remote storage
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "").strip()
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "camera_map")
        self.mongo_camera_collection: Final[str] = os.getenv("MONGO_CAMERA_COLLECTION", "cameras")
        self.local_storage_dir: Final[str] = os.getenv("CAMERA_STORAGE_DIR", ".camera_map")
        self.local_storage_key: Final[str] = os.getenv("CAMERA_STORAGE_KEY", "cameras")

        # Working Area Configuration
        self.bounds_south: Final[float] = float(os.getenv("BOUNDS_SOUTH", "-8.20"))
        self.bounds_west: Final[float] = float(os.getenv("BOUNDS_WEST", "-79.10"))
        self.bounds_north: Final[float] = float(os.getenv("BOUNDS_NORTH", "-8.00"))
        self.bounds_east: Final[float] = float(os.getenv("BOUNDS_EAST", "-78.95"))

        # Map Configuration
        self.map_center_lat: Final[float] = float(os.getenv("MAP_CENTER_LAT", "-8.1116"))
        self.map_center_lng: Final[float] = float(os.getenv("MAP_CENTER_LNG", "-79.0288"))
        self.map_initial_zoom: Final[int] = int(os.getenv("MAP_INITIAL_ZOOM", "13"))
        self.map_min_zoom: Final[int] = int(os.getenv("MAP_MIN_ZOOM", "12"))
        self.map_focus_zoom: Final[int] = int(os.getenv("MAP_FOCUS_ZOOM", "19"))
        self.marker_sync_batch: Final[int] = int(os.getenv("MARKER_SYNC_BATCH", "10"))
        self.marker_render_delay: Final[float] = float(os.getenv("MARKER_RENDER_DELAY", "0.01"))
        self.notice_duration_seconds: Final[float] = float(os.getenv("NOTICE_DURATION_SECONDS", "4"))

        # Geocoding Configuration
        self.geocoder_url: Final[str] = os.getenv("GEOCODER_URL", "https://nominatim.openstreetmap.org")
        self.geocoder_user_agent: Final[str] = os.getenv("GEOCODER_USER_AGENT", "CameraManagementApp/1.0")
        self.geocoder_viewbox: Final[str] = os.getenv("GEOCODER_VIEWBOX", "-79.0405,-8.1129,-78.9904,-8.0869")
        self.geocoder_region: Final[str] = os.getenv("GEOCODER_REGION", "Trujillo,La Libertad,Peru")
        self.geocoder_timeout: Final[float] = float(os.getenv("GEOCODER_TIMEOUT", "10"))
        self.search_debounce_seconds: Final[float] = float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.5"))
        self.search_min_length: Final[int] = int(os.getenv("SEARCH_MIN_LENGTH", "3"))
        self.search_max_results: Final[int] = int(os.getenv("SEARCH_MAX_RESULTS", "8"))

    @property
    def use_remote_storage(self) -> bool:
        return bool(self.mongo_uri)

    @property
    def working_bounds(self) -> WorkingBounds:
        return WorkingBounds(
            south=self.bounds_south,
            west=self.bounds_west,
            north=self.bounds_north,
            east=self.bounds_east,
        )

    @property
    def map_center(self) -> Coordinate:
        return Coordinate(self.map_center_lat, self.map_center_lng)


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
