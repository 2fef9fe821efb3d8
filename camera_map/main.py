# Standard library imports
from pathlib import Path
from typing import Optional, Union
import logging

# External package imports
from dotenv import load_dotenv

# Local application imports
from .application.services.bounds_guard import BoundsGuard
from .application.services.camera_store import CameraStore
from .application.services.geocode_search import GeocodeSearch
from .application.services.map_session import MapSession
from .application.services.marker_reconciler import DeleteConfirmer
from .application.services.transient_notice import TransientNotice
from .core.config import get_settings, reset_settings
from .di.container import DIContainer, get_container, reset_container
from .domain.interfaces.map_surface import MapSurface
from .infrastructure.db.mongo_connection import close_database
from .infrastructure.http_client_factory import close_shared_http_client

logger = logging.getLogger(__name__)


def create_application(env_file: Optional[Union[str, Path]] = None) -> DIContainer:
    """
    Load configuration and build the dependency container.

    This function sets up the core with:
    - Environment variable loading (.env at the project root unless env_file is given)
    - Storage backend selection (remote when MONGO_URI is set, local otherwise)
    - Service registration

    Returns:
        Configured DIContainer instance
    """
    env_path = Path(env_file) if env_file is not None else Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    # Settings and container are cached; rebuild them from the freshly loaded environment
    reset_settings()
    reset_container()

    container = get_container()
    logger.info("Camera map core initialized")
    return container


def create_map_session(
    surface: MapSurface,
    container: Optional[DIContainer] = None,
    confirm_delete: Optional[DeleteConfirmer] = None,
) -> MapSession:
    """
    Build a map session for one rendering surface.

    Args:
        surface: Map surface implementation provided by the presentation layer
        container: Dependency container. Defaults to the global one.
        confirm_delete: Async callback asked before a marker's delete action runs

    Returns:
        MapSession, not yet started
    """
    container = container or get_container()
    settings = get_settings()
    return MapSession(
        surface=surface,
        store=container.get(CameraStore),
        search=container.get(GeocodeSearch),
        guard=container.get(BoundsGuard),
        notice=container.get(TransientNotice),
        confirm_delete=confirm_delete,
        focus_zoom=settings.map_focus_zoom,
        min_zoom=settings.map_min_zoom,
        sync_batch_size=settings.marker_sync_batch,
        render_delay=settings.marker_render_delay,
    )


async def shutdown_application() -> None:
    """Close shared connections (call on application shutdown)"""
    await close_shared_http_client()
    close_database()
    reset_container()
    logger.info("Application shutdown complete")
