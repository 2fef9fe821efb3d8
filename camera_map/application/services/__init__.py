from .bounds_guard import BoundsGuard
from .camera_store import CameraStore
from .geocode_search import GeocodeSearch
from .map_session import MapSession
from .marker_reconciler import MarkerReconciler, build_marker_style, build_popup
from .placement_workflow import PlacementWorkflow
from .transient_notice import TransientNotice

__all__ = [
    "BoundsGuard",
    "CameraStore",
    "GeocodeSearch",
    "MapSession",
    "MarkerReconciler",
    "build_marker_style",
    "build_popup",
    "PlacementWorkflow",
    "TransientNotice",
]
