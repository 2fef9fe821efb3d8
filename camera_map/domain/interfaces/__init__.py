from .geocoder import GeocodeCandidate, Geocoder
from .map_surface import MapSurface, MarkerHandle, MarkerPopup, MarkerStyle

__all__ = [
    "GeocodeCandidate",
    "Geocoder",
    "MapSurface",
    "MarkerHandle",
    "MarkerPopup",
    "MarkerStyle",
]
