"""External service clients for communicating with external systems"""

from .nominatim_client import NominatimGeocoder

__all__ = [
    "NominatimGeocoder",
]
