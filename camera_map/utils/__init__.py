"""Utility modules for the camera map core."""

from .location_colors import LocationColor, get_location_color

__all__ = [
    "LocationColor",
    "get_location_color",
]
