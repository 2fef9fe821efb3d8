"""
Camera map core root package.

This package contains the composition entry points (main.py), the camera
domain model, application services (store, marker reconciler, address
search, placement workflow) and infrastructure (local and MongoDB storage,
Nominatim geocoding). Rendering is left to a MapSurface implementation.
"""
