from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .camera_provider import CameraProvider
from .search_provider import SearchProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "CameraProvider",
    "SearchProvider",
]
