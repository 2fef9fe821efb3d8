# Local application imports
from .base_container import BaseContainer
from .providers import (
    CameraProvider,
    DatabaseProvider,
    RepositoryProvider,
    SearchProvider,
)


class DIContainer(BaseContainer):
    """
    Application container for the camera map.

    Providers run storage first, then the camera repository, then the
    services that sit on top of it. Swapping a dependency for tests is a
    matter of calling register_singleton again after construction.
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        DatabaseProvider.register(self)
        # Repository binds to whichever storage handle was registered above
        RepositoryProvider.register(self)
        CameraProvider.register(self)
        SearchProvider.register(self)


_container: DIContainer | None = None


def get_container() -> DIContainer:
    """Return the process-wide container, building it on first use"""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container so the next get_container() rebuilds it"""
    global _container
    _container = None
