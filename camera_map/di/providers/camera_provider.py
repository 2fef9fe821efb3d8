from typing import TYPE_CHECKING

from ...application.services.bounds_guard import BoundsGuard
from ...application.services.camera_store import CameraStore
from ...application.services.transient_notice import TransientNotice
from ...core.config import get_settings
from ...domain.repositories.camera_repository import CameraRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class CameraProvider:
    """Camera service provider - registers the store and the placement helpers"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register camera services.
        The store and guard are shared; each map session gets its own notice.
        """
        settings = get_settings()

        container.register_singleton(
            CameraStore,
            CameraStore(camera_repository=container.get(CameraRepository))
        )

        container.register_singleton(
            BoundsGuard,
            BoundsGuard(settings.working_bounds)
        )

        container.register_factory(
            TransientNotice,
            lambda: TransientNotice(duration=settings.notice_duration_seconds)
        )
