# Standard library imports
import logging

# Local application imports
from ...domain.exceptions import OutOfBoundsError
from ...domain.models.geo import WorkingBounds

logger = logging.getLogger(__name__)


class BoundsGuard:
    """Gatekeeper for every coordinate that may become a camera location"""

    def __init__(self, bounds: WorkingBounds) -> None:
        self.bounds = bounds

    def contains(self, lat: float, lng: float) -> bool:
        return self.bounds.contains(lat, lng)

    def ensure_contains(self, lat: float, lng: float) -> None:
        """
        Raises:
            OutOfBoundsError: If (lat, lng) lies outside the working region
        """
        if not self.contains(lat, lng):
            logger.info(f"Rejected coordinate ({lat}, {lng}) outside working bounds")
            raise OutOfBoundsError(lat, lng)
