from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class GeocodeCandidate:
    """One address candidate returned by a geocoding provider"""
    id: str
    label: str
    lat: float
    lng: float

    @property
    def short_label(self) -> str:
        """First segment of the display label (usually the street name)"""
        return self.label.split(",")[0].strip()


class Geocoder(ABC):
    """Free-text query -> ranked coordinate candidates"""

    @abstractmethod
    async def search(self, query: str, limit: int) -> List[GeocodeCandidate]:
        """
        Look up candidates for query.

        Raises:
            GeocodingError: On network, HTTP or payload failures
        """
        pass
