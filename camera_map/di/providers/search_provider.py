from typing import TYPE_CHECKING

from ...application.services.geocode_search import GeocodeSearch
from ...core.config import get_settings
from ...domain.interfaces.geocoder import Geocoder
from ...infrastructure.external.nominatim_client import NominatimGeocoder

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class SearchProvider:
    """Address search provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        # One geocoder client shared by every search box
        if not container.is_registered(Geocoder):
            container.register_singleton(Geocoder, NominatimGeocoder())

        container.register_factory(
            GeocodeSearch,
            lambda: GeocodeSearch(
                geocoder=container.get(Geocoder),
                min_query_length=settings.search_min_length,
                debounce_seconds=settings.search_debounce_seconds,
                max_results=settings.search_max_results,
            )
        )
