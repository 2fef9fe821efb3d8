"""Police stations a camera can be affiliated with"""

# Standard library imports
from dataclasses import dataclass
from typing import Optional, Tuple

NEUTRAL_STATION_COLOR = "#6b7280"


@dataclass(frozen=True)
class Station:
    id: str
    name: str
    code: str
    color: str
    description: Optional[str] = None


STATIONS: Tuple[Station, ...] = (
    Station(
        id="nsp",
        name="Estación Nuestra Señora de la Paz",
        code="NSP",
        color="#3b82f6",
        description="Comisaría Nuestra Señora de la Paz",
    ),
    Station(
        id="sc",
        name="Estación Santos Chocano",
        code="SC",
        color="#8b5cf6",
        description="Comisaría Santos Chocano",
    ),
)


def get_station_by_id(station_id: Optional[str]) -> Optional[Station]:
    if not station_id:
        return None
    for station in STATIONS:
        if station.id == station_id:
            return station
    return None


def get_station_color(station_id: Optional[str]) -> str:
    station = get_station_by_id(station_id)
    return station.color if station else NEUTRAL_STATION_COLOR
