# Standard library imports
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True)
class WorkingBounds:
    """
    Fixed rectangular working region given by its south-west and north-east corners.
    """
    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        if self.south > self.north:
            raise ValueError("Working bounds south edge must not exceed north edge")
        if self.west > self.east:
            raise ValueError("Working bounds west edge must not exceed east edge")

    @property
    def south_west(self) -> Coordinate:
        return Coordinate(self.south, self.west)

    @property
    def north_east(self) -> Coordinate:
        return Coordinate(self.north, self.east)

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.south + self.north) / 2, (self.west + self.east) / 2)

    def contains(self, lat: float, lng: float) -> bool:
        """Inclusive of edges; non-finite input is never contained."""
        try:
            if not (math.isfinite(lat) and math.isfinite(lng)):
                return False
        except TypeError:
            return False
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def to_viewbox(self) -> str:
        """Format as a `west,south,east,north` bounding box string."""
        return f"{self.west},{self.south},{self.east},{self.north}"
