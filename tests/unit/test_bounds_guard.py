"""
Unit tests for WorkingBounds and BoundsGuard.
"""
import math

import pytest
from camera_map.application.services.bounds_guard import BoundsGuard
from camera_map.domain.exceptions import OutOfBoundsError
from camera_map.domain.models import WorkingBounds

TRUJILLO = WorkingBounds(south=-8.20, west=-79.10, north=-8.00, east=-78.95)


class TestWorkingBounds:
    """Tests for WorkingBounds"""

    def test_corners_and_center(self):
        assert TRUJILLO.south_west.lat == -8.20
        assert TRUJILLO.north_east.lng == -78.95
        assert TRUJILLO.center.lat == pytest.approx(-8.10)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            WorkingBounds(south=-8.0, west=-79.10, north=-8.2, east=-78.95)

    def test_viewbox_format(self):
        assert TRUJILLO.to_viewbox() == "-79.1,-8.2,-78.95,-8.0"


class TestBoundsGuard:
    """Tests for BoundsGuard.contains / ensure_contains"""

    @pytest.fixture
    def guard(self):
        return BoundsGuard(TRUJILLO)

    def test_plaza_mayor_inside(self, guard):
        assert guard.contains(-8.1116, -79.0288)

    @pytest.mark.parametrize(
        "lat,lng",
        [(-8.20, -79.10), (-8.00, -78.95), (-8.20, -78.95), (-8.00, -79.10)],
    )
    def test_edges_are_inclusive(self, guard, lat, lng):
        assert guard.contains(lat, lng)

    @pytest.mark.parametrize(
        "lat,lng",
        [(-12.0464, -77.0428), (-8.2001, -79.0), (-7.9999, -79.0), (-8.1, -79.1001), (-8.1, -78.9499)],
    )
    def test_outside(self, guard, lat, lng):
        assert not guard.contains(lat, lng)

    def test_non_finite_never_contained(self, guard):
        assert not guard.contains(math.nan, -79.0)
        assert not guard.contains(-8.1, math.inf)

    def test_ensure_contains_raises(self, guard):
        with pytest.raises(OutOfBoundsError) as exc_info:
            guard.ensure_contains(-12.0464, -77.0428)
        assert exc_info.value.lat == -12.0464
        assert "outside the working area" in exc_info.value.user_message

    def test_ensure_contains_passes(self, guard):
        guard.ensure_contains(-8.1116, -79.0288)
