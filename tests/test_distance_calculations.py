"""Unit tests for planar and geodesic distances.

Run with: python -m pytest tests/test_distance_calculations.py -v
"""

import pytest

from common.exceptions import EllipsoidMismatchError
from geospatial.coordinate_models import GeographicPoint
from geospatial.distance_calculations import geodesic_distance, planar_distance
from geospatial.ellipsoid import AIRY_1830, GRS80, WGS84
from geospatial.projections import BRITISH_NATIONAL_GRID, ProjectedPoint, utm_zone


def grid_point(x, y, params=BRITISH_NATIONAL_GRID):
    return ProjectedPoint(x, y, params)


class TestPlanarDistance:
    """Pythagorean distance on a grid."""

    def test_one_kilometre_north(self):
        start = grid_point(500000.0, 0.0, utm_zone(31))
        end = grid_point(500000.0, 1000.0, utm_zone(31))
        assert planar_distance(start, end) == 1000

    def test_pythagorean_triple(self):
        assert planar_distance(grid_point(0.0, 0.0), grid_point(3.0, 4.0)) == 5

    def test_symmetric(self):
        a = grid_point(651409.903, 313177.270)
        b = grid_point(530000.0, 180000.0)
        assert planar_distance(a, b) == planar_distance(b, a)

    def test_identical_points(self):
        a = grid_point(651409.903, 313177.270)
        assert planar_distance(a, a) == 0

    @pytest.mark.parametrize("dx, expected", [(0.4, 0), (0.5, 1), (2.5, 3), (1000.49, 1000)])
    def test_rounds_half_away_from_zero(self, dx, expected):
        distance = planar_distance(grid_point(100.0, 0.0), grid_point(100.0 + dx, 0.0))
        assert distance == expected
        assert isinstance(distance, int)

    def test_heights_ignored(self):
        a = ProjectedPoint(0.0, 0.0, BRITISH_NATIONAL_GRID, 0.0)
        b = ProjectedPoint(3.0, 4.0, BRITISH_NATIONAL_GRID, 500.0)
        assert planar_distance(a, b) == 5

    def test_same_ellipsoid_different_grids(self):
        a = grid_point(500000.0, 0.0, utm_zone(31))
        b = grid_point(500000.0, 2000.0, utm_zone(32))
        assert planar_distance(a, b) == 2000

    def test_ellipsoid_mismatch(self):
        a = grid_point(400000.0, 100000.0, BRITISH_NATIONAL_GRID)
        b = grid_point(400000.0, 100000.0, utm_zone(30))
        with pytest.raises(EllipsoidMismatchError):
            planar_distance(a, b)

    def test_method_matches_function(self):
        a = grid_point(400000.0, 100000.0)
        b = grid_point(401200.0, 100500.0)
        assert a.distance(b) == planar_distance(a, b) == 1300


class TestGeodesicDistance:
    """Shortest path on the ellipsoid."""

    def test_new_york_to_london(self):
        new_york = GeographicPoint(40.7128, -74.0060)
        london = GeographicPoint(51.5074, -0.1278)
        assert geodesic_distance(new_york, london) == pytest.approx(5585233.6, abs=1.0)

    def test_one_degree_of_longitude_on_equator(self):
        start = GeographicPoint(0.0, 0.0, ellipsoid=GRS80)
        end = GeographicPoint(0.0, 1.0, ellipsoid=GRS80)
        assert geodesic_distance(start, end) == pytest.approx(111319.49, abs=0.01)

    def test_zero_for_same_point(self):
        point = GeographicPoint(52.0, 1.0, ellipsoid=AIRY_1830)
        assert geodesic_distance(point, point) == pytest.approx(0.0, abs=1e-9)

    def test_ellipsoid_mismatch(self):
        with pytest.raises(EllipsoidMismatchError):
            geodesic_distance(GeographicPoint(52.0, 1.0, ellipsoid=WGS84), GeographicPoint(52.0, 1.0, ellipsoid=AIRY_1830))
