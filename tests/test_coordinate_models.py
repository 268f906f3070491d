"""Unit tests for geographic <-> Cartesian (ECEF) conversion.

Test cases include:
- Known reference points (equator, poles)
- Round-trip transformations (geographic -> ECEF -> geographic)
- Agreement with PROJ's geocentric conversion
- Bounded iteration and non-convergence reporting

Run with: python -m pytest tests/test_coordinate_models.py -v
"""

import dataclasses

import numpy as np
import pytest
from pyproj import Transformer

from common.config import ConvergenceConfig
from common.exceptions import NonConvergenceError
from geospatial.coordinate_models import (
    CartesianPoint,
    GeographicPoint,
    ecef_to_geodetic,
    geodetic_to_ecef,
    geodetic_to_ecef_batch,
    round_half_away,
)
from geospatial.ellipsoid import AIRY_1830, WGS84


class TestGeodeticToECEF:
    """Closed-form geographic to Cartesian conversion."""

    def test_equator_prime_meridian(self):
        xyz = geodetic_to_ecef(0.0, 0.0, 0.0, WGS84)
        np.testing.assert_allclose(xyz, [6378137.0, 0.0, 0.0], atol=1e-9)

    def test_north_pole(self):
        xyz = geodetic_to_ecef(np.pi / 2, 0.0, 0.0, WGS84)
        np.testing.assert_allclose(xyz, [0.0, 0.0, 6356752.314245], atol=1e-6)

    def test_south_pole(self):
        xyz = geodetic_to_ecef(-np.pi / 2, 0.0, 0.0, WGS84)
        np.testing.assert_allclose(xyz, [0.0, 0.0, -6356752.314245], atol=1e-6)

    def test_height_moves_along_normal(self):
        lat, lon = np.radians(45.0), np.radians(90.0)
        low = np.array(geodetic_to_ecef(lat, lon, 0.0))
        high = np.array(geodetic_to_ecef(lat, lon, 1000.0))
        assert np.linalg.norm(high - low) == pytest.approx(1000.0, abs=1e-6)

    def test_matches_proj_geocentric(self):
        to_ecef = Transformer.from_crs("EPSG:4979", "EPSG:4978", always_xy=True)
        for lat, lon, h in [(52.0, 0.0, 0.0), (-33.9, 18.4, 120.0), (10.0, -120.0, 8000.0)]:
            expected = to_ecef.transform(lon, lat, h)
            actual = GeographicPoint(lat, lon, h, WGS84).to_cartesian()
            np.testing.assert_allclose([actual.x, actual.y, actual.z], expected, atol=1e-3)

    def test_batch_matches_scalar(self):
        lats = np.radians([0.0, 30.0, -45.0, 89.0])
        lons = np.radians([0.0, 100.0, -170.0, 45.0])
        heights = np.array([0.0, 500.0, -200.0, 3000.0])
        X, Y, Z = geodetic_to_ecef_batch(lats, lons, heights, AIRY_1830)
        for i in range(len(lats)):
            expected = geodetic_to_ecef(lats[i], lons[i], heights[i], AIRY_1830)
            np.testing.assert_allclose([X[i], Y[i], Z[i]], expected, rtol=1e-12)


class TestECEFToGeodetic:
    """Iterative Cartesian to geographic conversion."""

    def test_equator_prime_meridian(self):
        llh = ecef_to_geodetic(6378137.0, 0.0, 0.0, WGS84)
        np.testing.assert_allclose(llh, [0.0, 0.0, 0.0], atol=1e-6)

    def test_north_pole(self):
        lat, _, h = ecef_to_geodetic(0.0, 0.0, 6356752.314245, WGS84)
        assert lat == pytest.approx(np.pi / 2)
        assert h == pytest.approx(0.0, abs=1e-6)

    def test_south_pole_with_height(self):
        lat, _, h = ecef_to_geodetic(0.0, 0.0, -6356852.314245, WGS84)
        assert lat == pytest.approx(-np.pi / 2)
        assert h == pytest.approx(100.0, abs=1e-6)

    def test_longitude_quadrants(self):
        for lon_deg in [-179.0, -90.0, -45.0, 0.0, 45.0, 135.0, 179.0]:
            xyz = geodetic_to_ecef(np.radians(20.0), np.radians(lon_deg), 0.0)
            _, lon, _ = ecef_to_geodetic(*xyz)
            assert np.degrees(lon) == pytest.approx(lon_deg, abs=1e-9)

    def test_non_convergence_is_reported(self):
        x, y, z = geodetic_to_ecef(np.radians(45.0), 0.0, 9000.0)
        config = ConvergenceConfig(max_iterations=1, tolerance=1e-15)
        with pytest.raises(NonConvergenceError) as excinfo:
            ecef_to_geodetic(x, y, z, WGS84, config)
        assert excinfo.value.iterations == 1
        assert excinfo.value.residual > 1e-15
        assert isinstance(excinfo.value, RuntimeError)

    def test_converges_within_default_cap(self):
        x, y, z = geodetic_to_ecef(np.radians(60.0), np.radians(10.0), 8848.0)
        lat, lon, h = ecef_to_geodetic(x, y, z, WGS84, ConvergenceConfig(max_iterations=5, tolerance=1e-12))
        assert np.degrees(lat) == pytest.approx(60.0, abs=1e-10)
        assert h == pytest.approx(8848.0, abs=1e-4)


class TestPoints:
    """GeographicPoint and CartesianPoint value types."""

    def test_scenario_52n_0e(self):
        point = GeographicPoint(52.0, 0.0, 0.0, WGS84)
        cartesian = point.to_cartesian()

        e2 = WGS84.eccentricity_squared
        nu = WGS84.major_axis / np.sqrt(1 - e2 * np.sin(np.radians(52.0))**2)
        assert cartesian.x == pytest.approx(nu * np.cos(np.radians(52.0)), abs=1e-6)
        assert cartesian.y == pytest.approx(0.0, abs=1e-9)
        assert cartesian.z == pytest.approx((1 - e2) * nu * np.sin(np.radians(52.0)), abs=1e-6)
        assert cartesian.ellipsoid is WGS84

        back = cartesian.to_geographic()
        assert back.latitude == pytest.approx(52.0, abs=1e-9)
        assert back.longitude == pytest.approx(0.0, abs=1e-9)
        assert back.height == 0
        assert back.ellipsoid is WGS84

    @pytest.mark.parametrize("lat", [-90.0, -60.5, -45.0, 0.0, 12.3, 52.0, 89.9, 90.0])
    @pytest.mark.parametrize("lon", [-179.5, 0.0, 123.4])
    @pytest.mark.parametrize("height", [-1000.0, 0.0, 9000.0])
    def test_round_trip(self, lat, lon, height):
        original = GeographicPoint(lat, lon, height, WGS84)
        back = original.to_cartesian().to_geographic()

        assert back.latitude == pytest.approx(lat, abs=1e-5)
        if abs(lat) < 90.0:
            assert back.longitude == pytest.approx(lon, abs=1e-5)
        assert abs(back.height - height) <= 1

    def test_height_rounded_to_whole_metres(self):
        point = GeographicPoint(30.0, 30.0, 123.4, AIRY_1830).to_cartesian().to_geographic()
        assert point.height == 123
        assert isinstance(point.height, int)

    def test_ellipsoid_carried_through(self):
        cartesian = GeographicPoint(52.0, -1.0, 0.0, AIRY_1830).to_cartesian()
        assert cartesian.ellipsoid is AIRY_1830
        assert cartesian.to_geographic().ellipsoid is AIRY_1830

    def test_default_height_and_ellipsoid(self):
        point = GeographicPoint(10.0, 20.0)
        assert point.height == 0.0
        assert point.ellipsoid == WGS84

    def test_points_are_immutable(self):
        point = GeographicPoint(10.0, 20.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.latitude = 11.0
        cartesian = CartesianPoint(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cartesian.x = 0.0

    @pytest.mark.parametrize("lat", [90.0001, -91.0, 180.0])
    def test_latitude_out_of_range(self, lat):
        with pytest.raises(ValueError):
            GeographicPoint(lat, 0.0)

    def test_config_passed_through(self):
        cartesian = GeographicPoint(45.0, 0.0, 9000.0).to_cartesian()
        with pytest.raises(NonConvergenceError):
            cartesian.to_geographic(ConvergenceConfig(max_iterations=1, tolerance=1e-15))


class TestRounding:
    """Half-away-from-zero rounding of heights and distances."""

    @pytest.mark.parametrize("value, expected", [
        (0.0, 0), (0.4, 0), (0.5, 1), (1.5, 2), (2.5, 3),
        (-0.5, -1), (-2.5, -3), (-2.4, -2), (999.9999, 1000),
    ])
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected
