"""Unit tests for shared infrastructure: units, configuration, errors, logging.

Run with: python -m pytest tests/test_common.py -v
"""

import dataclasses
import logging

import numpy as np
import pytest

from common.config import CARTESIAN_CONVERGENCE, MERIDIAN_ARC_CONVERGENCE, ConvergenceConfig
from common.constants import GeodeticConstants
from common.exceptions import (
    EllipsoidMismatchError,
    GeodeticError,
    InvalidEllipsoidParametersError,
    NonConvergenceError,
)
from common.logging_config import get_logger
from common.units import Q_, arcseconds_to_radians, as_magnitude, ppm_to_ratio


class TestUnits:

    def test_bare_number_uses_default_unit(self):
        assert arcseconds_to_radians(3600.0) == pytest.approx(np.radians(1.0), rel=1e-12)
        assert ppm_to_ratio(20.4894) == pytest.approx(20.4894e-6, rel=1e-12)
        assert as_magnitude(12.5, "meter") == 12.5

    def test_quantity_is_converted(self):
        assert as_magnitude(Q_(2.0, "kilometer"), "meter") == pytest.approx(2000.0)
        assert arcseconds_to_radians(Q_(1.0, "degree")) == pytest.approx(np.radians(1.0))

    def test_incompatible_units(self):
        with pytest.raises(ValueError):
            as_magnitude(Q_(1.0, "kilogram"), "meter")


class TestConvergenceConfig:

    def test_defaults(self):
        assert CARTESIAN_CONVERGENCE.tolerance == GeodeticConstants.LATITUDE_TOLERANCE.value
        assert MERIDIAN_ARC_CONVERGENCE.tolerance == GeodeticConstants.MERIDIAN_ARC_TOLERANCE.value
        assert CARTESIAN_CONVERGENCE.max_iterations >= 1

    @pytest.mark.parametrize("kwargs", [
        {"max_iterations": 0},
        {"tolerance": 0.0},
        {"tolerance": -1e-5},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ConvergenceConfig(**kwargs)

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CARTESIAN_CONVERGENCE.tolerance = 1.0


class TestExceptions:

    def test_hierarchy(self):
        assert issubclass(EllipsoidMismatchError, GeodeticError)
        assert issubclass(EllipsoidMismatchError, ValueError)
        assert issubclass(InvalidEllipsoidParametersError, ValueError)
        assert issubclass(NonConvergenceError, RuntimeError)

    def test_mismatch_message(self):
        error = EllipsoidMismatchError("Airy1830", "WGS84")
        assert "not using the same ellipsoid" in str(error)
        assert (error.expected, error.actual) == ("Airy1830", "WGS84")

    def test_non_convergence_fields(self):
        error = NonConvergenceError("Footpoint latitude iteration", 20, 0.5, 1e-5)
        assert error.iterations == 20
        assert error.residual == 0.5
        assert "did not converge after 20 iterations" in str(error)


class TestLogging:

    def test_handler_added_once(self):
        first = get_logger("geodetic.test")
        second = get_logger("geodetic.test", level=logging.DEBUG)
        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG


class TestConstants:

    def test_published_helmert_set_is_read_only(self):
        with pytest.raises(TypeError):
            GeodeticConstants.WGS84_TO_OSGB36["tx"] = 0.0
        assert GeodeticConstants.WGS84_TO_OSGB36["tx"] == -446.448
