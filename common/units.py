"""
Unit Registry for Geodetic Parameters.

This module provides a centralized unit system using the `pint` library.
Published transformation parameters mix metres, parts-per-million and
arc-seconds while the algorithms work in metres, pure ratios and radians;
every such conversion goes through this registry instead of hand-written
scale factors.

Example Usage
-------------
>>> from common.units import Q_, as_magnitude
>>> as_magnitude(Q_(0.8421, 'arcsecond'), 'radian')
4.0826...e-06
"""

from typing import Optional, Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


def as_magnitude(value: Union[float, pint.Quantity], unit: str, default_unit: Optional[str] = None) -> float:
    """Express a value as a bare float in the requested unit.

    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert. Bare numbers are taken to be in `default_unit`.
    unit : str
        The unit the magnitude is returned in.
    default_unit : str, optional
        Unit of a bare number (defaults to `unit`).

    Returns
    -------
    float
        Magnitude of the value in `unit`.

    Raises
    ------
    ValueError
        If a quantity's units are incompatible with `unit`.
    """
    if not isinstance(value, pint.Quantity):
        value = ureg.Quantity(float(value), default_unit or unit)
    try:
        return float(value.to(unit).magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(
            f"Value has incompatible units. Expected {unit}, got {value.units}"
        ) from e


def arcseconds_to_radians(value: Union[float, pint.Quantity]) -> float:
    """Convert an angle given in arc-seconds to radians."""
    return as_magnitude(value, "radian", default_unit="arcsecond")


def ppm_to_ratio(value: Union[float, pint.Quantity]) -> float:
    """Convert a scale difference given in parts-per-million to a pure ratio."""
    return as_magnitude(value, "dimensionless", default_unit="ppm")

