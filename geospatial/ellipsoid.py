"""
Reference Ellipsoids.

This module defines the reference ellipsoid, the mathematical surface on
which geographic coordinates are expressed, together with the standard
named ellipsoids and the two principal radii of curvature.

An ellipsoid is defined by its semi-major axis a and semi-minor axis b.
Every other shape parameter is derived once at construction:

    e²  = (a² - b²) / a²      first eccentricity squared
    f   = (a - b) / a         flattening
    n   = (a - b) / (a + b)   third flattening
    e'² = (a² - b²) / b²      second eccentricity squared

References
----------
- NIMA TR8350.2: WGS84 parameters
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
"""

from dataclasses import dataclass, field
from typing import Dict

import numpy as np

from common.constants import GeodeticConstants
from common.exceptions import InvalidEllipsoidParametersError


@dataclass(frozen=True)
class Ellipsoid:
    """A reference ellipsoid.

    Attributes
    ----------
    major_axis : float
        Semi-major axis (equatorial radius) in meters.
    minor_axis : float
        Semi-minor axis (polar radius) in meters.
    name : str
        Identifier for the ellipsoid. Not part of equality: two
        ellipsoids with the same axes are the same surface.

    Derived Parameters
    ------------------
    eccentricity_squared : float
        First eccentricity squared, fixed at construction.

    Raises
    ------
    InvalidEllipsoidParametersError
        If the axes are not finite or violate 0 < minor_axis <= major_axis.
    """
    major_axis: float
    minor_axis: float
    name: str = field(default="", compare=False)
    eccentricity_squared: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        a, b = self.major_axis, self.minor_axis
        if not (np.isfinite(a) and np.isfinite(b)):
            raise InvalidEllipsoidParametersError(
                f"Ellipsoid axes must be finite, got a={a}, b={b}"
            )
        if not 0 < b <= a:
            raise InvalidEllipsoidParametersError(
                f"Ellipsoid axes must satisfy 0 < minor_axis <= major_axis, got a={a}, b={b}"
            )
        object.__setattr__(self, "eccentricity_squared", (a * a - b * b) / (a * a))

    @classmethod
    def from_flattening(cls, major_axis: float, inverse_flattening: float, name: str = "") -> "Ellipsoid":
        """Create an ellipsoid from its semi-major axis and inverse flattening."""
        if not inverse_flattening > 0:
            raise InvalidEllipsoidParametersError(
                f"Inverse flattening must be positive, got {inverse_flattening}"
            )
        return cls(major_axis, major_axis * (1.0 - 1.0 / inverse_flattening), name)

    @property
    def flattening(self) -> float:
        """Flattening f = (a - b) / a."""
        return (self.major_axis - self.minor_axis) / self.major_axis

    @property
    def third_flattening(self) -> float:
        """Third flattening n = (a - b) / (a + b), the meridian arc series variable."""
        return (self.major_axis - self.minor_axis) / (self.major_axis + self.minor_axis)

    @property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared e'² = (a² - b²) / b²."""
        return self.eccentricity_squared / (1 - self.eccentricity_squared)

    def __str__(self) -> str:
        return self.name or f"Ellipsoid(a={self.major_axis}, b={self.minor_axis})"


def _from_constants(prefix: str, name: str) -> Ellipsoid:
    return Ellipsoid(
        major_axis=getattr(GeodeticConstants, f"{prefix}_SEMI_MAJOR_AXIS").value,
        minor_axis=getattr(GeodeticConstants, f"{prefix}_SEMI_MINOR_AXIS").value,
        name=name
    )


WGS84 = _from_constants("WGS84", "WGS84")
GRS80 = _from_constants("GRS80", "GRS80")
AIRY_1830 = _from_constants("AIRY_1830", "Airy1830")
AIRY_MODIFIED = _from_constants("AIRY_MODIFIED", "AiryModified")
BESSEL_1841 = _from_constants("BESSEL_1841", "Bessel1841")
CLARKE_1866 = _from_constants("CLARKE_1866", "Clarke1866")
INTERNATIONAL_1924 = _from_constants("INTERNATIONAL_1924", "International1924")

NAMED_ELLIPSOIDS: Dict[str, Ellipsoid] = {
    e.name.lower(): e
    for e in (WGS84, GRS80, AIRY_1830, AIRY_MODIFIED, BESSEL_1841, CLARKE_1866, INTERNATIONAL_1924)
}


def named_ellipsoid(name: str) -> Ellipsoid:
    """Look up a standard ellipsoid by name (case-insensitive).

    Raises
    ------
    KeyError
        If no standard ellipsoid has that name.
    """
    try:
        return NAMED_ELLIPSOIDS[name.lower().replace(" ", "").replace("_", "")]
    except KeyError:
        raise KeyError(
            f"Unknown ellipsoid {name!r}; known: {sorted(NAMED_ELLIPSOIDS)}"
        ) from None


def radius_of_curvature_meridian(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """Compute the radius of curvature in the meridian plane (rho).

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature in meters.

    Notes
    -----
    rho = a(1 - e²) / (1 - e² sin²φ)^(3/2)
    """
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - ellipsoid.eccentricity_squared * sin_lat**2) ** 1.5
    return ellipsoid.major_axis * (1 - ellipsoid.eccentricity_squared) / denominator


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """Compute the radius of curvature in the prime vertical (nu).

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Radius of curvature in meters.

    Notes
    -----
    nu = a / (1 - e² sin²φ)^(1/2)

    At the equator nu = a; at the poles nu = a² / b.
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - ellipsoid.eccentricity_squared * sin_lat**2)
    return ellipsoid.major_axis / denominator
