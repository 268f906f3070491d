"""
Coordinate Models for Ellipsoidal Earth Geometry.

This module implements the geographic (latitude, longitude, height) and
Earth-Centered Earth-Fixed Cartesian representations of a point and the
conversions between them on any reference ellipsoid.

Formulae are those of the Ordnance Survey guide, Annex B:

    Geographic -> Cartesian is closed form.
    Cartesian -> Geographic solves latitude by fixed-point iteration,
    starting from the latitude the point would have at zero height.

Each conversion returns a new, independent value; points are never
mutated. Points do not verify that their coordinates are consistent
with the ellipsoid they reference.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain, B1-B2.
- Bowring, B.R. (1976). Transformation from spatial to geographical
  coordinates. Survey Review, 23(181), 323-327.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from common.config import ConvergenceConfig, CARTESIAN_CONVERGENCE
from common.constants import GeodeticConstants
from common.exceptions import NonConvergenceError
from common.logging_config import get_logger
from geospatial.ellipsoid import Ellipsoid, WGS84, radius_of_curvature_prime_vertical

if TYPE_CHECKING:
    from geospatial.datum import HelmertParameters
    from geospatial.projections import ProjectedPoint, TransverseMercatorParameters

logger = get_logger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(np.sign(value) * np.floor(np.abs(value) + 0.5))


def geodetic_to_ecef(
    latitude_rad: float,
    longitude_rad: float,
    height_m: float = 0.0,
    ellipsoid: Ellipsoid = WGS84
) -> Tuple[float, float, float]:
    """Convert geodetic coordinates to Earth-Centered Earth-Fixed (ECEF).

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    longitude_rad : float
        Geodetic longitude in radians.
    height_m : float
        Height above ellipsoid in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    Tuple[float, float, float]
        (X, Y, Z) coordinates in meters in ECEF frame.

    Notes
    -----
    The ECEF frame has:
    - Origin at the ellipsoid centre
    - X-axis through the prime meridian (0° longitude) at equator
    - Y-axis through 90°E at equator
    - Z-axis through the North Pole
    """
    sin_lat = np.sin(latitude_rad)
    cos_lat = np.cos(latitude_rad)

    v = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)

    X = (v + height_m) * cos_lat * np.cos(longitude_rad)
    Y = (v + height_m) * cos_lat * np.sin(longitude_rad)
    Z = ((1 - ellipsoid.eccentricity_squared) * v + height_m) * sin_lat

    return float(X), float(Y), float(Z)


def ecef_to_geodetic(
    X: float,
    Y: float,
    Z: float,
    ellipsoid: Ellipsoid = WGS84,
    config: Optional[ConvergenceConfig] = None
) -> Tuple[float, float, float]:
    """Convert ECEF coordinates to geodetic (latitude, longitude, height).

    Parameters
    ----------
    X, Y, Z : float
        ECEF coordinates in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84).
    config : ConvergenceConfig, optional
        Iteration cap and latitude tolerance in radians
        (default: `CARTESIAN_CONVERGENCE`).

    Returns
    -------
    Tuple[float, float, float]
        (latitude_rad, longitude_rad, height_m), height unrounded.

    Raises
    ------
    NonConvergenceError
        If the latitude change does not fall below the tolerance within
        `config.max_iterations` iterations.

    Notes
    -----
    Typically converges in 1-3 iterations for terrestrial points. Points on
    the rotation axis are resolved directly to a pole; close to the poles
    the height is taken from Z, where p / cos(latitude) is ill-conditioned.
    """
    config = config or CARTESIAN_CONVERGENCE
    e2 = ellipsoid.eccentricity_squared

    longitude_rad = np.arctan2(Y, X)

    # Distance from Z-axis
    p = np.sqrt(X**2 + Y**2)

    if p < GeodeticConstants.POLAR_AXIS_DISTANCE.value:
        latitude_rad = np.pi / 2 if Z >= 0 else -np.pi / 2
        height_m = np.abs(Z) - ellipsoid.minor_axis
        return float(latitude_rad), float(longitude_rad), float(height_m)

    latitude_rad = np.arctan(Z / (p * (1 - e2)))

    change = np.inf
    for iteration in range(1, config.max_iterations + 1):
        v = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)
        latitude_new = np.arctan((Z + e2 * v * np.sin(latitude_rad)) / p)
        change = np.abs(latitude_new - latitude_rad)
        latitude_rad = latitude_new
        if change < config.tolerance:
            logger.debug(f"Latitude converged after {iteration} iterations (change={change:.3e} rad)")
            break
    else:
        logger.warning(
            f"Latitude iteration failed to converge for ({X}, {Y}, {Z}) "
            f"on {ellipsoid}"
        )
        raise NonConvergenceError(
            "Cartesian to geographic latitude iteration",
            config.max_iterations,
            float(change),
            config.tolerance
        )

    v = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)
    cos_lat = np.cos(latitude_rad)

    if np.abs(cos_lat) > GeodeticConstants.NEAR_POLE_COSINE.value:
        height_m = p / cos_lat - v
    else:
        height_m = np.abs(Z) / np.abs(np.sin(latitude_rad)) - v * (1 - e2)

    return float(latitude_rad), float(longitude_rad), float(height_m)


def geodetic_to_ecef_batch(
    latitudes_rad: NDArray[np.float64],
    longitudes_rad: NDArray[np.float64],
    heights_m: NDArray[np.float64],
    ellipsoid: Ellipsoid = WGS84
) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Vectorized geodetic to ECEF conversion.

    Parameters
    ----------
    latitudes_rad : ndarray
        Array of latitudes in radians.
    longitudes_rad : ndarray
        Array of longitudes in radians.
    heights_m : ndarray
        Array of heights in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid.

    Returns
    -------
    Tuple[ndarray, ndarray, ndarray]
        (X, Y, Z) arrays in meters.
    """
    latitudes_rad = np.asarray(latitudes_rad, dtype=np.float64)
    longitudes_rad = np.asarray(longitudes_rad, dtype=np.float64)
    heights_m = np.asarray(heights_m, dtype=np.float64)

    sin_lat = np.sin(latitudes_rad)
    cos_lat = np.cos(latitudes_rad)
    e2 = ellipsoid.eccentricity_squared

    v = ellipsoid.major_axis / np.sqrt(1 - e2 * sin_lat**2)

    X = (v + heights_m) * cos_lat * np.cos(longitudes_rad)
    Y = (v + heights_m) * cos_lat * np.sin(longitudes_rad)
    Z = ((1 - e2) * v + heights_m) * sin_lat

    return X, Y, Z


@dataclass(frozen=True)
class GeographicPoint:
    """A geographic coordinate on a reference ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES, positive north. Range: [-90, 90].
    longitude : float
        Geodetic longitude in DEGREES, positive east.
    height : float, optional
        Height above the ellipsoid in METERS. Default is 0.
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid the coordinates are expressed on (default: WGS84).

    Examples
    --------
    >>> point = GeographicPoint(52.0, 0.0)
    >>> point.to_cartesian().to_geographic().latitude
    52.0...
    """
    latitude: float  # degrees
    longitude: float  # degrees
    height: float = 0.0  # meters above ellipsoid
    ellipsoid: Ellipsoid = WGS84

    def __post_init__(self):
        """Validate latitude range."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(
                f"Latitude {self.latitude} out of range [-90, 90] degrees."
            )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"

    @property
    def latitude_rad(self) -> float:
        return float(np.radians(self.latitude))

    @property
    def longitude_rad(self) -> float:
        return float(np.radians(self.longitude))

    def to_cartesian(self) -> "CartesianPoint":
        """Convert to ECEF coordinates on the same ellipsoid."""
        X, Y, Z = geodetic_to_ecef(self.latitude_rad, self.longitude_rad, self.height, self.ellipsoid)
        return CartesianPoint(X, Y, Z, self.ellipsoid)

    def transform_datum(self, parameters: "HelmertParameters") -> "GeographicPoint":
        """Re-express this point on another datum via a Helmert transform.

        See `geospatial.datum.shift_datum`.
        """
        from geospatial.datum import shift_datum
        return shift_datum(self, parameters)

    def to_grid(self, parameters: "TransverseMercatorParameters") -> "ProjectedPoint":
        """Project onto a Transverse Mercator grid.

        See `geospatial.projections.project`.
        """
        from geospatial.projections import project
        return project(self, parameters)


@dataclass(frozen=True)
class CartesianPoint:
    """An Earth-Centered Earth-Fixed Cartesian coordinate.

    Attributes
    ----------
    x, y, z : float
        ECEF coordinates in METERS.
    ellipsoid : Ellipsoid
        Reference ellipsoid of the datum the coordinates belong to.
    """
    x: float
    y: float
    z: float
    ellipsoid: Ellipsoid = WGS84

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def to_geographic(self, config: Optional[ConvergenceConfig] = None) -> GeographicPoint:
        """Convert to latitude, longitude and height on the same ellipsoid.

        The height is rounded to the nearest whole metre.

        Raises
        ------
        NonConvergenceError
            If the latitude iteration does not converge.
        """
        lat_rad, lon_rad, height_m = ecef_to_geodetic(self.x, self.y, self.z, self.ellipsoid, config)
        return GeographicPoint(
            latitude=float(np.clip(np.degrees(lat_rad), -90.0, 90.0)),
            longitude=float(np.degrees(lon_rad)),
            height=round_half_away(height_m),
            ellipsoid=self.ellipsoid
        )

    def transform_datum(
        self,
        to_ellipsoid: Ellipsoid,
        tx: float,
        ty: float,
        tz: float,
        scale: float,
        rx: float,
        ry: float,
        rz: float
    ) -> "CartesianPoint":
        """Apply a linearised 7-parameter Helmert transform.

        See `geospatial.datum.helmert_transform`.
        """
        from geospatial.datum import helmert_transform
        return helmert_transform(self, to_ellipsoid, tx, ty, tz, scale, rx, ry, rz)

    def apply_helmert(self, parameters: "HelmertParameters") -> "CartesianPoint":
        """Apply a `HelmertParameters` set to this point."""
        return parameters.apply(self)
