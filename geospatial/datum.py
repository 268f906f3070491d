"""
Datum Transformation by Helmert Similarity Transform.

This module re-expresses Cartesian coordinates from one geodetic datum on
another using the 7-parameter Helmert transform: three translations, one
differential scale and three rotations about the Cartesian axes.

The transform is the small-angle, first-order form published by the
Ordnance Survey:

    x' = tx + x(1+s) - y·rz + z·ry
    y' = ty + x·rz + y(1+s) - z·rx
    z' = tz - x·ry + y·rx + z(1+s)

Known Approximation
-------------------
Rotations enter linearly rather than through an exact rotation matrix.
Consequently the reverse transform obtained by negating all seven
parameters (`HelmertParameters.inverse`) is only correct to first order;
round-tripping a point leaves residuals of a few millimetres for the
published parameter sets. The approximation is kept so that outputs
match published test vectors.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain, 6.6.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

import pint

from common.constants import GeodeticConstants
from common.exceptions import EllipsoidMismatchError
from common.logging_config import get_logger
from common.units import as_magnitude, arcseconds_to_radians, ppm_to_ratio
from geospatial.coordinate_models import CartesianPoint, GeographicPoint
from geospatial.ellipsoid import Ellipsoid, AIRY_1830, WGS84

logger = get_logger(__name__)

Length = Union[float, pint.Quantity]
Angle = Union[float, pint.Quantity]


def helmert_transform(
    point: CartesianPoint,
    to_ellipsoid: Ellipsoid,
    tx: float,
    ty: float,
    tz: float,
    scale: float,
    rx: float,
    ry: float,
    rz: float
) -> CartesianPoint:
    """Transform the datum of a Cartesian point.

    Parameters
    ----------
    point : CartesianPoint
        Point to transform. It is not modified.
    to_ellipsoid : Ellipsoid
        Ellipsoid of the target datum.
    tx, ty, tz : float
        Translations in meters.
    scale : float
        Differential scale (dimensionless, applied as 1 + scale).
    rx, ry, rz : float
        Rotations about the x, y and z axes in radians.

    Returns
    -------
    CartesianPoint
        New point on `to_ellipsoid`.
    """
    x, y, z = point.x, point.y, point.z

    x_new = tx + (x * (1 + scale)) - (y * rz) + (z * ry)
    y_new = ty + (x * rz) + (y * (1 + scale)) - (z * rx)
    z_new = tz - (x * ry) + (y * rx) + (z * (1 + scale))

    return CartesianPoint(x_new, y_new, z_new, to_ellipsoid)


@dataclass(frozen=True)
class HelmertParameters:
    """A 7-parameter Helmert transform between two datums.

    Attributes
    ----------
    tx, ty, tz : float
        Translations in METERS.
    scale : float
        Differential scale, dimensionless.
    rx, ry, rz : float
        Rotations in RADIANS.
    target_ellipsoid : Ellipsoid
        Ellipsoid of the datum the transform produces.
    source_ellipsoid : Ellipsoid, optional
        Ellipsoid of the datum the transform accepts. When set, applying
        the transform to a point on a different ellipsoid is an error.
    name : str
        Identifier for the transform.
    """
    tx: float
    ty: float
    tz: float
    scale: float
    rx: float
    ry: float
    rz: float
    target_ellipsoid: Ellipsoid
    source_ellipsoid: Optional[Ellipsoid] = None
    name: str = ""

    @classmethod
    def from_surveying_units(
        cls,
        tx: Length,
        ty: Length,
        tz: Length,
        scale_ppm: Union[float, pint.Quantity],
        rx_arcsec: Angle,
        ry_arcsec: Angle,
        rz_arcsec: Angle,
        target_ellipsoid: Ellipsoid,
        source_ellipsoid: Optional[Ellipsoid] = None,
        name: str = ""
    ) -> "HelmertParameters":
        """Build parameters from the units they are usually published in.

        Bare numbers are read as meters, parts-per-million and arc-seconds;
        `pint` quantities are converted from whatever unit they carry.

        Examples
        --------
        >>> from common.units import Q_
        >>> params = HelmertParameters.from_surveying_units(
        ...     -446.448, 125.157, -542.060, 20.4894,
        ...     -0.1502, -0.2470, Q_(-0.8421, 'arcsecond'),
        ...     target_ellipsoid=AIRY_1830
        ... )
        """
        return cls(
            tx=as_magnitude(tx, "meter"),
            ty=as_magnitude(ty, "meter"),
            tz=as_magnitude(tz, "meter"),
            scale=ppm_to_ratio(scale_ppm),
            rx=arcseconds_to_radians(rx_arcsec),
            ry=arcseconds_to_radians(ry_arcsec),
            rz=arcseconds_to_radians(rz_arcsec),
            target_ellipsoid=target_ellipsoid,
            source_ellipsoid=source_ellipsoid,
            name=name
        )

    def apply(self, point: CartesianPoint) -> CartesianPoint:
        """Transform a Cartesian point onto the target datum.

        Raises
        ------
        EllipsoidMismatchError
            If `source_ellipsoid` is set and the point is on another ellipsoid.
        """
        if self.source_ellipsoid is not None and point.ellipsoid != self.source_ellipsoid:
            raise EllipsoidMismatchError(self.source_ellipsoid, point.ellipsoid)
        return helmert_transform(
            point, self.target_ellipsoid,
            self.tx, self.ty, self.tz, self.scale, self.rx, self.ry, self.rz
        )

    def inverse(self) -> "HelmertParameters":
        """Approximate reverse transform: all seven parameters negated.

        Valid to first order only. Requires `source_ellipsoid` so the
        reverse transform knows which ellipsoid it produces.
        """
        if self.source_ellipsoid is None:
            raise ValueError("Cannot invert a Helmert transform without a source ellipsoid")
        return replace(
            self,
            tx=-self.tx, ty=-self.ty, tz=-self.tz,
            scale=-self.scale,
            rx=-self.rx, ry=-self.ry, rz=-self.rz,
            target_ellipsoid=self.source_ellipsoid,
            source_ellipsoid=self.target_ellipsoid,
            name=f"inverse of {self.name}" if self.name else ""
        )


def shift_datum(point: GeographicPoint, parameters: HelmertParameters) -> GeographicPoint:
    """Re-express a geographic point on another datum.

    The point is converted to Cartesian coordinates on its own ellipsoid,
    transformed with `parameters`, and converted back to geographic
    coordinates on the target ellipsoid. The resulting height is rounded
    to the nearest whole metre.

    Raises
    ------
    EllipsoidMismatchError
        If the parameters name a source ellipsoid the point is not on.
    NonConvergenceError
        If the final Cartesian to geographic conversion does not converge.
    """
    shifted = parameters.apply(point.to_cartesian())
    logger.debug(f"Shifted {point} from {point.ellipsoid} to {parameters.target_ellipsoid}")
    return shifted.to_geographic()


WGS84_TO_OSGB36 = HelmertParameters.from_surveying_units(
    **GeodeticConstants.WGS84_TO_OSGB36,
    target_ellipsoid=AIRY_1830,
    source_ellipsoid=WGS84,
    name="WGS84 to OSGB36"
)

OSGB36_TO_WGS84 = replace(WGS84_TO_OSGB36.inverse(), name="OSGB36 to WGS84")
