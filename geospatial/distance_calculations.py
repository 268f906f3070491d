"""
Distance Calculations.

Two distances are provided:

1. Planar distance between two points on a projected grid. Because the
   grid is flat, this is plain Pythagoras on eastings and northings,
   rounded to the nearest whole meter. It is a grid distance: it
   includes the projection's scale factor and is only meaningful for
   points on the same ellipsoid.

2. Geodesic (shortest path) distance between two geographic points,
   solved on their own reference ellipsoid with `pyproj.Geod`, which
   implements Karney's algorithms.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
"""

import numpy as np
from pyproj import Geod

from common.exceptions import EllipsoidMismatchError
from geospatial.coordinate_models import GeographicPoint, round_half_away
from geospatial.projections import ProjectedPoint


def planar_distance(start: ProjectedPoint, end: ProjectedPoint) -> int:
    """Compute the grid distance between two projected points.

    Parameters
    ----------
    start, end : ProjectedPoint
        Points on grids sharing one reference ellipsoid.

    Returns
    -------
    int
        Distance in meters, rounded to the nearest meter.

    Raises
    ------
    EllipsoidMismatchError
        If the points reference different ellipsoids.
    """
    if start.ellipsoid != end.ellipsoid:
        raise EllipsoidMismatchError(start.ellipsoid, end.ellipsoid)

    distance_x = end.x - start.x
    distance_y = end.y - start.y

    return round_half_away(np.sqrt(distance_x**2 + distance_y**2))


def geodesic_distance(start: GeographicPoint, end: GeographicPoint) -> float:
    """Compute the geodesic distance between two geographic points.

    Parameters
    ----------
    start, end : GeographicPoint
        Points on the same reference ellipsoid. Heights are ignored.

    Returns
    -------
    float
        Length of the shortest path on the ellipsoid surface, in meters.

    Raises
    ------
    EllipsoidMismatchError
        If the points reference different ellipsoids.

    Examples
    --------
    >>> london = GeographicPoint(51.5074, -0.1278)
    >>> new_york = GeographicPoint(40.7128, -74.0060)
    >>> round(geodesic_distance(new_york, london) / 1000)
    5585
    """
    if start.ellipsoid != end.ellipsoid:
        raise EllipsoidMismatchError(start.ellipsoid, end.ellipsoid)

    geod = Geod(a=start.ellipsoid.major_axis, b=start.ellipsoid.minor_axis)
    _, _, distance_m = geod.inv(start.longitude, start.latitude, end.longitude, end.latitude)

    return float(distance_m)
