"""
Geospatial Module for Geodetic Coordinate Transformation.

This module provides:
- Reference ellipsoids and radii of curvature
- Geographic and ECEF Cartesian coordinates and their conversion
- Helmert datum transformation
- Transverse Mercator grid projections
- Planar and geodesic distances
"""

from geospatial.ellipsoid import (
    Ellipsoid,
    WGS84,
    GRS80,
    AIRY_1830,
    AIRY_MODIFIED,
    BESSEL_1841,
    CLARKE_1866,
    INTERNATIONAL_1924,
    named_ellipsoid,
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)

from geospatial.coordinate_models import (
    GeographicPoint,
    CartesianPoint,
    geodetic_to_ecef,
    ecef_to_geodetic,
    geodetic_to_ecef_batch,
)

from geospatial.datum import (
    HelmertParameters,
    helmert_transform,
    shift_datum,
    WGS84_TO_OSGB36,
    OSGB36_TO_WGS84,
)

from geospatial.projections import (
    TransverseMercatorParameters,
    ProjectedPoint,
    BRITISH_NATIONAL_GRID,
    IRISH_NATIONAL_GRID,
    IRISH_TRANSVERSE_MERCATOR,
    utm_zone,
    meridional_arc,
    geographic_to_grid,
    grid_to_geographic,
    project,
)

from geospatial.distance_calculations import (
    planar_distance,
    geodesic_distance,
)

__all__ = [
    # Ellipsoids
    "Ellipsoid",
    "WGS84",
    "GRS80",
    "AIRY_1830",
    "AIRY_MODIFIED",
    "BESSEL_1841",
    "CLARKE_1866",
    "INTERNATIONAL_1924",
    "named_ellipsoid",
    "radius_of_curvature_meridian",
    "radius_of_curvature_prime_vertical",
    # Coordinate models
    "GeographicPoint",
    "CartesianPoint",
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "geodetic_to_ecef_batch",
    # Datum transformation
    "HelmertParameters",
    "helmert_transform",
    "shift_datum",
    "WGS84_TO_OSGB36",
    "OSGB36_TO_WGS84",
    # Projections
    "TransverseMercatorParameters",
    "ProjectedPoint",
    "BRITISH_NATIONAL_GRID",
    "IRISH_NATIONAL_GRID",
    "IRISH_TRANSVERSE_MERCATOR",
    "utm_zone",
    "meridional_arc",
    "geographic_to_grid",
    "grid_to_geographic",
    "project",
    # Distance calculations
    "planar_distance",
    "geodesic_distance",
]
