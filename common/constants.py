"""
Geodetic Constants for Coordinate Transformation.

This module provides the defining constants of the reference ellipsoids,
the convergence tolerances of the iterative algorithms, and published
datum transformation parameters. Every constant carries its unit and
source so values are traceable to an authoritative publication.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- GRS80 parameters: Moritz, H. (2000). Geodetic Reference System 1980.
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of geodetic constants used throughout the system.

    Reference Ellipsoids
    --------------------
    Semi-major and semi-minor axes of the ellipsoids for which named
    instances exist in `geospatial.ellipsoid`. Axes are the defining
    values as published; eccentricities are always derived.

    Convergence
    -----------
    Tolerances of the two fixed-point loops (Cartesian to geographic
    latitude, and footpoint latitude of the inverse projection).

    Datum Transformation
    --------------------
    Published 7-parameter Helmert sets, stored in surveying units
    (metres, parts-per-million, arc-seconds).
    """

    # =========================================================================
    # WGS84 Ellipsoid
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.314245,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    # =========================================================================
    # GRS80 Ellipsoid
    # =========================================================================

    GRS80_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,
        unit="m",
        source="GRS80, Moritz (2000)",
        description="Semi-major axis of GRS80 ellipsoid"
    )

    GRS80_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.314140,
        uncertainty=0.0001,
        unit="m",
        source="GRS80, Moritz (2000)",
        description="Semi-minor axis of GRS80 ellipsoid"
    )

    # =========================================================================
    # Historical Ellipsoids
    # =========================================================================

    AIRY_1830_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_563.396,
        uncertainty=0.0,
        unit="m",
        source="OS, A Guide to Coordinate Systems in Great Britain",
        description="Semi-major axis of Airy 1830 ellipsoid (OSGB36)"
    )

    AIRY_1830_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_256.909,
        uncertainty=0.0,
        unit="m",
        source="OS, A Guide to Coordinate Systems in Great Britain",
        description="Semi-minor axis of Airy 1830 ellipsoid (OSGB36)"
    )

    AIRY_MODIFIED_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_340.189,
        uncertainty=0.0,
        unit="m",
        source="OSi/OSNI, Irish Grid",
        description="Semi-major axis of Airy Modified ellipsoid (Ireland 1965)"
    )

    AIRY_MODIFIED_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_034.447,
        uncertainty=0.0,
        unit="m",
        source="OSi/OSNI, Irish Grid",
        description="Semi-minor axis of Airy Modified ellipsoid (Ireland 1965)"
    )

    BESSEL_1841_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_397.155,
        uncertainty=0.0,
        unit="m",
        source="Bessel (1841)",
        description="Semi-major axis of Bessel 1841 ellipsoid"
    )

    BESSEL_1841_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_078.963,
        uncertainty=0.0,
        unit="m",
        source="Bessel (1841)",
        description="Semi-minor axis of Bessel 1841 ellipsoid"
    )

    CLARKE_1866_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_206.4,
        uncertainty=0.0,
        unit="m",
        source="Clarke (1866)",
        description="Semi-major axis of Clarke 1866 ellipsoid (NAD27)"
    )

    CLARKE_1866_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_583.8,
        uncertainty=0.0,
        unit="m",
        source="Clarke (1866)",
        description="Semi-minor axis of Clarke 1866 ellipsoid (NAD27)"
    )

    INTERNATIONAL_1924_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_388.0,
        uncertainty=0.0,
        unit="m",
        source="Hayford (1910), adopted by IUGG 1924",
        description="Semi-major axis of International 1924 ellipsoid (ED50)"
    )

    INTERNATIONAL_1924_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_911.9,
        uncertainty=0.1,
        unit="m",
        source="Hayford (1910), adopted by IUGG 1924",
        description="Semi-minor axis of International 1924 ellipsoid (ED50)"
    )

    # =========================================================================
    # Convergence Tolerances
    # =========================================================================

    LATITUDE_TOLERANCE: Final[Constant] = Constant(
        value=1e-5,
        uncertainty=0.0,
        unit="rad",
        source="OS, A Guide to Coordinate Systems in Great Britain, B2",
        description="Change in latitude below which Cartesian to geographic iteration stops"
    )

    MERIDIAN_ARC_TOLERANCE: Final[Constant] = Constant(
        value=1e-5,
        uncertainty=0.0,
        unit="m",
        source="OS, A Guide to Coordinate Systems in Great Britain, C6",
        description="Northing residual below which the footpoint latitude iteration stops"
    )

    POLAR_AXIS_DISTANCE: Final[Constant] = Constant(
        value=1e-10,
        uncertainty=0.0,
        unit="m",
        source="Numerical guard",
        description="Distance from the rotation axis treated as lying on it"
    )

    NEAR_POLE_COSINE: Final[Constant] = Constant(
        value=1e-3,
        uncertainty=0.0,
        unit="dimensionless",
        source="Numerical guard",
        description="Cosine of latitude below which height is taken from Z instead of p"
    )

    # =========================================================================
    # Helmert Transformation Parameters
    # Reference: OS Guide, Table 6 (WGS84 / ETRS89 to OSGB36)
    # =========================================================================

    WGS84_TO_OSGB36: Final[Mapping[str, float]] = MappingProxyType({
        "tx": -446.448,       # m
        "ty": 125.157,        # m
        "tz": -542.060,       # m
        "scale_ppm": 20.4894,
        "rx_arcsec": -0.1502,
        "ry_arcsec": -0.2470,
        "rz_arcsec": -0.8421,
    })
