"""
Common utilities and infrastructure for the geodetic transformation engine.

This package provides foundational components used across all modules:
- Geodetic constants with provenance
- Unit registry for surveying units
- Error taxonomy
- Iteration configuration
- Logging
"""

from common.constants import Constant, GeodeticConstants
from common.units import ureg, Q_, as_magnitude, arcseconds_to_radians, ppm_to_ratio
from common.exceptions import (
    GeodeticError,
    EllipsoidMismatchError,
    NonConvergenceError,
    InvalidEllipsoidParametersError,
)
from common.config import ConvergenceConfig, CARTESIAN_CONVERGENCE, MERIDIAN_ARC_CONVERGENCE
from common.logging_config import get_logger

__all__ = [
    "Constant",
    "GeodeticConstants",
    "ureg",
    "Q_",
    "as_magnitude",
    "arcseconds_to_radians",
    "ppm_to_ratio",
    "GeodeticError",
    "EllipsoidMismatchError",
    "NonConvergenceError",
    "InvalidEllipsoidParametersError",
    "ConvergenceConfig",
    "CARTESIAN_CONVERGENCE",
    "MERIDIAN_ARC_CONVERGENCE",
    "get_logger",
]
