"""
Iteration Configuration.

Both iterative algorithms (Cartesian to geographic latitude, footpoint
latitude of the inverse Transverse Mercator projection) take a
`ConvergenceConfig`. The module-level defaults reproduce the published
Ordnance Survey tolerances with an explicit iteration cap.
"""

from dataclasses import dataclass

from common.constants import GeodeticConstants


@dataclass(frozen=True)
class ConvergenceConfig:
    """Configuration for a bounded fixed-point iteration.

    Attributes
    ----------
    max_iterations : int
        Iterations allowed before `NonConvergenceError` is raised.
    tolerance : float
        Stopping threshold, in the unit of the loop's residual
        (radians of latitude, or metres of northing).
    """
    max_iterations: int = 20
    tolerance: float = 1e-5

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if not self.tolerance > 0:
            raise ValueError("tolerance must be positive")


CARTESIAN_CONVERGENCE = ConvergenceConfig(
    max_iterations=20,
    tolerance=GeodeticConstants.LATITUDE_TOLERANCE.value
)

MERIDIAN_ARC_CONVERGENCE = ConvergenceConfig(
    max_iterations=20,
    tolerance=GeodeticConstants.MERIDIAN_ARC_TOLERANCE.value
)
