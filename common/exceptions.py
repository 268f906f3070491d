"""
Error Taxonomy for Geodetic Transformations.

All failures are raised synchronously by the call that detects them.
Each error also derives from the builtin exception a caller would
naturally catch (`ValueError` for bad inputs, `RuntimeError` for
algorithmic failure).
"""

from typing import Optional


class GeodeticError(Exception):
    """Base class for all errors raised by the transformation engine."""


class InvalidEllipsoidParametersError(GeodeticError, ValueError):
    """Ellipsoid axes violate 0 < minor_axis <= major_axis."""


class EllipsoidMismatchError(GeodeticError, ValueError):
    """Two values that must share a reference ellipsoid do not.

    Parameters
    ----------
    expected : object
        The ellipsoid required by the operation.
    actual : object
        The ellipsoid the offending value carries.
    """

    def __init__(self, expected, actual, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or
            f"Source and destination co-ordinates are not using the same ellipsoid "
            f"({expected!r} != {actual!r})"
        )


class NonConvergenceError(GeodeticError, RuntimeError):
    """An iterative solution did not reach its tolerance.

    Attributes
    ----------
    algorithm : str
        Name of the loop that failed.
    iterations : int
        Number of iterations performed.
    residual : float
        Last residual, in the loop's own unit.
    tolerance : float
        The tolerance that was not reached.
    """

    def __init__(self, algorithm: str, iterations: int, residual: float, tolerance: float):
        self.algorithm = algorithm
        self.iterations = iterations
        self.residual = residual
        self.tolerance = tolerance
        super().__init__(
            f"{algorithm} did not converge after {iterations} iterations "
            f"(residual={residual:.3e}, tolerance={tolerance:.3e})"
        )
