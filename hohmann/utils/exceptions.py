"""
Exceptions for Transfer Calculation and Trajectory Propagation

Every error raised by this package derives from ``HohmannError`` and from the
built-in exception a caller would naturally expect (``ValueError`` for bad
inputs, ``RuntimeError`` for a failed integration), so existing
``except ValueError`` handlers keep working.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""


class HohmannError(Exception):
    """Base class for all errors raised by the package."""


class InvalidInputError(HohmannError, ValueError):
    """Raised when a physical or numerical input is outside its domain."""


class SingularityError(HohmannError, ArithmeticError):
    """
    Raised when the spacecraft position collapses onto the central body.
    
    Attributes:
        radius: Position magnitude that triggered the error [km]
        epsilon: Configured singularity radius [km]
    """
    
    def __init__(self, radius: float, epsilon: float):
        self.radius = radius
        self.epsilon = epsilon
        super().__init__(
            f"Position magnitude {radius:.6g} km is at or below the "
            f"singularity radius {epsilon:.6g} km"
        )


class StepConvergenceError(HohmannError, RuntimeError):
    """
    Raised when the step size controller cannot satisfy the error tolerance.
    
    Attributes:
        time: Integration time at which the step was attempted [s]
        step_size: Last attempted step size [s]
        error_ratio: Last local error norm relative to the tolerance [-]
        rejections: Number of consecutive rejected attempts
    """
    
    def __init__(self, time: float, step_size: float, error_ratio: float,
                 rejections: int):
        self.time = time
        self.step_size = step_size
        self.error_ratio = error_ratio
        self.rejections = rejections
        super().__init__(
            f"Step size control failed at t = {time:.6g} s after {rejections} "
            f"consecutive rejections (last dt = {step_size:.6g} s, "
            f"error ratio = {error_ratio:.6g})"
        )
