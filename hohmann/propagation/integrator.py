"""
Adaptive Dormand-Prince Integrator

This module implements an explicit embedded Runge-Kutta 5(4) integrator with
local error control (Dormand & Prince, 1980). The 5th-order solution is
propagated; the embedded 4th-order solution only provides the error estimate.

Each call to ``integrate_adaptive`` owns a fresh ``StepSizeController``, so
independent integrations never share step-size history.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

from ..utils.constants import (DEFAULT_ABSOLUTE_TOLERANCE,
                               DEFAULT_RELATIVE_TOLERANCE,
                               MAX_CONSECUTIVE_REJECTIONS, MAX_STEP_GROWTH,
                               MIN_STEP_SHRINK, STEP_SAFETY_FACTOR)
from ..utils.exceptions import InvalidInputError, StepConvergenceError

# f(t, y) -> dy/dt
DerivativeFunction = Callable[[float, np.ndarray], np.ndarray]
# observer(state, t), called once per accepted step
Observer = Callable[[np.ndarray, float], None]

# Dormand-Prince 5(4) tableau
_C = np.array([0.0, 1/5, 3/10, 4/5, 8/9, 1.0, 1.0])
_A = (
    (),
    (1/5,),
    (3/40, 9/40),
    (44/45, -56/15, 32/9),
    (19372/6561, -25360/2187, 64448/6561, -212/729),
    (9017/3168, -355/33, 46732/5247, 49/176, -5103/18656),
    (35/384, 0.0, 500/1113, 125/192, -2187/6784, 11/84),
)
_B5 = np.array([35/384, 0.0, 500/1113, 125/192, -2187/6784, 11/84, 0.0])
_B4 = np.array([5179/57600, 0.0, 7571/16695, 393/640, -92097/339200, 187/2100, 1/40])
_E = _B5 - _B4

# Exponent of the step-size update: 1 / (embedded order + 1)
_CONTROLLER_EXPONENT = 1.0 / 5.0


class IntegrationPhase(Enum):
    """States of the adaptive integration loop."""
    IDLE = "idle"
    STEP_ATTEMPT = "step_attempt"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class IntegratorSettings:
    """
    Configuration of the adaptive integrator.

    Attributes:
        absolute_tolerance: Absolute local error tolerance [state units]
        relative_tolerance: Relative local error tolerance [-]
        safety_factor: Multiplier applied to the optimal step estimate
        max_step_growth: Largest step growth factor after an accepted step
        min_step_shrink: Smallest step shrink factor after a rejected step
        max_consecutive_rejections: Rejections allowed before failing
        max_step: Optional upper bound on the step size [s]
    """
    absolute_tolerance: float = DEFAULT_ABSOLUTE_TOLERANCE
    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE
    safety_factor: float = STEP_SAFETY_FACTOR
    max_step_growth: float = MAX_STEP_GROWTH
    min_step_shrink: float = MIN_STEP_SHRINK
    max_consecutive_rejections: int = MAX_CONSECUTIVE_REJECTIONS
    max_step: Optional[float] = None

    def __post_init__(self):
        """Validate settings."""
        if not (np.isfinite(self.absolute_tolerance) and np.isfinite(self.relative_tolerance)):
            raise InvalidInputError("Tolerances must be finite")
        if self.absolute_tolerance < 0 or self.relative_tolerance < 0:
            raise InvalidInputError("Tolerances must be non-negative")
        if self.absolute_tolerance == 0 and self.relative_tolerance == 0:
            raise InvalidInputError("At least one tolerance must be positive")
        if not (0 < self.safety_factor <= 1):
            raise InvalidInputError("Safety factor must be in range (0, 1]")
        if self.max_step_growth <= 1:
            raise InvalidInputError("Maximum step growth must be greater than 1")
        if not (0 < self.min_step_shrink < 1):
            raise InvalidInputError("Minimum step shrink must be in range (0, 1)")
        if self.max_consecutive_rejections < 1:
            raise InvalidInputError("At least one rejection must be allowed")
        if self.max_step is not None and not (np.isfinite(self.max_step) and self.max_step > 0):
            raise InvalidInputError("Maximum step must be positive")


@dataclass
class IntegrationStatistics:
    """Bookkeeping of a completed integration run."""
    accepted_steps: int = 0
    rejected_steps: int = 0
    function_evaluations: int = 0
    final_time: float = 0.0
    final_state: Optional[np.ndarray] = None
    last_step_size: float = 0.0
    phase: IntegrationPhase = IntegrationPhase.IDLE


class DormandPrinceStepper:
    """Single-step Dormand-Prince 5(4) evaluation with error estimate."""

    stages = 7

    def __init__(self, absolute_tolerance: float, relative_tolerance: float):
        self.absolute_tolerance = absolute_tolerance
        self.relative_tolerance = relative_tolerance

    def attempt_step(self, f: DerivativeFunction, t: float, y: np.ndarray,
                     dt: float) -> Tuple[np.ndarray, float]:
        """
        Attempt one step of size dt from (t, y).

        Args:
            f: Derivative function f(t, y)
            t: Current time [s]
            y: Current state
            dt: Step size [s]

        Returns:
            Tuple of (5th-order state at t + dt, error ratio). The step meets
            the tolerance when the error ratio is at most 1.
        """
        k = np.empty((self.stages, y.size))
        k[0] = f(t, y)
        for i in range(1, self.stages):
            y_stage = y + dt * np.dot(_A[i], k[:i])
            k[i] = f(t + _C[i] * dt, y_stage)

        y_new = y + dt * np.dot(_B5, k)
        error = dt * np.dot(_E, k)

        scale = (self.absolute_tolerance +
                 self.relative_tolerance * np.maximum(np.abs(y), np.abs(y_new)))
        error_ratio = float(np.max(np.abs(error) / scale))
        if not np.isfinite(error_ratio) or not np.all(np.isfinite(y_new)):
            error_ratio = np.inf

        return y_new, error_ratio


class StepSizeController:
    """
    Step-size update rule and rejection bookkeeping.

    The next step is dt · clamp(safety · (1/err)^(1/5), min_shrink, max_growth),
    applied after both accepted and rejected attempts.
    """

    def __init__(self, settings: IntegratorSettings):
        self.settings = settings
        self.consecutive_rejections = 0

    def scale_factor(self, error_ratio: float) -> float:
        """Multiplicative step change for a given error ratio."""
        if error_ratio == 0.0:
            return self.settings.max_step_growth
        if not np.isfinite(error_ratio):
            return self.settings.min_step_shrink

        factor = self.settings.safety_factor * (1.0 / error_ratio) ** _CONTROLLER_EXPONENT
        return min(self.settings.max_step_growth,
                   max(self.settings.min_step_shrink, factor))

    def accept(self, dt: float, error_ratio: float) -> float:
        """Register an accepted step and return the next step size."""
        self.consecutive_rejections = 0
        return self.limit(dt * self.scale_factor(error_ratio))

    def reject(self, dt: float, error_ratio: float) -> float:
        """Register a rejected step and return the retry step size."""
        self.consecutive_rejections += 1
        return self.limit(dt * self.scale_factor(error_ratio))

    @property
    def exhausted(self) -> bool:
        """True when the rejection budget for the current step is spent."""
        return self.consecutive_rejections >= self.settings.max_consecutive_rejections

    def limit(self, dt: float) -> float:
        """Apply the optional maximum step bound."""
        if self.settings.max_step is not None:
            return min(dt, self.settings.max_step)
        return dt


def _read_only(y: np.ndarray) -> np.ndarray:
    view = y.view()
    view.flags.writeable = False
    return view


def integrate_adaptive(f: DerivativeFunction,
                       y0: np.ndarray,
                       t0: float,
                       t_end: float,
                       dt0: float,
                       observer: Optional[Observer] = None,
                       settings: Optional[IntegratorSettings] = None) -> IntegrationStatistics:
    """
    Integrate dy/dt = f(t, y) from t0 to t_end with adaptive step control.

    The observer sees the initial state at t0, every accepted state in
    strictly increasing time order, and the final state at exactly t_end.
    Rejected attempts are never observed.

    Args:
        f: Derivative function f(t, y)
        y0: Initial state
        t0: Initial time [s]
        t_end: Final time [s], not earlier than t0
        dt0: Initial step size guess [s]
        observer: Optional callable observer(state, t)
        settings: Integrator settings (defaults if omitted)

    Returns:
        Integration statistics including the final state

    Raises:
        InvalidInputError: If dt0 <= 0 or t_end < t0
        StepConvergenceError: If too many consecutive steps are rejected
    """
    if settings is None:
        settings = IntegratorSettings()
    if not np.isfinite(dt0) or dt0 <= 0:
        raise InvalidInputError("Initial step size must be positive")
    if not (np.isfinite(t0) and np.isfinite(t_end)) or t_end < t0:
        raise InvalidInputError("Final time must not precede initial time")

    stepper = DormandPrinceStepper(settings.absolute_tolerance, settings.relative_tolerance)
    controller = StepSizeController(settings)
    stats = IntegrationStatistics()

    def counted_f(t: float, y: np.ndarray) -> np.ndarray:
        stats.function_evaluations += 1
        return f(t, y)

    y = np.array(y0, dtype=float)
    t = float(t0)
    dt = controller.limit(float(dt0))
    time_tolerance = 1e-12 * max(1.0, abs(t_end))

    if observer is not None:
        observer(_read_only(y.copy()), t)

    while t_end - t > time_tolerance:
        stats.phase = IntegrationPhase.STEP_ATTEMPT

        # Do not overshoot the final time
        last_step = t + dt >= t_end - time_tolerance
        step = t_end - t if last_step else dt

        y_new, error_ratio = stepper.attempt_step(counted_f, t, y, step)

        if error_ratio <= 1.0:
            stats.phase = IntegrationPhase.ACCEPTED
            stats.accepted_steps += 1
            stats.last_step_size = step
            t = t_end if last_step else t + step
            y = y_new
            if observer is not None:
                observer(_read_only(y.copy()), t)
            dt = controller.accept(step, error_ratio)
        else:
            stats.phase = IntegrationPhase.REJECTED
            stats.rejected_steps += 1
            dt = controller.reject(step, error_ratio)
            if controller.exhausted:
                stats.phase = IntegrationPhase.FAILED
                raise StepConvergenceError(t, step, error_ratio,
                                           controller.consecutive_rejections)

    stats.phase = IntegrationPhase.COMPLETE
    stats.final_time = t
    stats.final_state = y
    return stats
