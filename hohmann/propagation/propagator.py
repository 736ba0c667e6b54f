"""
Trajectory Propagator

This module propagates a Cartesian spacecraft state under an injected
acceleration law with the adaptive Dormand-Prince integrator, forwarding every
accepted sample to a trajectory recorder.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..dynamics.two_body import AccelerationLaw, two_body_derivative
from ..utils.constants import DEFAULT_INITIAL_STEP
from ..utils.exceptions import InvalidInputError
from .recorders import TimeSample, TrajectoryRecorder
from .integrator import IntegrationStatistics, IntegratorSettings, integrate_adaptive


@dataclass
class PropagationResult:
    """
    Outcome of a propagation run.

    Attributes:
        final: Last accepted sample, at the requested final time
        statistics: Integrator bookkeeping
    """
    final: TimeSample
    statistics: IntegrationStatistics

    @property
    def final_time(self) -> float:
        return self.final.time

    @property
    def final_state(self) -> np.ndarray:
        return self.final.state


class TrajectoryPropagator:
    """Adaptive-step propagator for 6-element translational states."""

    def __init__(self, acceleration_law: AccelerationLaw,
                 settings: Optional[IntegratorSettings] = None):
        """
        Initialize the propagator.

        Args:
            acceleration_law: Callable mapping position [km] to acceleration [km/s²]
            settings: Integrator settings (defaults if omitted)
        """
        if not callable(acceleration_law):
            raise InvalidInputError("Acceleration law must be callable")

        self.acceleration_law = acceleration_law
        self.settings = settings if settings is not None else IntegratorSettings()

    def derivative(self, t: float, state: np.ndarray) -> np.ndarray:
        """Equations of motion; time-invariant for the laws used here."""
        return two_body_derivative(state, self.acceleration_law)

    def propagate(self,
                  initial_state: np.ndarray,
                  t0: float,
                  t_end: float,
                  dt0: float = DEFAULT_INITIAL_STEP,
                  recorder: Optional[TrajectoryRecorder] = None) -> PropagationResult:
        """
        Propagate a state from t0 to t_end.

        Args:
            initial_state: State vector [x, y, z, vx, vy, vz] [km, km/s]
            t0: Initial time [s]
            t_end: Final time [s]
            dt0: Initial step size guess [s]
            recorder: Optional sink receiving every accepted sample

        Returns:
            Propagation result with the final sample and integrator statistics

        Raises:
            InvalidInputError: If the state is not a finite 6-vector or the
                time span / step is invalid
            SingularityError: If the trajectory reaches the central singularity
            StepConvergenceError: If the step size controller fails
        """
        y0 = np.asarray(initial_state, dtype=float)
        if y0.shape != (6,):
            raise InvalidInputError("Initial state must be a 6-element vector")
        if not np.all(np.isfinite(y0)):
            raise InvalidInputError("Initial state must be finite")

        observer = None
        if recorder is not None:
            def observer(state: np.ndarray, t: float) -> None:
                recorder.record(t, state)

        stats = integrate_adaptive(self.derivative, y0, t0, t_end, dt0,
                                   observer=observer, settings=self.settings)

        return PropagationResult(
            final=TimeSample(stats.final_time, stats.final_state.copy()),
            statistics=stats
        )
