"""Numerical propagation of translational states."""

from .integrator import (DormandPrinceStepper, IntegrationPhase,
                         IntegrationStatistics, IntegratorSettings,
                         StepSizeController, integrate_adaptive)
from .propagator import PropagationResult, TrajectoryPropagator

__all__ = [
    'DormandPrinceStepper',
    'IntegrationPhase',
    'IntegrationStatistics',
    'IntegratorSettings',
    'StepSizeController',
    'integrate_adaptive',
    'PropagationResult',
    'TrajectoryPropagator'
]
