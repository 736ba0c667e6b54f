"""
Hohmann Transfer Simulator

Closed-form Hohmann transfer calculation and adaptive Dormand-Prince
propagation of the transfer trajectory under two-body gravity.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

__version__ = "1.0.0"
__author__ = "Arthur Allex Feliphe Barbosa Moreno"
__email__ = "arthur.moreno@ime.eb.br"

from .dynamics.transfer import HohmannTransfer, compute_hohmann_impulses
from .dynamics.two_body import EARTH, CentralBody, TwoBodyGravity
from .propagation.integrator import IntegratorSettings, integrate_adaptive
from .propagation.propagator import TrajectoryPropagator
from .utils.constants import *
from .utils.exceptions import (HohmannError, InvalidInputError,
                               SingularityError, StepConvergenceError)
