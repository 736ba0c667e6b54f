"""
Simulation Framework Module

This module runs complete Hohmann transfer simulations and provides
plotting tools for the propagated trajectories.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from .mission import (
    MissionConfiguration,
    MissionResult,
    create_default_mission_config,
    format_transfer_summary,
    run_hohmann_mission
)

from .visualization import (
    invariant_drift,
    plot_conservation,
    plot_transfer_trajectory
)

__all__ = [
    # Mission simulation
    'MissionConfiguration',
    'MissionResult',
    'create_default_mission_config',
    'format_transfer_summary',
    'run_hohmann_mission',

    # Visualization
    'invariant_drift',
    'plot_conservation',
    'plot_transfer_trajectory'
]
