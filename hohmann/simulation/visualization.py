"""
Trajectory Visualization Module

This module provides plots for propagated Hohmann transfers: the transfer
arc in the orbital plane together with the central body and the initial and
final circular orbits, and the drift of the two-body invariants along the
trajectory.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from ..dynamics.two_body import CentralBody
from ..propagation.recorders import TrajectoryData
from ..utils.math_utils import specific_angular_momentum, specific_energy


def invariant_drift(trajectory: TrajectoryData, mu: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Relative drift of specific energy and angular momentum from the first sample.

    Args:
        trajectory: Propagated trajectory
        mu: Gravitational parameter [km³/s²]

    Returns:
        Tuple of (energy drift, angular momentum drift), both relative [-]

    Raises:
        ValueError: If the trajectory has no samples
    """
    if len(trajectory) == 0:
        raise ValueError("Cannot compute invariant drift of an empty trajectory")

    states = trajectory.states
    energy = np.array([specific_energy(state, mu) for state in states])
    momentum = np.array([specific_angular_momentum(state) for state in states])

    return (energy - energy[0]) / abs(energy[0]), (momentum - momentum[0]) / momentum[0]


def plot_transfer_trajectory(trajectory: TrajectoryData,
                             body: CentralBody,
                             initial_radius: Optional[float] = None,
                             final_radius: Optional[float] = None,
                             figsize: Tuple[int, int] = (10, 10),
                             save_path: Optional[str] = None) -> plt.Figure:
    """Plot the trajectory in the X-Y plane with the reference circular orbits."""

    fig, ax = plt.subplots(figsize=figsize)
    angles = np.linspace(0.0, 2 * np.pi, 361)

    # Central body
    ax.fill(body.radius * np.cos(angles), body.radius * np.sin(angles),
            color='steelblue', alpha=0.6, label=body.name)

    # Reference orbits
    if initial_radius is not None:
        ax.plot(initial_radius * np.cos(angles), initial_radius * np.sin(angles),
                'g--', linewidth=1, label='Initial orbit')
    if final_radius is not None:
        ax.plot(final_radius * np.cos(angles), final_radius * np.sin(angles),
                'r--', linewidth=1, label='Final orbit')

    # Trajectory
    ax.plot(trajectory.position[:, 0], trajectory.position[:, 1],
            'b-', linewidth=2, label='Trajectory')

    if len(trajectory) > 0:
        ax.scatter([trajectory.position[0, 0]], [trajectory.position[0, 1]],
                   color='green', s=80, marker='o', label='Start', zorder=3)
        ax.scatter([trajectory.position[-1, 0]], [trajectory.position[-1, 1]],
                   color='orange', s=80, marker='s', label='End', zorder=3)

    ax.set_xlabel('X [km]')
    ax.set_ylabel('Y [km]')
    ax.set_title('Hohmann Transfer Trajectory')
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    ax.legend()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Trajectory plot saved to {save_path}")

    return fig


def plot_conservation(trajectory: TrajectoryData, mu: float,
                      figsize: Tuple[int, int] = (12, 6),
                      save_path: Optional[str] = None) -> plt.Figure:
    """Plot relative drift of specific energy and angular momentum versus time."""

    energy_drift, momentum_drift = invariant_drift(trajectory, mu)

    fig, axes = plt.subplots(2, 1, figsize=figsize, sharex=True)

    axes[0].plot(trajectory.time, energy_drift, 'b-', linewidth=1.5)
    axes[0].set_ylabel('Energy drift [-]')
    axes[0].set_title('Two-Body Invariant Drift')
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(trajectory.time, momentum_drift, 'r-', linewidth=1.5)
    axes[1].set_ylabel('Angular momentum drift [-]')
    axes[1].set_xlabel('Time [s]')
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Conservation plot saved to {save_path}")

    return fig
