"""
Mathematical Utilities for Orbital Mechanics

This module provides the angle, rotation and orbital-invariant helpers used
by the transfer calculator, the orbital element conversions and the
propagation diagnostics.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np
from .constants import PI, TWO_PI


def wrap_to_2pi(angle: float) -> float:
    """
    Wrap angle to [0, 2π] range.

    Args:
        angle: Input angle [rad]

    Returns:
        Wrapped angle [rad]
    """
    return angle - TWO_PI * np.floor(angle / TWO_PI)


def rotation_matrix_z(angle: float) -> np.ndarray:
    """
    Create rotation matrix about Z-axis.

    Args:
        angle: Rotation angle [rad]

    Returns:
        Rotation matrix [3x3]
    """
    c = np.cos(angle)
    s = np.sin(angle)

    return np.array([
        [c, -s, 0],
        [s, c, 0],
        [0, 0, 1]
    ])


def rotation_matrix_x(angle: float) -> np.ndarray:
    """
    Create rotation matrix about X-axis.

    Args:
        angle: Rotation angle [rad]

    Returns:
        Rotation matrix [3x3]
    """
    c = np.cos(angle)
    s = np.sin(angle)

    return np.array([
        [1, 0, 0],
        [0, c, -s],
        [0, s, c]
    ])


def rotation_matrix_313(phi: float, theta: float, psi: float) -> np.ndarray:
    """
    Create rotation matrix using 3-1-3 Euler angle sequence.

    Args:
        phi: First rotation about Z-axis [rad]
        theta: Second rotation about X-axis [rad]
        psi: Third rotation about Z-axis [rad]

    Returns:
        Rotation matrix [3x3]
    """
    return rotation_matrix_z(psi) @ rotation_matrix_x(theta) @ rotation_matrix_z(phi)


def rotate_in_plane(vector: np.ndarray, normal: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate a vector about a unit normal by a given angle (Rodrigues formula).

    Args:
        vector: Vector to rotate (3x1)
        normal: Rotation axis, normalised internally (3x1)
        angle: Rotation angle, right-handed about ``normal`` [rad]

    Returns:
        Rotated vector (3x1)
    """
    k = normal / np.linalg.norm(normal)
    c = np.cos(angle)
    s = np.sin(angle)
    return vector * c + np.cross(k, vector) * s + k * np.dot(k, vector) * (1 - c)


def solve_kepler_equation(mean_anomaly: float, eccentricity: float,
                         tolerance: float = 1e-12, max_iterations: int = 100) -> float:
    """
    Solve Kepler's equation for eccentric anomaly using Newton-Raphson method.

    Args:
        mean_anomaly: Mean anomaly [rad]
        eccentricity: Orbital eccentricity
        tolerance: Convergence tolerance
        max_iterations: Maximum number of iterations

    Returns:
        Eccentric anomaly [rad]
    """
    # Initial guess
    E = mean_anomaly if eccentricity < 0.8 else PI

    for _ in range(max_iterations):
        f = E - eccentricity * np.sin(E) - mean_anomaly
        df = 1 - eccentricity * np.cos(E)

        delta_E = -f / df
        E += delta_E

        if abs(delta_E) < tolerance:
            return E

    raise RuntimeError(f"Kepler equation did not converge after {max_iterations} iterations")


def specific_energy(state: np.ndarray, mu: float) -> float:
    """
    Specific mechanical energy v²/2 - mu/|r| of a Cartesian state.

    Args:
        state: State vector [x, y, z, vx, vy, vz] [km, km/s]
        mu: Gravitational parameter [km³/s²]

    Returns:
        Specific energy [km²/s²]
    """
    r = np.linalg.norm(state[0:3])
    v = np.linalg.norm(state[3:6])
    return 0.5 * v**2 - mu / r


def specific_angular_momentum(state: np.ndarray) -> float:
    """Magnitude of r × v for a Cartesian state [km²/s]."""
    return float(np.linalg.norm(np.cross(state[0:3], state[3:6])))
