"""
Orbital Elements and Coordinate Transformations

This module implements the classical orbital elements representation and the
conversions to and from Cartesian states. It is used to inspect propagated
transfer trajectories (transfer ellipse and final orbit) and to provide an
analytic Keplerian reference for the numerical propagator.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..utils.constants import (EARTH_MU, PI, TOLERANCE_ECCENTRICITY,
                               TOLERANCE_ENERGY, TOLERANCE_NODE, TWO_PI)
from ..utils.exceptions import InvalidInputError
from ..utils.math_utils import (rotation_matrix_313, solve_kepler_equation,
                                wrap_to_2pi)


@dataclass
class OrbitalElements:
    """
    Classical orbital elements representation.

    Attributes:
        a: Semi-major axis [km]
        e: Eccentricity [-]
        i: Inclination [rad]
        omega_cap: Right ascension of ascending node (RAAN) [rad]
        omega: Argument of periapsis [rad]
        f: True anomaly [rad]
        mu: Gravitational parameter [km³/s²]
    """
    a: float
    e: float
    i: float
    omega_cap: float
    omega: float
    f: float
    mu: float = EARTH_MU

    def __post_init__(self):
        """Validate orbital elements after initialization."""
        if self.a <= 0:
            raise InvalidInputError("Semi-major axis must be positive")
        if not (0 <= self.e < 1):
            raise InvalidInputError("Eccentricity must be in range [0, 1)")
        if not (0 <= self.i <= PI):
            raise InvalidInputError("Inclination must be in range [0, π]")

        # Normalize angles
        self.omega_cap = wrap_to_2pi(self.omega_cap)
        self.omega = wrap_to_2pi(self.omega)
        self.f = wrap_to_2pi(self.f)

    @property
    def period(self) -> float:
        """Orbital period [s]."""
        return 2 * PI * np.sqrt(self.a**3 / self.mu)

    @property
    def mean_motion(self) -> float:
        """Mean motion [rad/s]."""
        return np.sqrt(self.mu / self.a**3)

    @property
    def angular_momentum(self) -> float:
        """Specific angular momentum [km²/s]."""
        return np.sqrt(self.mu * self.a * (1 - self.e**2))

    @property
    def energy(self) -> float:
        """Specific orbital energy [km²/s²]."""
        return -self.mu / (2 * self.a)

    @property
    def periapsis_radius(self) -> float:
        """Periapsis radius [km]."""
        return self.a * (1 - self.e)

    @property
    def apoapsis_radius(self) -> float:
        """Apoapsis radius [km]."""
        return self.a * (1 + self.e)

    def radius(self) -> float:
        """Current radius [km]."""
        return self.a * (1 - self.e**2) / (1 + self.e * np.cos(self.f))

    def velocity_magnitude(self) -> float:
        """Current velocity magnitude [km/s]."""
        r = self.radius()
        return np.sqrt(self.mu * (2/r - 1/self.a))

    def eccentric_anomaly(self) -> float:
        """Eccentric anomaly [rad]."""
        cos_E = (self.e + np.cos(self.f)) / (1 + self.e * np.cos(self.f))
        sin_E = np.sqrt(1 - self.e**2) * np.sin(self.f) / (1 + self.e * np.cos(self.f))
        return np.arctan2(sin_E, cos_E)

    def mean_anomaly(self) -> float:
        """Mean anomaly [rad]."""
        E = self.eccentric_anomaly()
        return E - self.e * np.sin(E)


def orbital_elements_to_cartesian(elements: OrbitalElements) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert orbital elements to Cartesian coordinates.

    Args:
        elements: Orbital elements

    Returns:
        Tuple of (position [km], velocity [km/s]) vectors in the inertial frame
    """
    r = elements.radius()
    h = elements.angular_momentum

    # Position in perifocal frame
    r_pqw = np.array([
        r * np.cos(elements.f),
        r * np.sin(elements.f),
        0.0
    ])

    # Velocity in perifocal frame
    v_pqw = np.array([
        -elements.mu / h * np.sin(elements.f),
        elements.mu / h * (elements.e + np.cos(elements.f)),
        0.0
    ])

    # Perifocal to inertial: Rz(Ω) Rx(i) Rz(ω)
    R_pqw_to_eci = rotation_matrix_313(elements.omega, elements.i, elements.omega_cap)

    return R_pqw_to_eci @ r_pqw, R_pqw_to_eci @ v_pqw


def cartesian_to_orbital_elements(r_vec: np.ndarray, v_vec: np.ndarray,
                                  mu: float = EARTH_MU) -> OrbitalElements:
    """
    Convert Cartesian coordinates to orbital elements.

    Args:
        r_vec: Position vector [km]
        v_vec: Velocity vector [km/s]
        mu: Gravitational parameter [km³/s²]

    Returns:
        Orbital elements

    Raises:
        InvalidInputError: If the state is not on a closed (elliptical) orbit
    """
    r = np.linalg.norm(r_vec)
    v = np.linalg.norm(v_vec)

    # Angular momentum vector
    h_vec = np.cross(r_vec, v_vec)
    h = np.linalg.norm(h_vec)

    # Node vector
    k_hat = np.array([0, 0, 1])
    n_vec = np.cross(k_hat, h_vec)
    n = np.linalg.norm(n_vec)

    # Eccentricity vector
    e_vec = ((v**2 - mu/r) * r_vec - np.dot(r_vec, v_vec) * v_vec) / mu
    e = np.linalg.norm(e_vec)

    # Specific energy
    energy = v**2/2 - mu/r
    if energy >= -TOLERANCE_ENERGY:
        raise InvalidInputError("State is not on an elliptical orbit")
    a = -mu / (2 * energy)

    # Inclination
    i = np.arccos(np.clip(h_vec[2] / h, -1, 1))

    # Right ascension of ascending node
    if n > TOLERANCE_NODE:
        omega_cap = np.arccos(np.clip(n_vec[0] / n, -1, 1))
        if n_vec[1] < 0:
            omega_cap = TWO_PI - omega_cap
    else:
        omega_cap = 0.0  # Equatorial orbit

    # Argument of periapsis
    if e > TOLERANCE_ECCENTRICITY:
        if n > TOLERANCE_NODE:
            omega = np.arccos(np.clip(np.dot(n_vec, e_vec) / (n * e), -1, 1))
            if e_vec[2] < 0:
                omega = TWO_PI - omega
        else:
            # Equatorial: longitude of periapsis measured from +X
            omega = wrap_to_2pi(np.sign(h_vec[2]) * np.arctan2(e_vec[1], e_vec[0]))
    else:
        omega = 0.0  # Circular orbit

    # True anomaly
    if e > TOLERANCE_ECCENTRICITY:
        f = np.arccos(np.clip(np.dot(e_vec, r_vec) / (e * r), -1, 1))
        if np.dot(r_vec, v_vec) < 0:
            f = TWO_PI - f
    else:
        # Circular orbit - use argument of latitude
        if n > TOLERANCE_NODE:
            f = np.arccos(np.clip(np.dot(n_vec, r_vec) / (n * r), -1, 1))
            if r_vec[2] < 0:
                f = TWO_PI - f
        else:
            f = wrap_to_2pi(np.arctan2(r_vec[1], r_vec[0]))

    return OrbitalElements(a, e, i, omega_cap, omega, f, mu)


def propagate_orbital_elements_mean_motion(elements: OrbitalElements,
                                           delta_t: float) -> OrbitalElements:
    """
    Propagate orbital elements using mean motion (Keplerian motion).

    Args:
        elements: Initial orbital elements
        delta_t: Time step [s]

    Returns:
        Propagated orbital elements
    """
    # Propagate mean anomaly
    M = wrap_to_2pi(elements.mean_anomaly() + elements.mean_motion * delta_t)

    # Solve for new eccentric anomaly
    E = solve_kepler_equation(M, elements.e)

    # New true anomaly
    cos_f = (np.cos(E) - elements.e) / (1 - elements.e * np.cos(E))
    sin_f = np.sqrt(1 - elements.e**2) * np.sin(E) / (1 - elements.e * np.cos(E))
    f_new = wrap_to_2pi(np.arctan2(sin_f, cos_f))

    # Only the true anomaly changes in Keplerian motion
    return OrbitalElements(
        elements.a, elements.e, elements.i,
        elements.omega_cap, elements.omega, f_new, elements.mu
    )
