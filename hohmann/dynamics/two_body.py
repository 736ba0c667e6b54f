"""
Two-Body Dynamics

This module implements the central body model, the point-mass gravity law
and the equations of motion of the unperturbed two-body problem used to
propagate Hohmann transfer trajectories.

The state vector is the 6-element array [x, y, z, vx, vy, vz] in an inertial
frame centred on the body [km, km/s].

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Callable, Union

import numpy as np

from ..utils.constants import EARTH_MU, EARTH_RADIUS, SINGULARITY_RADIUS, TWO_PI
from ..utils.exceptions import InvalidInputError, SingularityError
from ..utils.math_utils import rotate_in_plane

# Any callable mapping a position [km] to an acceleration [km/s²]
AccelerationLaw = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True)
class CentralBody:
    """
    Spherical central body.

    Attributes:
        radius: Mean physical radius [km]
        mu: Gravitational parameter [km³/s²]
        name: Body name
    """
    radius: float
    mu: float
    name: str = "Earth"

    def __post_init__(self):
        """Validate body parameters."""
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise InvalidInputError("Central body radius must be positive")
        if not np.isfinite(self.mu) or self.mu <= 0:
            raise InvalidInputError("Gravitational parameter must be positive")

    def circular_velocity(self, radius: float) -> float:
        """Circular orbit speed at the given radius [km/s]."""
        return np.sqrt(self.mu / radius)

    def orbital_period(self, semi_major_axis: float) -> float:
        """Keplerian period for the given semi-major axis [s]."""
        return TWO_PI * np.sqrt(semi_major_axis**3 / self.mu)


EARTH = CentralBody(radius=EARTH_RADIUS, mu=EARTH_MU, name="Earth")


class TwoBodyGravity:
    """
    Point-mass gravity law a = -mu/|r|³ · r.

    Instances are callable, so they can be passed wherever an acceleration
    law (position -> acceleration) is expected.
    """

    def __init__(self, body: Union[CentralBody, float] = EARTH,
                 singularity_radius: float = SINGULARITY_RADIUS):
        """
        Initialize the gravity law.

        Args:
            body: Central body, or its gravitational parameter [km³/s²]
            singularity_radius: Position magnitude treated as a collision
                with the point mass [km]
        """
        mu = body.mu if isinstance(body, CentralBody) else float(body)
        if not np.isfinite(mu) or mu <= 0:
            raise InvalidInputError("Gravitational parameter must be positive")
        if singularity_radius < 0:
            raise InvalidInputError("Singularity radius must be non-negative")

        self.mu = mu
        self.singularity_radius = float(singularity_radius)

    def acceleration(self, position: np.ndarray) -> np.ndarray:
        """
        Gravitational acceleration at a position.

        Args:
            position: Position vector [km] (3x1)

        Returns:
            Acceleration vector [km/s²] (3x1)
        """
        r = np.linalg.norm(position)
        if not r > self.singularity_radius:
            raise SingularityError(float(r), self.singularity_radius)

        return -self.mu / r**3 * position

    def __call__(self, position: np.ndarray) -> np.ndarray:
        return self.acceleration(position)


def two_body_derivative(state: np.ndarray, acceleration_law: AccelerationLaw) -> np.ndarray:
    """
    Time derivative of a 6-element Cartesian state.

    Args:
        state: State vector [x, y, z, vx, vy, vz] [km, km/s]
        acceleration_law: Callable returning acceleration for a position

    Returns:
        State derivative [vx, vy, vz, ax, ay, az] [km/s, km/s²]
    """
    return np.concatenate([state[3:6], acceleration_law(state[0:3])])


def circular_orbit_state(body: CentralBody, radius: float) -> np.ndarray:
    """
    State on a prograde equatorial circular orbit, positioned on the +X axis.

    Args:
        body: Central body
        radius: Orbit radius [km]

    Returns:
        State vector [radius, 0, 0, 0, v_circ, 0] [km, km/s]
    """
    if radius <= 0:
        raise InvalidInputError("Orbit radius must be positive")

    return np.array([radius, 0.0, 0.0, 0.0, body.circular_velocity(radius), 0.0])


def apply_impulse(state: np.ndarray, delta_v: float,
                  pointing_error: float = 0.0) -> np.ndarray:
    """
    Apply an impulsive burn along the local velocity direction.

    A non-zero pointing error rotates the burn direction inside the orbital
    plane, adding a radial component to the impulse.

    Args:
        state: State vector before the burn [km, km/s]
        delta_v: Signed burn magnitude, positive prograde [km/s]
        pointing_error: In-plane rotation of the burn direction [rad]

    Returns:
        State vector after the burn [km, km/s]
    """
    r_vec = state[0:3]
    v_vec = state[3:6]
    v = np.linalg.norm(v_vec)
    if v == 0:
        raise InvalidInputError("Cannot orient a burn along a zero velocity")

    direction = v_vec / v
    if pointing_error != 0.0:
        direction = rotate_in_plane(direction, np.cross(r_vec, v_vec), pointing_error)

    new_state = np.array(state, dtype=float)
    new_state[3:6] = v_vec + delta_v * direction
    return new_state
