"""
Hohmann Transfer Calculation

This module computes the two impulsive burns and the period of a coplanar
circular-to-circular Hohmann transfer. The transfer ellipse is tangent to
the initial orbit at one apse and to the final orbit at the other.

Sign convention: a positive burn accelerates the spacecraft along its
velocity (prograde), a negative burn decelerates it (retrograde). Raising an
orbit therefore gives two positive burns and lowering it two negative ones.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from ..utils.constants import TWO_PI
from ..utils.exceptions import InvalidInputError
from .two_body import CentralBody


@dataclass(frozen=True)
class HohmannTransfer:
    """
    Result of a Hohmann transfer calculation.

    Iterating over an instance yields ``(delta_v1, delta_v2, transfer_period)``.

    Attributes:
        delta_v1: First burn, applied on the initial orbit [km/s]
        delta_v2: Second burn, applied on the final orbit [km/s]
        transfer_period: Full Keplerian period of the transfer ellipse [s]
        periapsis_radius: Transfer ellipse periapsis radius [km]
        apoapsis_radius: Transfer ellipse apoapsis radius [km]
        semi_major_axis: Transfer ellipse semi-major axis [km]
        mu: Gravitational parameter used [km³/s²]
    """
    delta_v1: float
    delta_v2: float
    transfer_period: float
    periapsis_radius: float
    apoapsis_radius: float
    semi_major_axis: float
    mu: float

    @property
    def time_of_flight(self) -> float:
        """Time from the first to the second burn: half the period [s]."""
        return 0.5 * self.transfer_period

    @property
    def total_delta_v(self) -> float:
        """Sum of burn magnitudes [km/s]."""
        return abs(self.delta_v1) + abs(self.delta_v2)

    @property
    def eccentricity(self) -> float:
        """Eccentricity of the transfer ellipse [-]."""
        return ((self.apoapsis_radius - self.periapsis_radius) /
                (self.apoapsis_radius + self.periapsis_radius))

    def as_tuple(self) -> Tuple[float, float, float]:
        """Return ``(delta_v1, delta_v2, transfer_period)``."""
        return (self.delta_v1, self.delta_v2, self.transfer_period)

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())


def _require_positive(value: float, name: str) -> float:
    value = float(value)
    if not np.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive finite number, got {value}")
    return value


def compute_hohmann_impulses(mu: float, r1: float, r2: float) -> HohmannTransfer:
    """
    Compute the burns and transfer period of a Hohmann transfer.

    Args:
        mu: Gravitational parameter of the central body [km³/s²]
        r1: Initial circular orbit radius [km]
        r2: Final circular orbit radius [km]

    Returns:
        Transfer result with signed burns and the full transfer period

    Raises:
        InvalidInputError: If mu, r1 or r2 is not strictly positive
    """
    mu = _require_positive(mu, "Gravitational parameter")
    r1 = _require_positive(r1, "Initial radius")
    r2 = _require_positive(r2, "Final radius")

    peri_radius = min(r1, r2)
    apo_radius = max(r1, r2)
    sma = 0.5 * (r1 + r2)
    period = TWO_PI * np.sqrt(sma**3 / mu)

    # Circular speeds
    v_initial = np.sqrt(mu / r1)
    v_final = np.sqrt(mu / r2)

    # Vis-viva on the transfer ellipse
    v_transfer_peri = np.sqrt(2 * mu / peri_radius - mu / sma)
    v_transfer_apo = np.sqrt(2 * mu / apo_radius - mu / sma)

    if r1 < r2:
        delta_v1 = v_transfer_peri - v_initial
        delta_v2 = v_final - v_transfer_apo
    else:
        delta_v1 = v_transfer_apo - v_initial
        delta_v2 = v_final - v_transfer_peri

    return HohmannTransfer(
        delta_v1=float(delta_v1),
        delta_v2=float(delta_v2),
        transfer_period=float(period),
        periapsis_radius=peri_radius,
        apoapsis_radius=apo_radius,
        semi_major_axis=sma,
        mu=mu
    )


def hohmann_transfer_between_altitudes(body: CentralBody, initial_altitude: float,
                                       final_altitude: float) -> HohmannTransfer:
    """
    Hohmann transfer between two circular orbits given by altitude.

    Args:
        body: Central body
        initial_altitude: Initial orbit altitude above the mean radius [km]
        final_altitude: Final orbit altitude above the mean radius [km]

    Returns:
        Transfer result
    """
    return compute_hohmann_impulses(body.mu,
                                    body.radius + initial_altitude,
                                    body.radius + final_altitude)
