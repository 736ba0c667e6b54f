"""
Unit tests for orbital elements module.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import pytest
import numpy as np
from hohmann.dynamics.orbital_elements import (
    OrbitalElements, cartesian_to_orbital_elements,
    orbital_elements_to_cartesian, propagate_orbital_elements_mean_motion
)
from hohmann.dynamics.transfer import compute_hohmann_impulses
from hohmann.dynamics.two_body import EARTH, apply_impulse, circular_orbit_state
from hohmann.utils.constants import EARTH_MU, EARTH_RADIUS, GEO_RADIUS
from hohmann.utils.exceptions import InvalidInputError


def angle_difference(a: float, b: float) -> float:
    """Smallest signed difference between two angles."""
    return np.arctan2(np.sin(a - b), np.cos(a - b))


class TestOrbitalElements:
    """Test cases for OrbitalElements class."""

    def test_orbital_elements_creation(self):
        """Test creation of orbital elements."""
        # ISS-like orbit
        elements = OrbitalElements(
            a=EARTH_RADIUS + 400.0,
            e=0.0001,
            i=np.radians(51.6),
            omega_cap=0.0,
            omega=0.0,
            f=0.0
        )

        assert elements.a > EARTH_RADIUS
        assert 0 <= elements.e < 1
        assert 0 <= elements.i <= np.pi
        # About 92 minutes
        assert 90 * 60 < elements.period < 94 * 60
        assert elements.mean_motion > 0

    def test_orbital_elements_validation(self):
        """Test validation of orbital elements."""
        with pytest.raises(InvalidInputError):
            OrbitalElements(-1000.0, 0.1, 0.1, 0.0, 0.0, 0.0)

        with pytest.raises(InvalidInputError):
            OrbitalElements(7000.0, 1.1, 0.1, 0.0, 0.0, 0.0)

        with pytest.raises(ValueError):
            OrbitalElements(7000.0, 0.1, -0.1, 0.0, 0.0, 0.0)

    def test_angles_are_wrapped(self):
        """Test normalisation of angles to [0, 2π)."""
        elements = OrbitalElements(7000.0, 0.1, 0.1, -np.pi / 2, 3 * np.pi, -0.1)

        assert elements.omega_cap == pytest.approx(1.5 * np.pi)
        assert elements.omega == pytest.approx(np.pi)
        assert elements.f == pytest.approx(2 * np.pi - 0.1)

    def test_orbital_properties(self):
        """Test orbital property calculations."""
        elements = OrbitalElements(a=7000.0, e=0.0, i=0.0, omega_cap=0.0, omega=0.0, f=0.0)

        assert abs(elements.radius() - elements.a) < 1e-9

        v_expected = np.sqrt(EARTH_MU / elements.a)
        assert abs(elements.velocity_magnitude() - v_expected) < 1e-12
        assert elements.energy == pytest.approx(-EARTH_MU / (2 * elements.a))

    def test_apse_radii(self):
        """Test periapsis and apoapsis radii."""
        elements = OrbitalElements(a=10000.0, e=0.25, i=0.0, omega_cap=0.0, omega=0.0, f=0.0)

        assert elements.periapsis_radius == pytest.approx(7500.0)
        assert elements.apoapsis_radius == pytest.approx(12500.0)
        assert elements.radius() == pytest.approx(elements.periapsis_radius)


class TestCoordinateConversions:
    """Test cases for coordinate conversions."""

    def test_cartesian_to_orbital_round_trip(self):
        """Test round-trip conversion: orbital -> cartesian -> orbital."""
        original = OrbitalElements(
            a=7000.0,
            e=0.1,
            i=np.radians(30),
            omega_cap=np.radians(45),
            omega=np.radians(60),
            f=np.radians(90)
        )

        r_vec, v_vec = orbital_elements_to_cartesian(original)
        converted = cartesian_to_orbital_elements(r_vec, v_vec)

        tolerance = 1e-9
        assert abs(converted.a - original.a) < 1e-7
        assert abs(converted.e - original.e) < tolerance
        assert abs(converted.i - original.i) < tolerance
        assert abs(angle_difference(converted.omega_cap, original.omega_cap)) < tolerance
        assert abs(angle_difference(converted.omega, original.omega)) < tolerance
        assert abs(angle_difference(converted.f, original.f)) < tolerance

    def test_circular_equatorial_orbit(self):
        """Test conversion for circular equatorial orbit."""
        elements = OrbitalElements(a=7000.0, e=0.0, i=0.0, omega_cap=0.0, omega=0.0, f=0.0)

        r_vec, v_vec = orbital_elements_to_cartesian(elements)

        np.testing.assert_allclose(r_vec, [elements.a, 0.0, 0.0], atol=1e-9)

        v_circular = np.sqrt(EARTH_MU / elements.a)
        np.testing.assert_allclose(v_vec, [0.0, v_circular, 0.0], atol=1e-12)

    def test_hohmann_departure_state(self):
        """Test elements of the state right after the first burn."""
        r1 = EARTH_RADIUS + 200.0
        transfer = compute_hohmann_impulses(EARTH_MU, r1, GEO_RADIUS)
        state = apply_impulse(circular_orbit_state(EARTH, r1), transfer.delta_v1)

        elements = cartesian_to_orbital_elements(state[0:3], state[3:6], EARTH_MU)

        assert elements.a == pytest.approx(transfer.semi_major_axis, rel=1e-10)
        assert elements.e == pytest.approx(transfer.eccentricity, rel=1e-9)
        assert elements.periapsis_radius == pytest.approx(r1, rel=1e-10)
        assert elements.apoapsis_radius == pytest.approx(GEO_RADIUS, rel=1e-10)
        # Departure happens at periapsis on the +X axis
        assert abs(angle_difference(elements.f, 0.0)) < 1e-9
        assert abs(angle_difference(elements.omega, 0.0)) < 1e-9
        assert elements.i == pytest.approx(0.0, abs=1e-12)

    def test_retrograde_equatorial_periapsis(self):
        """Test periapsis longitude of a retrograde equatorial orbit."""
        original = OrbitalElements(a=9000.0, e=0.2, i=np.pi, omega_cap=0.0,
                                   omega=np.radians(40), f=np.radians(10))

        r_vec, v_vec = orbital_elements_to_cartesian(original)
        converted = cartesian_to_orbital_elements(r_vec, v_vec)

        assert converted.e == pytest.approx(original.e, rel=1e-9)
        np.testing.assert_allclose(orbital_elements_to_cartesian(converted)[0], r_vec,
                                   atol=1e-6)

    def test_hyperbolic_state_rejected(self):
        """Test that escape trajectories are rejected."""
        r_vec = np.array([7000.0, 0.0, 0.0])
        v_vec = np.array([0.0, 1.5 * np.sqrt(2 * EARTH_MU / 7000.0), 0.0])

        with pytest.raises(InvalidInputError):
            cartesian_to_orbital_elements(r_vec, v_vec)


class TestOrbitalPropagation:
    """Test cases for orbital propagation."""

    def test_mean_motion_propagation(self):
        """Test mean motion propagation."""
        elements = OrbitalElements(a=7000.0, e=0.1, i=np.radians(30),
                                   omega_cap=0.0, omega=0.0, f=0.0)

        # Propagate for one period
        propagated = propagate_orbital_elements_mean_motion(elements, elements.period)

        assert abs(angle_difference(propagated.f, elements.f)) < 1e-6

        # Other elements should remain unchanged
        assert abs(propagated.a - elements.a) < 1e-12
        assert abs(propagated.e - elements.e) < 1e-12
        assert abs(propagated.i - elements.i) < 1e-12

    def test_short_time_propagation(self):
        """Test propagation for short time intervals."""
        elements = OrbitalElements(a=7000.0, e=0.0, i=0.0, omega_cap=0.0, omega=0.0, f=0.0)

        dt = 60.0
        propagated = propagate_orbital_elements_mean_motion(elements, dt)

        expected_delta_f = elements.mean_motion * dt
        actual_delta_f = propagated.f - elements.f

        assert abs(actual_delta_f - expected_delta_f) < 1e-10

    def test_half_period_reaches_apoapsis(self):
        """Test that half a period moves from periapsis to apoapsis."""
        elements = OrbitalElements(a=24371.0, e=0.73, i=0.0, omega_cap=0.0, omega=0.0, f=0.0)

        propagated = propagate_orbital_elements_mean_motion(elements, 0.5 * elements.period)

        assert abs(angle_difference(propagated.f, np.pi)) < 1e-8
        assert propagated.radius() == pytest.approx(elements.apoapsis_radius, rel=1e-10)


if __name__ == "__main__":
    pytest.main([__file__])
