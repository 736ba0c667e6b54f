"""
Physical and Mathematical Constants for Orbital Transfers

This module contains fundamental constants used throughout the Hohmann
transfer calculator and trajectory propagator. All quantities use kilometres,
kilometres per second and seconds.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np

# Earth Physical Constants
EARTH_MU = 398600.4418      # Earth gravitational parameter [km³/s²]
EARTH_RADIUS = 6378.1363    # Earth mean radius [km]

# Reference Orbits
PARKING_ORBIT_ALTITUDE = 200.0  # Low parking orbit altitude [km]
GEO_RADIUS = 42164.0            # Geostationary orbit radius [km]
GEO_ALTITUDE = GEO_RADIUS - EARTH_RADIUS  # Geostationary altitude [km]

# Mathematical Constants
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG_TO_RAD = np.pi / 180.0

# Numerical Tolerances
TOLERANCE_ECCENTRICITY = 1e-10  # Below this an orbit is treated as circular
TOLERANCE_NODE = 1e-10          # Below this an orbit is treated as equatorial [km²/s]
TOLERANCE_ENERGY = 1e-12        # Parabolic energy threshold [km²/s²]

# Integration Parameters
DEFAULT_ABSOLUTE_TOLERANCE = 1e-6   # Absolute error tolerance [km, km/s]
DEFAULT_RELATIVE_TOLERANCE = 1e-6   # Relative error tolerance [-]
DEFAULT_INITIAL_STEP = 0.1          # Initial step size guess [s]
STEP_SAFETY_FACTOR = 0.9            # Step size controller safety factor
MAX_STEP_GROWTH = 5.0               # Maximum step growth per accepted step
MIN_STEP_SHRINK = 0.2               # Minimum step shrink per rejected step
MAX_CONSECUTIVE_REJECTIONS = 50     # Rejections tolerated before giving up
SINGULARITY_RADIUS = 1e-3           # Position magnitude treated as collision [km]
