"""
Example: LEO to GEO Hohmann Transfer

This example computes the burns of a Hohmann transfer from a 200 km parking
orbit to geostationary orbit, propagates the transfer arc with the adaptive
integrator, checks the two-body invariants along the way and plots the
result.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np
import matplotlib.pyplot as plt

from hohmann.dynamics.orbital_elements import (orbital_elements_to_cartesian,
                                             propagate_orbital_elements_mean_motion)
from hohmann.propagation.recorders import InMemoryRecorder, TrajectoryData
from hohmann.simulation import (MissionConfiguration, invariant_drift,
                                plot_conservation, plot_transfer_trajectory,
                                run_hohmann_mission)
from hohmann.utils.constants import EARTH_RADIUS


def main():
    """Main example function."""
    print("=== Hohmann Transfer - LEO to GEO Example ===\n")

    config = MissionConfiguration(
        initial_altitude=200.0,
        integration_tolerance=1e-10,
        initial_step_size=10.0,
        coast_final_orbit=True,
        output_file="hohmann_geo.csv"
    )

    # 1. Burns and propagation
    print("1. Transfer summary:")
    recorder = InMemoryRecorder()
    result = run_hohmann_mission(config, recorder=recorder)

    # 2. Transfer ellipse
    print("\n2. Transfer ellipse:")
    elements = result.transfer_elements
    print(f"  Semi-major axis: {elements.a:.1f} km")
    print(f"  Eccentricity: {elements.e:.6f}")
    print(f"  Periapsis altitude: {elements.periapsis_radius - EARTH_RADIUS:.1f} km")
    print(f"  Apoapsis altitude: {elements.apoapsis_radius - EARTH_RADIUS:.1f} km")

    # 3. Numerical vs analytic arrival
    print("\n3. Arrival check against Keplerian motion:")
    analytic = propagate_orbital_elements_mean_motion(elements, result.arrival.time)
    r_analytic, _ = orbital_elements_to_cartesian(analytic)
    position_error = np.linalg.norm(result.arrival.state[0:3] - r_analytic)
    print(f"  Arrival radius error: {result.arrival_radius_error:.2e} km")
    print(f"  Position error vs analytic: {position_error:.2e} km")

    # 4. Final orbit
    print("\n4. Final orbit after second burn:")
    final = result.final_orbit_elements
    print(f"  Semi-major axis: {final.a:.1f} km")
    print(f"  Eccentricity: {final.e:.2e}")
    print(f"  Coast steps: {result.coast_statistics.accepted_steps}")

    # 5. Conservation
    print("\n5. Invariant drift along the transfer arc:")
    trajectory = recorder.to_trajectory()
    transfer_samples = result.transfer_statistics.accepted_steps + 1
    transfer_arc = TrajectoryData(trajectory.time[:transfer_samples],
                                  trajectory.position[:transfer_samples],
                                  trajectory.velocity[:transfer_samples])
    energy_drift, momentum_drift = invariant_drift(transfer_arc, config.central_body_mu)
    print(f"  Max energy drift (transfer arc): {np.max(np.abs(energy_drift)):.2e}")
    print(f"  Max angular momentum drift (transfer arc): {np.max(np.abs(momentum_drift)):.2e}")

    # 6. Plots
    print("\n6. Generating plots...")
    plot_transfer_trajectory(trajectory, config.central_body,
                             config.initial_radius, config.final_radius,
                             save_path="hohmann_geo_trajectory.png")
    plot_conservation(transfer_arc, config.central_body_mu,
                      save_path="hohmann_geo_conservation.png")
    plt.show()

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
