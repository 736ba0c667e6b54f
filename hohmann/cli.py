"""
Command-Line Interface

Runs a Hohmann transfer simulation from command-line options and reports
the result on the console.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import argparse
import sys
from typing import List, Optional

from .propagation.recorders import InMemoryRecorder
from .simulation.mission import (TRANSFER_DURATIONS, MissionConfiguration,
                                 run_hohmann_mission)
from .utils.constants import (DEFAULT_INITIAL_STEP, DEFAULT_RELATIVE_TOLERANCE,
                              EARTH_MU, EARTH_RADIUS, GEO_ALTITUDE,
                              PARKING_ORBIT_ALTITUDE)
from .utils.exceptions import HohmannError


def parse_command_line_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the transfer simulator.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='hohmann',
        description='Hohmann transfer calculator and two-body trajectory propagator'
    )

    # Central body
    parser.add_argument(
        '--body-radius', dest='central_body_radius', type=float, default=EARTH_RADIUS,
        help=f"Central body mean radius in km (default: {EARTH_RADIUS})"
    )
    parser.add_argument(
        '--body-mu', dest='central_body_mu', type=float, default=EARTH_MU,
        help=f"Central body gravitational parameter in km^3/s^2 (default: {EARTH_MU})"
    )

    # Orbits
    parser.add_argument(
        '--initial-altitude', dest='initial_altitude', type=float,
        default=PARKING_ORBIT_ALTITUDE,
        help=f"Initial circular orbit altitude in km (default: {PARKING_ORBIT_ALTITUDE})"
    )
    parser.add_argument(
        '--final-altitude', dest='final_altitude', type=float, default=GEO_ALTITUDE,
        help="Final circular orbit altitude in km (default: geostationary)"
    )

    # Integration
    parser.add_argument(
        '--tolerance', dest='integration_tolerance', type=float,
        default=DEFAULT_RELATIVE_TOLERANCE,
        help=f"Absolute and relative integration tolerance (default: {DEFAULT_RELATIVE_TOLERANCE})"
    )
    parser.add_argument(
        '--initial-step', dest='initial_step_size', type=float,
        default=DEFAULT_INITIAL_STEP,
        help=f"Initial integration step in seconds (default: {DEFAULT_INITIAL_STEP})"
    )
    parser.add_argument(
        '--transfer-duration', dest='transfer_duration', choices=TRANSFER_DURATIONS,
        default='half',
        help="Propagate for half (apoapsis arrival) or the full transfer period"
    )

    # Scenario
    parser.add_argument(
        '--pointing-error', dest='pointing_error_deg', type=float, default=0.0,
        help="In-plane pointing error of the first burn in degrees (default: 0)"
    )
    parser.add_argument(
        '--coast-final-orbit', dest='coast_final_orbit', action='store_true',
        help="Apply the second burn and coast one period of the final orbit"
    )

    # Output
    parser.add_argument(
        '--output', '-o', dest='output_file', type=str, default='output.csv',
        help="CSV file receiving t,x,y,z,vx,vy,vz records (default: output.csv)"
    )
    parser.add_argument(
        '--header', dest='include_header', action='store_true',
        help="Write a column header line to the CSV file"
    )
    parser.add_argument(
        '--plot', dest='plot_file', type=str, default=None,
        help="Save a trajectory plot to this image file"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the simulator and return the process exit status."""
    args = parse_command_line_arguments(argv)

    config = MissionConfiguration(
        central_body_radius=args.central_body_radius,
        central_body_mu=args.central_body_mu,
        initial_altitude=args.initial_altitude,
        final_altitude=args.final_altitude,
        integration_tolerance=args.integration_tolerance,
        initial_step_size=args.initial_step_size,
        transfer_duration=args.transfer_duration,
        pointing_error_deg=args.pointing_error_deg,
        coast_final_orbit=args.coast_final_orbit,
        output_file=args.output_file,
        include_header=args.include_header
    )

    recorder = InMemoryRecorder() if args.plot_file else None

    try:
        result = run_hohmann_mission(config, recorder=recorder)
    except (HohmannError, OSError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"Wrote {result.samples_recorded} samples to {args.output_file}")

    if args.plot_file:
        from .simulation.visualization import plot_transfer_trajectory
        plot_transfer_trajectory(recorder.to_trajectory(), config.central_body,
                                 config.initial_radius, config.final_radius,
                                 save_path=args.plot_file)

    return 0
