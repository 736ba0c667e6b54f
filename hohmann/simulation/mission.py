"""
Hohmann Transfer Mission Simulation

This module ties the transfer calculator and the trajectory propagator
together: it computes the burns, builds the parking-orbit state, applies the
first burn, propagates the transfer arc and, optionally, applies the second
burn and coasts on the final orbit.

The transfer arc is propagated for half the transfer-ellipse period, which is
the time from periapsis to apoapsis. Propagating for the full period is still
available for comparison with earlier results, and emits a warning.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import warnings
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..dynamics.orbital_elements import OrbitalElements, cartesian_to_orbital_elements
from ..dynamics.transfer import HohmannTransfer, compute_hohmann_impulses
from ..dynamics.two_body import (CentralBody, TwoBodyGravity, apply_impulse,
                                 circular_orbit_state)
from ..propagation.integrator import IntegrationStatistics, IntegratorSettings
from ..propagation.propagator import TrajectoryPropagator
from ..propagation.recorders import (CompositeRecorder, CsvTrajectoryWriter,
                                     TimeSample, TrajectoryRecorder)
from ..utils.constants import (DEFAULT_INITIAL_STEP, DEFAULT_RELATIVE_TOLERANCE,
                               DEG_TO_RAD, EARTH_MU, EARTH_RADIUS, GEO_ALTITUDE,
                               MAX_CONSECUTIVE_REJECTIONS, PARKING_ORBIT_ALTITUDE,
                               SINGULARITY_RADIUS)
from ..utils.exceptions import InvalidInputError

TRANSFER_DURATIONS = ('half', 'full')


@dataclass
class MissionConfiguration:
    """Configuration for a Hohmann transfer simulation."""

    # Central body
    central_body_radius: float = EARTH_RADIUS  # km
    central_body_mu: float = EARTH_MU          # km³/s²

    # Orbits
    initial_altitude: float = PARKING_ORBIT_ALTITUDE  # km
    final_altitude: float = GEO_ALTITUDE              # km

    # Integration parameters
    integration_tolerance: float = DEFAULT_RELATIVE_TOLERANCE  # absolute and relative
    initial_step_size: float = DEFAULT_INITIAL_STEP            # s
    max_consecutive_rejections: int = MAX_CONSECUTIVE_REJECTIONS
    singularity_radius: float = SINGULARITY_RADIUS             # km

    # Scenario
    transfer_duration: str = 'half'   # 'half' (apoapsis arrival) or 'full'
    pointing_error_deg: float = 0.0   # in-plane error of the first burn
    coast_final_orbit: bool = False   # apply second burn and coast one period

    # Output parameters
    output_file: Optional[str] = None
    include_header: bool = False

    def validate(self) -> None:
        """Raise InvalidInputError if any option is out of range."""
        for name in ('central_body_radius', 'central_body_mu', 'initial_altitude',
                     'final_altitude', 'integration_tolerance', 'initial_step_size',
                     'singularity_radius', 'pointing_error_deg'):
            if not np.isfinite(getattr(self, name)):
                raise InvalidInputError(f"{name} must be finite")
        if self.central_body_radius <= 0:
            raise InvalidInputError("Central body radius must be positive")
        if self.central_body_mu <= 0:
            raise InvalidInputError("Gravitational parameter must be positive")
        if self.central_body_radius + self.initial_altitude <= 0:
            raise InvalidInputError("Initial orbit radius must be positive")
        if self.central_body_radius + self.final_altitude <= 0:
            raise InvalidInputError("Final orbit radius must be positive")
        if self.integration_tolerance <= 0:
            raise InvalidInputError("Integration tolerance must be positive")
        if self.initial_step_size <= 0:
            raise InvalidInputError("Initial step size must be positive")
        if self.transfer_duration not in TRANSFER_DURATIONS:
            raise InvalidInputError(
                f"Transfer duration must be one of {TRANSFER_DURATIONS}, "
                f"got {self.transfer_duration!r}"
            )

    @property
    def central_body(self) -> CentralBody:
        return CentralBody(radius=self.central_body_radius, mu=self.central_body_mu)

    @property
    def initial_radius(self) -> float:
        return self.central_body_radius + self.initial_altitude

    @property
    def final_radius(self) -> float:
        return self.central_body_radius + self.final_altitude

    def integrator_settings(self) -> IntegratorSettings:
        return IntegratorSettings(
            absolute_tolerance=self.integration_tolerance,
            relative_tolerance=self.integration_tolerance,
            max_consecutive_rejections=self.max_consecutive_rejections
        )


@dataclass
class MissionResult:
    """Results of a simulated Hohmann transfer."""

    transfer: HohmannTransfer
    departure_state: np.ndarray     # state right after the first burn
    arrival: TimeSample             # end of the transfer arc
    transfer_elements: OrbitalElements
    transfer_statistics: IntegrationStatistics

    # Present only when the final orbit is coasted
    final_orbit_elements: Optional[OrbitalElements] = None
    final: Optional[TimeSample] = None
    coast_statistics: Optional[IntegrationStatistics] = None

    samples_recorded: int = 0
    notices: List[str] = field(default_factory=list)

    @property
    def arrival_radius(self) -> float:
        """Distance from the body centre at the end of the transfer arc [km]."""
        return float(np.linalg.norm(self.arrival.state[0:3]))

    @property
    def arrival_radius_error(self) -> float:
        """Arrival radius minus the target apoapsis radius [km]."""
        return self.arrival_radius - self.transfer.apoapsis_radius


class _SampleCounter:
    def __init__(self):
        self.count = 0

    def record(self, time: float, state: np.ndarray) -> None:
        self.count += 1


class _SkipFirstSample:
    def __init__(self, recorder: TrajectoryRecorder):
        self.recorder = recorder
        self.skipped = False

    def record(self, time: float, state: np.ndarray) -> None:
        if not self.skipped:
            self.skipped = True
            return
        self.recorder.record(time, state)


def create_default_mission_config() -> MissionConfiguration:
    """200 km parking orbit to geostationary orbit about Earth."""
    return MissionConfiguration()


def format_transfer_summary(transfer: HohmannTransfer) -> str:
    """Console summary of the computed transfer."""
    lines = [
        f"First burn: {transfer.delta_v1:.6f} km/s",
        f"Second burn: {transfer.delta_v2:.6f} km/s",
        f"Transfer orbit period: {transfer.transfer_period:.3f} s",
        f"Time of flight: {transfer.time_of_flight:.3f} s",
    ]
    return "\n".join(lines)


def run_hohmann_mission(config: Optional[MissionConfiguration] = None,
                        recorder: Optional[TrajectoryRecorder] = None,
                        verbose: bool = True) -> MissionResult:
    """
    Simulate a Hohmann transfer.

    Args:
        config: Mission configuration (defaults to LEO -> GEO about Earth)
        recorder: Optional sink for every accepted sample, in addition to the
            CSV file named by ``config.output_file``
        verbose: Print the transfer summary and progress messages

    Returns:
        Mission result

    Raises:
        InvalidInputError: If the configuration is invalid
        OSError: If the output file cannot be opened or written
        SingularityError, StepConvergenceError: If propagation fails
    """
    if config is None:
        config = create_default_mission_config()
    config.validate()

    body = config.central_body
    transfer = compute_hohmann_impulses(body.mu, config.initial_radius, config.final_radius)

    if verbose:
        print(format_transfer_summary(transfer))

    issued = []
    if config.transfer_duration == 'full':
        duration = transfer.transfer_period
        message = ("Propagating for the full transfer period; apoapsis is "
                   "reached after half of it")
        warnings.warn(message, UserWarning)
        issued.append(message)
    else:
        duration = transfer.time_of_flight

    parking_state = circular_orbit_state(body, config.initial_radius)
    departure_state = apply_impulse(parking_state, transfer.delta_v1,
                                    config.pointing_error_deg * DEG_TO_RAD)

    propagator = TrajectoryPropagator(
        TwoBodyGravity(body, singularity_radius=config.singularity_radius),
        config.integrator_settings()
    )

    counter = _SampleCounter()
    with ExitStack() as stack:
        sinks = [counter]
        if recorder is not None:
            sinks.append(recorder)
        if config.output_file is not None:
            # Open before integrating so an unwritable path aborts the run
            sinks.append(stack.enter_context(
                CsvTrajectoryWriter(config.output_file, config.include_header)))
        sink = CompositeRecorder(*sinks)

        if verbose:
            print("Now simulating...")

        transfer_run = propagator.propagate(departure_state, 0.0, duration,
                                            config.initial_step_size, sink)
        arrival = transfer_run.final
        transfer_elements = cartesian_to_orbital_elements(
            departure_state[0:3], departure_state[3:6], body.mu)

        result = MissionResult(
            transfer=transfer,
            departure_state=departure_state,
            arrival=arrival,
            transfer_elements=transfer_elements,
            transfer_statistics=transfer_run.statistics,
            notices=issued
        )

        if config.coast_final_orbit:
            insertion_state = apply_impulse(arrival.state, transfer.delta_v2)
            coast_period = body.orbital_period(config.final_radius)

            # The insertion sample shares the arrival time, so it is not re-emitted
            coast_sink = _SkipFirstSample(sink)
            coast_run = propagator.propagate(insertion_state, arrival.time,
                                             arrival.time + coast_period,
                                             config.initial_step_size, coast_sink)
            result.final = coast_run.final
            result.coast_statistics = coast_run.statistics
            result.final_orbit_elements = cartesian_to_orbital_elements(
                insertion_state[0:3], insertion_state[3:6], body.mu)

    result.samples_recorded = counter.count

    if verbose:
        print(f"Arrival radius: {result.arrival_radius:.3f} km "
              f"(target {transfer.apoapsis_radius:.3f} km)")
        print(f"Accepted steps: {transfer_run.statistics.accepted_steps}, "
              f"rejected steps: {transfer_run.statistics.rejected_steps}")

    return result

