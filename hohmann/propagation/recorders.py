"""
Trajectory Recorders

This module provides the output sinks that receive accepted integration
samples: an in-memory recorder, a CSV file writer and a fan-out recorder.
The propagator depends only on the ``record(time, state)`` operation.

CSV records have the form ``t,x,y,z,vx,vy,vz`` with time in seconds,
position in km and velocity in km/s.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, NamedTuple, Optional, Protocol, TextIO, Union

import numpy as np

CSV_COLUMNS = ('t', 'x', 'y', 'z', 'vx', 'vy', 'vz')


class TimeSample(NamedTuple):
    """A (time, state) pair emitted for one accepted integration step."""
    time: float
    state: np.ndarray


class TrajectoryRecorder(Protocol):
    """Sink for accepted integration samples."""

    def record(self, time: float, state: np.ndarray) -> None:
        ...


@dataclass
class TrajectoryData:
    """Container for trajectory data."""

    time: np.ndarray
    position: np.ndarray  # Shape: (N, 3)
    velocity: np.ndarray  # Shape: (N, 3)

    def __post_init__(self):
        """Validate trajectory data."""
        if self.position.shape[0] != len(self.time):
            raise ValueError("Position and time arrays must have same length")
        if self.velocity.shape[0] != len(self.time):
            raise ValueError("Velocity and time arrays must have same length")

    @property
    def states(self) -> np.ndarray:
        """Stacked state vectors, shape (N, 6)."""
        return np.hstack([self.position, self.velocity])

    @property
    def radius(self) -> np.ndarray:
        """Position magnitude at every sample [km]."""
        return np.linalg.norm(self.position, axis=1)

    def __len__(self) -> int:
        return len(self.time)


class InMemoryRecorder:
    """Keeps every recorded sample in memory."""

    def __init__(self):
        self.samples: List[TimeSample] = []

    def record(self, time: float, state: np.ndarray) -> None:
        self.samples.append(TimeSample(float(time), np.array(state, dtype=float)))

    @property
    def times(self) -> np.ndarray:
        return np.array([sample.time for sample in self.samples])

    def to_trajectory(self) -> TrajectoryData:
        """Convert the recorded samples into trajectory arrays."""
        if not self.samples:
            empty = np.empty((0, 3))
            return TrajectoryData(np.empty(0), empty, empty.copy())

        states = np.array([sample.state for sample in self.samples])
        return TrajectoryData(self.times, states[:, 0:3], states[:, 3:6])

    def __len__(self) -> int:
        return len(self.samples)


class CsvTrajectoryWriter:
    """
    Writes samples to a comma-separated file, one line per sample.

    Use as a context manager; the file is opened on entry and closed on exit.
    Errors opening or writing the file propagate as ``OSError``.
    """

    def __init__(self, path: Union[str, Path], include_header: bool = False,
                 precision: int = 15):
        self.path = Path(path)
        self.include_header = include_header
        self.precision = precision
        self._handle: Optional[TextIO] = None
        self.records_written = 0

    def open(self) -> 'CsvTrajectoryWriter':
        """Open the output file, truncating any previous content."""
        self._handle = open(self.path, 'w', newline='')
        if self.include_header:
            self._handle.write(','.join(CSV_COLUMNS) + '\n')
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def record(self, time: float, state: np.ndarray) -> None:
        if self._handle is None:
            raise ValueError(f"Trajectory file {self.path} is not open")

        fmt = f"{{:.{self.precision}g}}"
        values = [time, *state]
        self._handle.write(','.join(fmt.format(float(v)) for v in values) + '\n')
        self.records_written += 1

    def __enter__(self) -> 'CsvTrajectoryWriter':
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class CompositeRecorder:
    """Forwards each sample to several recorders, in order."""

    def __init__(self, *recorders: TrajectoryRecorder):
        self.recorders = list(recorders)

    def record(self, time: float, state: np.ndarray) -> None:
        for recorder in self.recorders:
            recorder.record(time, state)


def load_trajectory_csv(path: Union[str, Path]) -> TrajectoryData:
    """
    Load a trajectory written by ``CsvTrajectoryWriter``.

    Args:
        path: CSV file path, with or without header line

    Returns:
        Trajectory data
    """
    path = Path(path)
    with open(path) as handle:
        first_line = handle.readline()
    skip = 1 if first_line.startswith(CSV_COLUMNS[0] + ',') else 0

    data = np.loadtxt(path, delimiter=',', skiprows=skip, ndmin=2)
    if data.size == 0:
        empty = np.empty((0, 3))
        return TrajectoryData(np.empty(0), empty, empty.copy())
    if data.shape[1] != len(CSV_COLUMNS):
        raise ValueError(f"Expected {len(CSV_COLUMNS)} columns, found {data.shape[1]}")

    return TrajectoryData(data[:, 0], data[:, 1:4], data[:, 4:7])
