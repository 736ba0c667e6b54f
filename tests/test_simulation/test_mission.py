"""
Unit tests for Hohmann transfer mission simulation.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import pytest
import numpy as np
from hohmann.propagation.recorders import InMemoryRecorder, load_trajectory_csv
from hohmann.simulation.mission import (
    MissionConfiguration, create_default_mission_config,
    format_transfer_summary, run_hohmann_mission
)
from hohmann.utils.constants import EARTH_MU, EARTH_RADIUS, GEO_RADIUS
from hohmann.utils.exceptions import InvalidInputError


def precise_config(**overrides) -> MissionConfiguration:
    config = MissionConfiguration(integration_tolerance=1e-10, initial_step_size=10.0)
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


class TestMissionConfiguration:
    """Test cases for MissionConfiguration."""

    def test_default_config(self):
        """Test the default LEO to GEO configuration."""
        config = create_default_mission_config()
        config.validate()

        assert config.central_body_mu == EARTH_MU
        assert config.initial_radius == pytest.approx(EARTH_RADIUS + 200.0)
        assert config.final_radius == pytest.approx(GEO_RADIUS)
        assert config.transfer_duration == 'half'
        assert config.integration_tolerance == 1e-6
        assert config.initial_step_size == 0.1

    def test_integrator_settings(self):
        """Test that one tolerance drives both integrator tolerances."""
        settings = MissionConfiguration(integration_tolerance=1e-9).integrator_settings()

        assert settings.absolute_tolerance == 1e-9
        assert settings.relative_tolerance == 1e-9

    @pytest.mark.parametrize("name, value", [
        ("central_body_radius", -1.0),
        ("central_body_mu", 0.0),
        ("initial_altitude", -7000.0),
        ("final_altitude", -EARTH_RADIUS),
        ("integration_tolerance", 0.0),
        ("integration_tolerance", float("nan")),
        ("integration_tolerance", float("inf")),
        ("initial_step_size", float("nan")),
        ("initial_altitude", float("nan")),
        ("final_altitude", float("inf")),
        ("initial_step_size", -0.1),
        ("transfer_duration", "quarter"),
    ])
    def test_invalid_configuration(self, name, value):
        """Test rejection of invalid options."""
        config = MissionConfiguration()
        setattr(config, name, value)

        with pytest.raises(InvalidInputError):
            config.validate()
        with pytest.raises(InvalidInputError):
            run_hohmann_mission(config, verbose=False)


class TestRunHohmannMission:
    """Test cases for run_hohmann_mission."""

    def test_arrives_at_geo(self):
        """Test end-to-end LEO to GEO transfer."""
        result = run_hohmann_mission(precise_config(), verbose=False)

        assert abs(result.transfer.delta_v1 - 2.457) < 1e-2
        assert abs(result.transfer.delta_v2 - 1.477) < 1e-2
        assert result.arrival_radius == pytest.approx(GEO_RADIUS, abs=0.1)
        assert abs(result.arrival_radius_error) < 0.1
        assert result.arrival.time == pytest.approx(result.transfer.time_of_flight, abs=1e-9)
        assert result.final is None
        assert result.notices == []

    def test_transfer_elements(self):
        """Test elements of the transfer ellipse."""
        result = run_hohmann_mission(precise_config(), verbose=False)
        elements = result.transfer_elements

        assert elements.a == pytest.approx(result.transfer.semi_major_axis, rel=1e-10)
        assert elements.e == pytest.approx(result.transfer.eccentricity, rel=1e-9)
        assert elements.period == pytest.approx(result.transfer.transfer_period, rel=1e-10)

    def test_full_period_warns(self):
        """Test that the full-period option warns and returns near departure."""
        config = precise_config(transfer_duration='full')

        with pytest.warns(UserWarning, match="full transfer period"):
            result = run_hohmann_mission(config, verbose=False)

        assert len(result.notices) == 1
        assert result.arrival.time == pytest.approx(result.transfer.transfer_period, abs=1e-9)
        assert result.arrival_radius == pytest.approx(config.initial_radius, abs=1.0)

    def test_coast_final_orbit(self):
        """Test second burn and one period on the final orbit."""
        recorder = InMemoryRecorder()
        result = run_hohmann_mission(precise_config(coast_final_orbit=True),
                                     recorder=recorder, verbose=False)

        assert result.final_orbit_elements.e < 1e-4
        assert result.final_orbit_elements.a == pytest.approx(GEO_RADIUS, rel=1e-5)
        assert np.linalg.norm(result.final.state[0:3]) == pytest.approx(GEO_RADIUS, abs=1.0)

        coast_period = 2 * np.pi * np.sqrt(GEO_RADIUS**3 / EARTH_MU)
        expected_end = result.transfer.time_of_flight + coast_period
        assert result.final.time == pytest.approx(expected_end, rel=1e-9)

        times = recorder.times
        assert np.all(np.diff(times) > 0)
        assert len(recorder) == result.samples_recorded
        assert result.samples_recorded == (result.transfer_statistics.accepted_steps +
                                           result.coast_statistics.accepted_steps + 1)

    def test_pointing_error_misses_target(self):
        """Test that a mis-pointed first burn lowers the apoapsis."""
        nominal = run_hohmann_mission(precise_config(), verbose=False)
        perturbed = run_hohmann_mission(precise_config(pointing_error_deg=5.0), verbose=False)

        assert perturbed.transfer_elements.apoapsis_radius < nominal.transfer_elements.apoapsis_radius
        assert abs(perturbed.arrival_radius_error) > 10.0
        np.testing.assert_allclose(
            np.linalg.norm(perturbed.departure_state[3:6] - nominal.departure_state[3:6]),
            2 * abs(nominal.transfer.delta_v1) * np.sin(np.radians(2.5)), rtol=1e-9)

    def test_csv_output(self, tmp_path):
        """Test the trajectory file written during the run."""
        path = tmp_path / "output.csv"
        config = MissionConfiguration(output_file=str(path))

        result = run_hohmann_mission(config, verbose=False)
        trajectory = load_trajectory_csv(path)

        assert len(trajectory) == result.samples_recorded
        assert trajectory.time[0] == 0.0
        assert trajectory.position[0, 0] == pytest.approx(config.initial_radius)
        assert trajectory.time[-1] == pytest.approx(result.transfer.time_of_flight, rel=1e-14)
        assert np.all(np.diff(trajectory.time) > 0)

    def test_csv_header(self, tmp_path):
        """Test optional header in the trajectory file."""
        path = tmp_path / "output.csv"
        run_hohmann_mission(MissionConfiguration(output_file=str(path), include_header=True),
                            verbose=False)

        assert path.read_text().splitlines()[0] == "t,x,y,z,vx,vy,vz"

    def test_unwritable_output(self, tmp_path):
        """Test that an unwritable output path aborts the run."""
        config = MissionConfiguration(output_file=str(tmp_path / "missing" / "out.csv"))

        with pytest.raises(OSError):
            run_hohmann_mission(config, verbose=False)

    def test_lowering_transfer(self):
        """Test a descending transfer from GEO to LEO."""
        config = precise_config(initial_altitude=GEO_RADIUS - EARTH_RADIUS,
                                final_altitude=200.0)

        result = run_hohmann_mission(config, verbose=False)

        assert result.transfer.delta_v1 < 0
        assert result.arrival_radius == pytest.approx(EARTH_RADIUS + 200.0, abs=0.1)

    def test_console_summary(self, capsys):
        """Test the printed transfer summary."""
        run_hohmann_mission(MissionConfiguration(), verbose=True)

        output = capsys.readouterr().out
        assert "First burn:" in output
        assert "Second burn:" in output
        assert "Transfer orbit period:" in output

    def test_format_transfer_summary(self):
        """Test summary formatting."""
        result = run_hohmann_mission(MissionConfiguration(), verbose=False)
        summary = format_transfer_summary(result.transfer)

        assert summary.splitlines()[0].startswith("First burn: 2.45")
        assert len(summary.splitlines()) == 4


if __name__ == "__main__":
    pytest.main([__file__])
