"""Tests for transient heating and transient ratings."""

import logging
from dataclasses import replace

import numpy as np
import polars as pl
import pytest
from numpy.testing import assert_allclose

from linerating.conductor import ConductorSpec
from linerating.environment import EnvironmentSpec
from linerating.heat_balance import US_CUSTOMARY
from linerating.steady_state import conductor_temperature, heat_balance, thermal_rating
from linerating.transient import (
    StepFunction,
    TransientResult,
    euler_step,
    heun_step,
    rk4_step,
    temperature_rise,
    temperature_trajectory,
    transient_rating,
)

# =============================================================================
# Integrators
# =============================================================================


class TestIntegrators:
    """Single steps of a linear cooling law dT/dt = -k (T - Ta)."""

    @staticmethod
    def cooling(temperature: float) -> float:
        return -2.0 * (temperature - 40.0)

    def test_protocol(self) -> None:
        for step in (euler_step, heun_step, rk4_step):
            assert isinstance(step, StepFunction)

    def test_euler(self) -> None:
        # 100 + (-120) * 1 / 10
        assert euler_step(100.0, self.cooling, 1.0, 10.0) == pytest.approx(88.0)

    def test_heun(self) -> None:
        # k1 = -12, predictor 88, k2 = -9.6
        assert heun_step(100.0, self.cooling, 1.0, 10.0) == pytest.approx(89.2)

    def test_rk4_close_to_exact(self) -> None:
        exact = 40.0 + 60.0 * np.exp(-0.2)
        assert rk4_step(100.0, self.cooling, 1.0, 10.0) == pytest.approx(exact, rel=1e-5)

    def test_higher_order_is_more_accurate(self) -> None:
        exact = 40.0 + 60.0 * np.exp(-1.0)
        errors = [
            abs(step(100.0, self.cooling, 5.0, 10.0) - exact)
            for step in (euler_step, heun_step, rk4_step)
        ]
        assert errors[0] > errors[1] > errors[2]


# =============================================================================
# Temperature Rise
# =============================================================================


class TestTemperatureRise:
    def test_reference_single_step(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        rise = temperature_rise(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 1
        )
        assert rise == pytest.approx(16.4, rel=0.03)

    def test_single_step_is_explicit_euler(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        env, cond = reference_environment, reference_conductor
        current, dt, t0 = 2000.0, 60.0, 100.0

        qc = US_CUSTOMARY.convective_loss(env, cond, t0)
        qr = US_CUSTOMARY.radiated_loss(env, cond, t0)
        qs = US_CUSTOMARY.solar_gain(env, cond)
        r = cond.resistance_at(t0)
        final = t0 + ((r * (current * current)) + qs - qc - qr) * dt / cond.heat_capacity

        assert temperature_rise(env, cond, t0, current, dt, 1) == final - t0

    def test_below_ambient_is_zero(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        assert (
            temperature_rise(reference_environment, reference_conductor, 30.0, 2000.0, 60.0, 10)
            == 0.0
        )

    def test_zero_steps(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        assert (
            temperature_rise(reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 0)
            == 0.0
        )

    def test_non_decreasing_in_current(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        rises = [
            temperature_rise(reference_environment, reference_conductor, 100.0, i, 60.0, 10)
            for i in (0.0, 500.0, 1000.0, 1500.0, 2000.0, 2500.0)
        ]
        assert rises == sorted(rises)

    def test_cools_below_rating(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        rise = temperature_rise(reference_environment, reference_conductor, 100.0, 500.0, 60.0, 10)
        assert rise < 0.0

    def test_zero_current_settles_at_steady_temperature(
        self, shaded_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        steady = conductor_temperature(shaded_environment, reference_conductor, 0.0, 1e-6)
        rise = temperature_rise(shaded_environment, reference_conductor, 80.0, 0.0, 10.0, 3000)
        assert rise == pytest.approx(steady - 80.0, abs=0.01)

    def test_zero_current_under_sun_settles_above_steady_temperature(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        # The steady search clamps the rating to zero while the sun outweighs the
        # losses, so it stops at ambient; integration runs on to the balance point
        steady = conductor_temperature(reference_environment, reference_conductor, 0.0, 1e-6)
        settled = 40.0 + temperature_rise(
            reference_environment, reference_conductor, 40.0, 0.0, 10.0, 3000
        )
        assert steady == pytest.approx(40.0, abs=1e-5)
        assert settled == pytest.approx(51.88, abs=0.05)
        balance = heat_balance(reference_environment, reference_conductor, settled)
        assert balance.net_loss == pytest.approx(0.0, abs=1e-3)

    def test_settles_at_steady_temperature_under_load(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        steady = conductor_temperature(reference_environment, reference_conductor, 1000.0, 1e-6)
        rise = temperature_rise(
            reference_environment, reference_conductor, 60.0, 1000.0, 10.0, 3000
        )
        assert 60.0 + rise == pytest.approx(steady, abs=0.01)

    def test_missing_heat_capacity_raises(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        bare = replace(reference_conductor, heat_capacity=None)
        with pytest.raises(ValueError, match="heat_capacity"):
            temperature_rise(reference_environment, bare, 100.0, 2000.0, 60.0, 1)

    @pytest.mark.parametrize(("step_duration", "steps"), [(0.0, 1), (-60.0, 1), (60.0, -1)])
    def test_invalid_stepping_raises(
        self,
        reference_environment: EnvironmentSpec,
        reference_conductor: ConductorSpec,
        step_duration: float,
        steps: int,
    ) -> None:
        with pytest.raises(ValueError):
            temperature_rise(
                reference_environment, reference_conductor, 100.0, 2000.0, step_duration, steps
            )

    def test_integrators_converge_together(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        fine = temperature_rise(
            reference_environment, reference_conductor, 100.0, 2000.0, 0.5, 1200
        )
        for integrator in (heun_step, rk4_step):
            coarse = temperature_rise(
                reference_environment,
                reference_conductor,
                100.0,
                2000.0,
                60.0,
                10,
                integrator=integrator,
            )
            assert coarse == pytest.approx(fine, rel=1e-2)


# =============================================================================
# Trajectory
# =============================================================================


class TestTrajectory:
    def test_shapes(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        result = temperature_trajectory(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 30
        )
        assert isinstance(result, TransientResult)
        assert result.n_steps == 30
        assert result.duration == pytest.approx(1800.0)
        assert len(result.temperature) == 31
        assert_allclose(result.time[:3], [0.0, 60.0, 120.0])
        assert result.initial_temperature == 100.0

    def test_matches_temperature_rise(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        args = (reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 31)
        result = temperature_trajectory(*args)
        assert result.temperature_rise == temperature_rise(*args)

    def test_progress_bar_gives_same_result(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        args = (reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 5)
        plain = temperature_trajectory(*args)
        with_bar = temperature_trajectory(*args, progress=True)
        assert_allclose(with_bar.temperature, plain.temperature, rtol=0.0, atol=0.0)

    def test_heat_flows_recorded(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        result = temperature_trajectory(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 3
        )
        assert result.resistive_heating[0] == pytest.approx(
            reference_conductor.resistance_at(100.0) * 2000.0**2
        )
        assert np.all(result.solar_gain == result.solar_gain[0])
        assert np.all(np.diff(result.convective_loss) > 0.0)

    def test_peak_and_exceeds(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        result = temperature_trajectory(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 10
        )
        assert result.peak_temperature == result.final_temperature
        assert result.exceeds(100.0)
        assert not result.exceeds(result.peak_temperature)

    def test_to_dataframe(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        result = temperature_trajectory(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 4
        )
        df = result.to_dataframe()
        assert isinstance(df, pl.DataFrame)
        assert df.height == 5
        assert df.columns == [
            "time",
            "temperature",
            "resistive_heating",
            "solar_gain",
            "convective_loss",
            "radiated_loss",
        ]

    def test_summary(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        result = temperature_trajectory(
            reference_environment, reference_conductor, 100.0, 2000.0, 60.0, 4
        )
        summary = result.summary()
        assert "Transient Heating" in summary
        assert "2000.0 A" in summary
        assert "WARNING" not in summary


# =============================================================================
# Transient Rating
# =============================================================================


class TestTransientRating:
    def test_reference_case(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        rating = transient_rating(
            reference_environment, reference_conductor, 100.0, 254.3, 60.0, 31, 0.01
        )
        rise = temperature_rise(
            reference_environment, reference_conductor, 100.0, rating, 60.0, 31
        )
        assert rise == pytest.approx(154.3, abs=0.05)
        assert rating > thermal_rating(reference_environment, reference_conductor, 100.0)

    def test_max_below_initial_is_zero(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        assert (
            transient_rating(
                reference_environment, reference_conductor, 100.0, 90.0, 60.0, 10, 0.01
            )
            == 0.0
        )

    def test_start_below_ambient_is_zero(
        self,
        reference_environment: EnvironmentSpec,
        reference_conductor: ConductorSpec,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            rating = transient_rating(
                reference_environment, reference_conductor, 30.0, 100.0, 60.0, 5, 0.01
            )
        assert rating == 0.0
        assert "upper limit" not in caplog.text

    def test_validates_before_zero_returns(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        bare = replace(reference_conductor, heat_capacity=None)
        with pytest.raises(ValueError, match="heat_capacity"):
            transient_rating(reference_environment, bare, 30.0, 100.0, 60.0, 5, 0.01)
        with pytest.raises(ValueError, match="Step duration"):
            transient_rating(
                reference_environment, reference_conductor, 100.0, 90.0, 0.0, 5, 0.01
            )

    def test_longer_window_lowers_rating(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        short = transient_rating(
            reference_environment, reference_conductor, 100.0, 150.0, 60.0, 5, 0.01
        )
        long = transient_rating(
            reference_environment, reference_conductor, 100.0, 150.0, 60.0, 30, 0.01
        )
        assert short > long

    def test_long_window_approaches_steady_rating(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        transient = transient_rating(
            reference_environment, reference_conductor, 100.0, 150.0, 60.0, 600, 0.01
        )
        steady = thermal_rating(reference_environment, reference_conductor, 150.0)
        assert transient == pytest.approx(steady, rel=1e-3)

    def test_integrator_choice(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        euler = transient_rating(
            reference_environment, reference_conductor, 100.0, 150.0, 60.0, 15, 0.01
        )
        rk4 = transient_rating(
            reference_environment,
            reference_conductor,
            100.0,
            150.0,
            60.0,
            15,
            0.01,
            integrator=rk4_step,
        )
        assert rk4 == pytest.approx(euler, rel=0.05)
