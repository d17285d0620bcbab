"""Tests for the IEEE 738 heat-balance models.

Expected values follow the Drake worked example (US customary units):
qc ~ 25.0 W/ft, qr ~ 11.9 W/ft, qs ~ 6.8 W/ft at 100 C.
"""

import math
from dataclasses import replace

import numpy as np
import pytest

from linerating.conductor import ConductorSpec
from linerating.environment import Atmosphere, EnvironmentSpec
from linerating.heat_balance import (
    METRIC,
    US_CUSTOMARY,
    HeatBalance,
    HeatBalanceModel,
    heat_balance,
)
from linerating.heat_balance import metric, us_customary
from linerating.heat_balance.base import (
    elevation_multiplier,
    solar_intensity,
    wind_direction_factor,
)
from linerating.units import METRIC_UNITS, US_CUSTOMARY_UNITS

FT = 0.3048


def to_metric(environment: EnvironmentSpec, conductor: ConductorSpec):
    """Same physical situation expressed for the metric model."""
    env = replace(
        environment,
        wind_speed=environment.wind_speed * FT,
        elevation=environment.elevation * FT,
    )
    cond = replace(
        conductor,
        diameter=conductor.diameter * FT,
        r_low=conductor.r_low / FT,
        r_high=conductor.r_high / FT,
    )
    return env, cond


# =============================================================================
# Shared Helpers
# =============================================================================


class TestHelpers:
    def test_wind_direction_factor_perpendicular(self) -> None:
        assert wind_direction_factor(math.radians(90.0)) == pytest.approx(1.0)

    def test_wind_direction_factor_parallel(self) -> None:
        assert wind_direction_factor(0.0) == pytest.approx(0.388)

    def test_wind_direction_factor_increases_to_perpendicular(self) -> None:
        factors = [wind_direction_factor(math.radians(a)) for a in range(0, 91, 10)]
        assert factors == sorted(factors)

    def test_solar_intensity_reference_altitude(self) -> None:
        qs = solar_intensity(74.89, us_customary.SOLAR_COEFFICIENTS[Atmosphere.CLEAR])
        assert qs == pytest.approx(95.4, abs=0.2)

    def test_metric_polynomial_matches_us(self) -> None:
        us = solar_intensity(60.0, us_customary.SOLAR_COEFFICIENTS[Atmosphere.CLEAR])
        si = solar_intensity(60.0, metric.SOLAR_COEFFICIENTS[Atmosphere.CLEAR])
        assert si == pytest.approx(us / FT**2, rel=2e-3)

    def test_industrial_atmosphere_is_dimmer(self) -> None:
        clear = solar_intensity(60.0, us_customary.SOLAR_COEFFICIENTS[Atmosphere.CLEAR])
        industrial = solar_intensity(
            60.0, us_customary.SOLAR_COEFFICIENTS[Atmosphere.INDUSTRIAL]
        )
        assert industrial < clear

    @pytest.mark.parametrize(
        ("elevation", "expected"),
        [(0.0, 1.0), (5000.0, 1.0), (5001.0, 1.15), (12000.0, 1.25), (20000.0, 1.3)],
    )
    def test_elevation_multiplier(self, elevation: float, expected: float) -> None:
        assert elevation_multiplier(elevation, us_customary.ELEVATION_THRESHOLDS) == expected


# =============================================================================
# US Customary Model
# =============================================================================


class TestUsCustomary:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(US_CUSTOMARY, HeatBalanceModel)
        assert US_CUSTOMARY.units is US_CUSTOMARY_UNITS

    def test_convective_loss(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        qc = US_CUSTOMARY.convective_loss(reference_environment, reference_conductor, 100.0)
        assert qc == pytest.approx(25.0, rel=0.02)

    def test_radiated_loss(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        qr = US_CUSTOMARY.radiated_loss(reference_environment, reference_conductor, 100.0)
        assert qr == pytest.approx(11.94, rel=0.01)

    def test_solar_gain(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        qs = US_CUSTOMARY.solar_gain(reference_environment, reference_conductor)
        assert qs == pytest.approx(6.84, rel=0.02)

    def test_given_irradiance(self, reference_conductor: ConductorSpec) -> None:
        env = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0, solar_irradiance=94.6)
        qs = US_CUSTOMARY.solar_gain(env, reference_conductor)
        assert qs == pytest.approx(0.8 * 94.6 * 0.092333333)

    def test_no_sun_at_night(self, reference_conductor: ConductorSpec) -> None:
        env = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0, hour_of_day=0.0)
        assert US_CUSTOMARY.solar_gain(env, reference_conductor) == 0.0

    def test_elevation_raises_solar_gain(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        high = replace(reference_environment, elevation=6000.0)
        assert US_CUSTOMARY.solar_gain(high, reference_conductor) > US_CUSTOMARY.solar_gain(
            reference_environment, reference_conductor
        )

    def test_no_loss_at_ambient(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        assert US_CUSTOMARY.convective_loss(reference_environment, reference_conductor, 40.0) == 0.0
        assert US_CUSTOMARY.radiated_loss(reference_environment, reference_conductor, 40.0) == 0.0

    def test_below_ambient_does_not_raise(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        # Natural convection is NaN below ambient and is ignored by the max
        qc = US_CUSTOMARY.convective_loss(reference_environment, reference_conductor, 30.0)
        assert np.isfinite(qc)
        assert qc < 0.0

    def test_still_air_uses_natural_convection(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        calm = replace(reference_environment, wind_speed=0.0)
        qc = US_CUSTOMARY.convective_loss(calm, reference_conductor, 100.0)
        assert qc == pytest.approx(12.9, rel=0.02)

    def test_losses_increase_with_temperature(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        temps = [50.0, 75.0, 100.0, 150.0, 200.0]
        qc = [US_CUSTOMARY.convective_loss(reference_environment, reference_conductor, t) for t in temps]
        qr = [US_CUSTOMARY.radiated_loss(reference_environment, reference_conductor, t) for t in temps]
        assert qc == sorted(qc)
        assert qr == sorted(qr)

    def test_overflow_gives_inf(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        qr = US_CUSTOMARY.radiated_loss(reference_environment, reference_conductor, 1e300)
        assert qr == math.inf


# =============================================================================
# Metric Model
# =============================================================================


class TestMetric:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(METRIC, HeatBalanceModel)
        assert METRIC.units is METRIC_UNITS

    def test_matches_us_customary(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        env_si, cond_si = to_metric(reference_environment, reference_conductor)

        us = heat_balance(reference_environment, reference_conductor, 100.0, US_CUSTOMARY)
        si = heat_balance(env_si, cond_si, 100.0, METRIC)

        assert si.convective_loss == pytest.approx(us.convective_loss / FT, rel=0.01)
        assert si.radiated_loss == pytest.approx(us.radiated_loss / FT, rel=0.01)
        assert si.solar_gain == pytest.approx(us.solar_gain / FT, rel=0.01)
        assert si.resistance == pytest.approx(us.resistance / FT)


# =============================================================================
# Heat Balance Breakdown
# =============================================================================


class TestHeatBalance:
    def test_breakdown(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        hb = heat_balance(reference_environment, reference_conductor, 100.0, US_CUSTOMARY)
        assert isinstance(hb, HeatBalance)
        assert hb.temperature == 100.0
        assert hb.resistance == pytest.approx(reference_conductor.resistance_at(100.0))
        assert hb.net_loss == pytest.approx(
            hb.convective_loss + hb.radiated_loss - hb.solar_gain
        )

    def test_equilibrium_at_rating_current(
        self, reference_environment: EnvironmentSpec, reference_conductor: ConductorSpec
    ) -> None:
        hb = heat_balance(reference_environment, reference_conductor, 100.0, US_CUSTOMARY)
        current = math.sqrt(hb.net_loss / hb.resistance)
        assert hb.net_heating(current) == pytest.approx(0.0, abs=1e-9)
        assert hb.net_heating(current * 1.1) > 0.0

    def test_resistive_heating(self) -> None:
        hb = HeatBalance(
            temperature=100.0,
            convective_loss=0.0,
            radiated_loss=0.0,
            solar_gain=0.0,
            resistance=2.0e-5,
        )
        assert hb.resistive_heating(1000.0) == pytest.approx(20.0)
