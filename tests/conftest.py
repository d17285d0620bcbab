"""Shared fixtures: the IEEE 738 Drake example in US customary units."""

import pytest

from linerating.conductor import ConductorSpec
from linerating.environment import Atmosphere, EnvironmentSpec


@pytest.fixture
def reference_environment() -> EnvironmentSpec:
    """40 C, 2 ft/s crosswind, clear sky on June 10 at 11:00, latitude 30 N."""
    return EnvironmentSpec(
        ambient_temperature=40.0,
        wind_speed=2.0,
        wind_angle=90.0,
        solar_irradiance=None,
        elevation=0.0,
        atmosphere=Atmosphere.CLEAR,
        latitude=30.0,
        line_azimuth=90.0,
        month=6,
        day_of_month=10,
        hour_of_day=11.0,
    )


@pytest.fixture
def shaded_environment() -> EnvironmentSpec:
    """Same weather with no solar heating at all."""
    return EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0, solar_irradiance=0.0)


@pytest.fixture
def reference_conductor() -> ConductorSpec:
    """795 kcmil 26/7 ACSR Drake, ft and ohm/ft."""
    return ConductorSpec(
        diameter=0.092333333,
        absorptivity=0.8,
        emissivity=0.8,
        t_low=25.0,
        t_high=75.0,
        r_low=2.20833e-5,
        r_high=2.63258e-5,
        heat_capacity=305.6328,
        name="Drake",
    )
