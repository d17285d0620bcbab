"""IEEE 738 heat balance in SI units.

Units: diameter and elevation in m, wind speed in m/s, heat flows in W/m,
irradiance in W/m^2, temperatures in degC.

Same structure as the US customary model; only the constants differ.
"""

import math

import numpy as np

from linerating._typecheck import beartype
from linerating.conductor import ConductorSpec
from linerating.environment import Atmosphere, EnvironmentSpec
from linerating.heat_balance.base import (
    elevation_multiplier,
    solar_intensity,
    wind_direction_factor,
)
from linerating.solar import solar_position
from linerating.units import METRIC_UNITS, UnitSystem

# Table 3 (SI): coefficients A..G of total heat flux density [W/m^2] vs solar altitude [deg]
SOLAR_COEFFICIENTS: dict[Atmosphere, tuple[float, ...]] = {
    Atmosphere.CLEAR: (
        -42.2391, 63.8044, -1.9220, 3.46921e-2, -3.61118e-4, 1.94318e-6, -4.07608e-9,
    ),
    Atmosphere.INDUSTRIAL: (
        53.1821, 14.2110, 6.6138e-1, -3.1658e-2, 5.4654e-4, -4.3446e-6, 1.3236e-8,
    ),
}

# Table H.5 elevation thresholds [m] (5000, 10000, 15000 ft)
ELEVATION_THRESHOLDS = (1524.0, 3048.0, 4572.0)


def air_viscosity(film_temperature: float) -> float:
    """Dynamic viscosity of air mu_f [Pa*s] (eq. 13a)."""
    return 1.458e-6 * np.power(film_temperature + 273.0, 1.5) / (film_temperature + 383.4)


def air_density(film_temperature: float, elevation: float) -> float:
    """Air density rho_f [kg/m^3] (eq. 14a)."""
    return (1.293 - 1.525e-4 * elevation + 6.379e-9 * elevation**2) / (
        1.0 + 0.00367 * film_temperature
    )


def air_conductivity(film_temperature: float) -> float:
    """Thermal conductivity of air k_f [W/(m*degC)] (eq. 15a)."""
    return 2.424e-2 + 7.477e-5 * film_temperature - 4.407e-9 * film_temperature**2


def reynolds_number(diameter: float, density: float, wind_speed: float, viscosity: float) -> float:
    """Reynolds number N_Re (eq. 2c)."""
    return diameter * density * wind_speed / viscosity


@beartype
def convective_heat_loss(
    ambient_temperature: float,
    wind_speed: float,
    wind_angle: float,
    elevation: float,
    conductor_temperature: float,
    diameter: float,
) -> float:
    """Convective heat loss qc [W/m], larger of natural and forced convection."""
    k_angle = wind_direction_factor(math.radians(wind_angle))

    with np.errstate(invalid="ignore", over="ignore"):
        tfilm = np.float64(conductor_temperature + ambient_temperature) / 2.0
        delta = np.float64(conductor_temperature - ambient_temperature)

        density = air_density(tfilm, elevation)
        kf = air_conductivity(tfilm)
        n_re = reynolds_number(diameter, density, wind_speed, air_viscosity(tfilm))

        natural = 3.645 * np.sqrt(density) * diameter**0.75 * np.power(delta, 1.25)
        forced_low = k_angle * (1.01 + 1.35 * np.power(n_re, 0.52)) * kf * delta
        forced_high = k_angle * 0.754 * np.power(n_re, 0.6) * kf * delta

        return float(np.fmax(natural, np.fmax(forced_low, forced_high)))


@beartype
def radiated_heat_loss(
    ambient_temperature: float,
    conductor_temperature: float,
    emissivity: float,
    diameter: float,
) -> float:
    """Radiated heat loss qr [W/m] (eq. 7a)."""
    with np.errstate(invalid="ignore", over="ignore"):
        hot = np.power((np.float64(conductor_temperature) + 273.0) / 100.0, 4)
        cold = np.power((np.float64(ambient_temperature) + 273.0) / 100.0, 4)
        return float(17.8 * diameter * emissivity * (hot - cold))


@beartype
def solar_heat_gain(
    environment: EnvironmentSpec,
    absorptivity: float,
    diameter: float,
) -> float:
    """Solar heat gain qs [W/m] (eq. 8)."""
    if environment.solar_irradiance is not None:
        return absorptivity * environment.solar_irradiance * diameter

    sun = solar_position(environment)
    elevation = environment.elevation

    intensity = solar_intensity(sun.altitude_deg, SOLAR_COEFFICIENTS[environment.atmosphere])
    k_solar = 1.0 + 1.148e-4 * elevation - 1.108e-8 * elevation**2
    corrected = (
        max(intensity, 0.0) * elevation_multiplier(elevation, ELEVATION_THRESHOLDS) * k_solar
    )

    return absorptivity * corrected * math.sin(sun.incidence) * diameter


@beartype
class MetricModel:
    """HeatBalanceModel for SI inputs (m, m/s, W/m)."""

    units: UnitSystem = METRIC_UNITS

    def convective_loss(
        self,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
        temperature: float,
    ) -> float:
        return convective_heat_loss(
            environment.ambient_temperature,
            environment.wind_speed,
            environment.effective_wind_angle,
            environment.elevation,
            temperature,
            conductor.diameter,
        )

    def radiated_loss(
        self,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
        temperature: float,
    ) -> float:
        return radiated_heat_loss(
            environment.ambient_temperature,
            temperature,
            conductor.emissivity,
            conductor.diameter,
        )

    def solar_gain(self, environment: EnvironmentSpec, conductor: ConductorSpec) -> float:
        return solar_heat_gain(environment, conductor.absorptivity, conductor.diameter)

    def __repr__(self) -> str:
        return "MetricModel()"


METRIC = MetricModel()
