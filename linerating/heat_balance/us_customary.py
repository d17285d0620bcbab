"""IEEE 738 heat balance in US customary units.

Units: diameter and elevation in ft, wind speed in ft/s, heat flows in W/ft,
irradiance in W/ft^2, temperatures in degC.

Air properties are evaluated at the film temperature Tfilm = (Tc + Ta) / 2.
The arithmetic runs in numpy float64 so a conductor colder than the air
gives NaN natural convection (ignored by the max) and runaway temperatures
give inf, rather than raising mid-iteration.

Example:
    >>> from linerating.heat_balance import US_CUSTOMARY
    >>> qc = US_CUSTOMARY.convective_loss(env, conductor, 100.0)
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
from linerating.units import US_CUSTOMARY_UNITS, UnitSystem

# =============================================================================
# Constants
# =============================================================================

# Table 3: coefficients A..G of total heat flux density [W/ft^2] vs solar altitude [deg]
SOLAR_COEFFICIENTS: dict[Atmosphere, tuple[float, ...]] = {
    Atmosphere.CLEAR: (
        -3.9241, 5.9276, -1.7856e-1, 3.223e-3, -3.3549e-5, 1.8053e-7, -3.7868e-10,
    ),
    Atmosphere.INDUSTRIAL: (
        4.9408, 1.3208, 6.1444e-2, -2.9411e-3, 5.07752e-5, -4.03627e-7, 1.22967e-9,
    ),
}

# Table H.5 elevation thresholds [ft]
ELEVATION_THRESHOLDS = (5000.0, 10000.0, 15000.0)

SECONDS_PER_HOUR = 3600.0


# =============================================================================
# Air Properties
# =============================================================================


def air_viscosity(film_temperature: float) -> float:
    """Dynamic viscosity of air mu_f [lb/(ft*h)] (eq. 13b)."""
    return 0.00353 * np.power(film_temperature + 273.15, 1.5) / (film_temperature + 383.4)


def air_density(film_temperature: float, elevation: float) -> float:
    """Air density rho_f [lb/ft^3] (eq. 14b)."""
    return (0.080695 - 2.901e-6 * elevation + 3.7e-11 * elevation**2) / (
        1.0 + 0.00367 * film_temperature
    )


def air_conductivity(film_temperature: float) -> float:
    """Thermal conductivity of air k_f [W/(ft*degC)] (eq. 15b)."""
    return 7.388e-3 + 2.279e-5 * film_temperature - 1.343e-9 * film_temperature**2


def reynolds_number(diameter: float, density: float, wind_speed: float, viscosity: float) -> float:
    """Reynolds number N_Re (eq. 2c); wind speed converted from ft/s to ft/h."""
    return diameter * density * (wind_speed * SECONDS_PER_HOUR) / viscosity


# =============================================================================
# Heat Flows
# =============================================================================


@beartype
def convective_heat_loss(
    ambient_temperature: float,
    wind_speed: float,
    wind_angle: float,
    elevation: float,
    conductor_temperature: float,
    diameter: float,
) -> float:
    """Convective heat loss qc [W/ft] (section 4.4.3).

    The larger of natural convection and the two forced-convection
    correlations (eqs. 3a, 3b, 5b).

    Args:
        ambient_temperature: Ta [degC]
        wind_speed: Vw [ft/s]
        wind_angle: Angle between wind and conductor axis, already in [0, 90] [deg]
        elevation: He [ft]
        conductor_temperature: Tc [degC]
        diameter: D0 [ft]
    """
    k_angle = wind_direction_factor(math.radians(wind_angle))

    with np.errstate(invalid="ignore", over="ignore"):
        tfilm = np.float64(conductor_temperature + ambient_temperature) / 2.0
        delta = np.float64(conductor_temperature - ambient_temperature)

        viscosity = air_viscosity(tfilm)
        density = air_density(tfilm, elevation)
        kf = air_conductivity(tfilm)
        n_re = reynolds_number(diameter, density, wind_speed, viscosity)

        natural = 1.825 * np.power(density, 0.5) * diameter**0.75 * np.power(delta, 1.25)
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
    """Radiated heat loss qr [W/ft] (eq. 7b)."""
    with np.errstate(invalid="ignore", over="ignore"):
        hot = np.power((np.float64(conductor_temperature) + 273.0) / 100.0, 4)
        cold = np.power((np.float64(ambient_temperature) + 273.0) / 100.0, 4)
        return float(1.656 * diameter * emissivity * (hot - cold))


@beartype
def solar_heat_gain(
    environment: EnvironmentSpec,
    absorptivity: float,
    diameter: float,
) -> float:
    """Solar heat gain qs [W/ft] (eq. 8).

    Uses the environment's irradiance [W/ft^2] when given. Otherwise the
    intensity follows from the sun's altitude (Table 3), corrected for
    elevation, and projected onto the conductor through the angle of
    incidence. A negative polynomial intensity is taken as zero.
    """
    if environment.solar_irradiance is not None:
        return absorptivity * environment.solar_irradiance * diameter

    sun = solar_position(environment)
    elevation = environment.elevation

    intensity = solar_intensity(sun.altitude_deg, SOLAR_COEFFICIENTS[environment.atmosphere])
    k_solar = 1.0 + 3.5e-5 * elevation - 1.0e-9 * elevation**2
    corrected = (
        max(intensity, 0.0) * elevation_multiplier(elevation, ELEVATION_THRESHOLDS) * k_solar
    )

    return absorptivity * corrected * math.sin(sun.incidence) * diameter


# =============================================================================
# Model
# =============================================================================


@beartype
class UsCustomaryModel:
    """HeatBalanceModel for US customary inputs (ft, ft/s, W/ft)."""

    units: UnitSystem = US_CUSTOMARY_UNITS

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
        return "UsCustomaryModel()"


US_CUSTOMARY = UsCustomaryModel()
