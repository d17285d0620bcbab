"""Solar geometry for computed solar heating (IEEE 738 Annex A).

Finds where the sun is relative to the conductor for a given date, local
solar time and latitude. The result is independent of unit system; the
heat-balance models turn it into a heat gain with their own intensity
polynomials and elevation corrections.

Angles are in radians internally, degrees at the API where the standard
quotes degrees.

Example:
    >>> from linerating.environment import EnvironmentSpec
    >>> from linerating.solar import solar_position
    >>>
    >>> env = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0)
    >>> sun = solar_position(env)
    >>> print(f"Solar altitude: {sun.altitude_deg:.1f} deg")
"""

import math
from dataclasses import dataclass

from linerating._typecheck import beartype
from linerating.environment import EnvironmentSpec

# Amplitude of the solar declination [deg] (Annex A value)
DECLINATION_AMPLITUDE = 23.4583


@beartype
@dataclass(frozen=True)
class SolarPosition:
    """Sun position relative to a line.

    Attributes:
        hour_angle: Hour angle omega relative to solar noon [rad]
        declination: Solar declination delta [rad]
        altitude: Solar altitude Hc [rad]
        azimuth: Solar azimuth Zc [rad]
        incidence: Effective angle of incidence theta of the sun's rays on
            the conductor [rad]
    """

    hour_angle: float
    declination: float
    altitude: float
    azimuth: float
    incidence: float

    @property
    def altitude_deg(self) -> float:
        return math.degrees(self.altitude)

    @property
    def azimuth_deg(self) -> float:
        return math.degrees(self.azimuth)

    @property
    def incidence_deg(self) -> float:
        return math.degrees(self.incidence)

    @property
    def is_daytime(self) -> bool:
        return self.altitude > 0.0


@beartype
def hour_angle(hour_of_day: float) -> float:
    """Hour angle [deg]: 15 deg per hour from solar noon, -15 at 11:00."""
    return (hour_of_day - 12.0) * 15.0


@beartype
def solar_declination(day_of_year: int) -> float:
    """Solar declination [rad] (eq. 16b)."""
    p = math.radians(((284.0 + day_of_year) / 365.0) * 360.0)
    return math.radians(DECLINATION_AMPLITUDE * math.sin(p))


@beartype
def solar_altitude(latitude: float, declination: float, omega: float) -> float:
    """Solar altitude Hc [rad] (eq. 16a).

    Args:
        latitude: Latitude [rad]
        declination: Solar declination [rad]
        omega: Hour angle [rad]
    """
    arg = (
        math.cos(latitude) * math.cos(declination) * math.cos(omega)
        + math.sin(latitude) * math.sin(declination)
    )
    return math.asin(max(-1.0, min(1.0, arg)))


def _azimuth_variable(latitude: float, declination: float, omega: float) -> float:
    numerator = math.sin(omega)
    denominator = math.sin(latitude) * math.cos(omega) - math.cos(latitude) * math.tan(
        declination
    )
    if denominator == 0.0:
        if numerator == 0.0:
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


@beartype
def solar_azimuth(latitude: float, declination: float, omega_deg: float) -> float:
    """Solar azimuth Zc [rad] (eq. 17a/17b).

    The azimuth constant C is picked from the quadrant of the hour angle and
    the sign of the azimuth variable chi.

    Args:
        latitude: Latitude [rad]
        declination: Solar declination [rad]
        omega_deg: Hour angle [deg]
    """
    chi = _azimuth_variable(latitude, declination, math.radians(omega_deg))

    if -180.0 <= omega_deg < 0.0:
        constant = 0.0 if chi >= 0.0 else 180.0
    else:
        constant = 180.0 if chi < 0.0 else 360.0

    return math.radians(constant) + math.atan(chi)


@beartype
def incidence_angle(altitude: float, azimuth: float, line_azimuth_deg: float) -> float:
    """Effective angle of incidence theta of the sun's rays [rad] (eq. 9)."""
    return math.acos(math.cos(altitude) * math.cos(azimuth - math.radians(line_azimuth_deg)))


@beartype
def solar_position(environment: EnvironmentSpec) -> SolarPosition:
    """Sun position for the date, time and site of an environment."""
    latitude = math.radians(environment.latitude)
    omega_deg = hour_angle(environment.hour_of_day)
    declination = solar_declination(environment.day_of_year)

    altitude = solar_altitude(latitude, declination, math.radians(omega_deg))
    azimuth = solar_azimuth(latitude, declination, omega_deg)

    return SolarPosition(
        hour_angle=math.radians(omega_deg),
        declination=declination,
        altitude=altitude,
        azimuth=azimuth,
        incidence=incidence_angle(altitude, azimuth, environment.line_azimuth),
    )
