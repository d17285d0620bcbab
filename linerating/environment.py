"""Weather and site conditions around an overhead line.

EnvironmentSpec bundles the ambient inputs of the IEEE 738 heat balance:
air temperature, wind, elevation, and either a measured solar irradiance or
the date, time and location needed to compute one.

Example:
    >>> from linerating.environment import Atmosphere, EnvironmentSpec
    >>>
    >>> env = EnvironmentSpec(
    ...     ambient_temperature=40.0,
    ...     wind_speed=2.0,          # ft/s for the US customary model
    ...     wind_angle=90.0,
    ...     atmosphere=Atmosphere.CLEAR,
    ...     latitude=30.0,
    ...     line_azimuth=90.0,       # line runs east-west
    ...     month=6, day_of_month=10, hour_of_day=11.0,
    ... )
    >>> env.computes_solar
    True
"""

import math
from dataclasses import dataclass
from enum import Enum

from linerating._typecheck import beartype
from linerating.units import US_CUSTOMARY_UNITS, Quantity, UnitSystem

# Non-leap year; index 0 is a placeholder so months index from 1
DAYS_IN_MONTH = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class Atmosphere(Enum):
    """Atmospheric clarity, selects the solar intensity polynomial."""

    CLEAR = "clear"
    INDUSTRIAL = "industrial"


@beartype
def day_of_year(month: int, day_of_month: int) -> int:
    """Day number within a non-leap year (1 January is day 1)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    return day_of_month + sum(DAYS_IN_MONTH[1:month])


@beartype
def normalize_wind_angle(angle: float) -> float:
    """Reflect a wind/conductor angle [deg] into the range [0, 90].

    Wind at 120 deg to the conductor axis cools exactly like wind at 60 deg.
    """
    return 90.0 - abs(angle % 180.0 - 90.0)


@beartype
@dataclass(frozen=True)
class EnvironmentSpec:
    """Ambient conditions for a heat-balance evaluation.

    Lengths and speeds are in the unit convention of the heat-balance model
    in use (ft and ft/s for US customary, m and m/s for metric).

    Attributes:
        ambient_temperature: Air temperature Ta [degC]
        wind_speed: Wind speed Vw
        wind_angle: Angle between wind and conductor axis [deg]
        solar_irradiance: Total solar irradiance on the conductor, or None to
            compute it from the date, time and location fields
        elevation: Conductor elevation above sea level He
        atmosphere: Atmospheric clarity for computed solar intensity
        latitude: Site latitude [deg]
        line_azimuth: Azimuth of the line Zl [deg], 90 for an east-west line
        month: Month, 1 to 12
        day_of_month: Day of month, 1 to 31
        hour_of_day: Local solar time [h], e.g. 11.0 for 11:00
    """

    ambient_temperature: float
    wind_speed: float
    wind_angle: float = 90.0
    solar_irradiance: float | None = None
    elevation: float = 0.0
    atmosphere: Atmosphere = Atmosphere.CLEAR
    latitude: float = 30.0
    line_azimuth: float = 90.0
    month: int = 6
    day_of_month: int = 10
    hour_of_day: float = 11.0

    def __post_init__(self) -> None:
        if self.wind_speed < 0:
            raise ValueError(f"Wind speed must be non-negative, got {self.wind_speed}")
        if self.elevation < 0:
            raise ValueError(f"Elevation must be non-negative, got {self.elevation}")
        if self.solar_irradiance is not None and self.solar_irradiance < 0:
            raise ValueError(
                f"Solar irradiance must be non-negative, got {self.solar_irradiance}; "
                "pass None to compute it from date and location"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude must be in [-90, 90], got {self.latitude}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        if not 1 <= self.day_of_month <= DAYS_IN_MONTH[self.month]:
            raise ValueError(
                f"Day {self.day_of_month} is not valid for month {self.month}"
            )
        if not 0.0 <= self.hour_of_day < 24.0:
            raise ValueError(f"Hour of day must be in [0, 24), got {self.hour_of_day}")

    @property
    def effective_wind_angle(self) -> float:
        """Wind angle reflected into [0, 90] deg."""
        return normalize_wind_angle(self.wind_angle)

    @property
    def effective_wind_angle_rad(self) -> float:
        return math.radians(self.effective_wind_angle)

    @property
    def computes_solar(self) -> bool:
        """True when solar heating comes from date, time and location."""
        return self.solar_irradiance is None

    @property
    def day_of_year(self) -> int:
        return day_of_year(self.month, self.day_of_month)

    @classmethod
    def from_quantities(
        cls,
        ambient_temperature: Quantity,
        wind_speed: Quantity,
        elevation: Quantity | None = None,
        solar_irradiance: Quantity | None = None,
        units: UnitSystem = US_CUSTOMARY_UNITS,
        **kwargs,
    ) -> "EnvironmentSpec":
        """Build an environment from unit-tagged values, converted into `units`.

        Remaining fields (angles, date, atmosphere) are passed through as-is.
        """
        return cls(
            ambient_temperature=units.magnitude(ambient_temperature),
            wind_speed=units.magnitude(wind_speed),
            elevation=units.magnitude(elevation) if elevation is not None else 0.0,
            solar_irradiance=(
                units.magnitude(solar_irradiance) if solar_irradiance is not None else None
            ),
            **kwargs,
        )
