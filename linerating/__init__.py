"""Linerating - IEEE 738 thermal ratings for bare overhead conductors.

This package computes how much current an overhead line can carry without
overheating: the steady-state rating at a conductor temperature, the
steady temperature reached at a current, and the transient rating for a
bounded time window.

Example:
    >>> from linerating import EnvironmentSpec, get_conductor, thermal_rating
    >>>
    >>> env = EnvironmentSpec(
    ...     ambient_temperature=40.0,
    ...     wind_speed=2.0,  # ft/s
    ...     wind_angle=90.0,
    ...     latitude=30.0,
    ...     month=6, day_of_month=10, hour_of_day=11.0,
    ... )
    >>> drake = get_conductor("drake_ieee738")
    >>> print(f"Rating at 100 C: {thermal_rating(env, drake, 100.0):.0f} A")
"""

__version__ = "0.1.0"

# Conductors
from linerating.conductor import (
    CONDUCTORS,
    ConductorSpec,
    conductor_heat_capacity,
    get_conductor,
    list_conductors,
)

# Ambient conditions
from linerating.environment import Atmosphere, EnvironmentSpec

# Heat balance models
from linerating.heat_balance import (
    METRIC,
    US_CUSTOMARY,
    HeatBalance,
    HeatBalanceModel,
    MetricModel,
    UsCustomaryModel,
)

# Solar geometry
from linerating.solar import SolarPosition, solar_position

# Root finding
from linerating.solver import Bracket, RootResult, SolverConfig, find_root

# Steady state
from linerating.steady_state import (
    conductor_temperature,
    heat_balance,
    rating_mva,
    thermal_rating,
)

# Parametric studies
from linerating.studies import daily_rating_profile, sweep_ratings

# Transient
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

# Units
from linerating.units import METRIC_UNITS, US_CUSTOMARY_UNITS, Quantity, UnitSystem

__all__ = [
    "__version__",
    # Conductors
    "CONDUCTORS",
    "ConductorSpec",
    "conductor_heat_capacity",
    "get_conductor",
    "list_conductors",
    # Ambient conditions
    "Atmosphere",
    "EnvironmentSpec",
    # Heat balance models
    "METRIC",
    "US_CUSTOMARY",
    "HeatBalance",
    "HeatBalanceModel",
    "MetricModel",
    "UsCustomaryModel",
    # Solar geometry
    "SolarPosition",
    "solar_position",
    # Root finding
    "Bracket",
    "RootResult",
    "SolverConfig",
    "find_root",
    # Steady state
    "conductor_temperature",
    "heat_balance",
    "rating_mva",
    "thermal_rating",
    # Parametric studies
    "daily_rating_profile",
    "sweep_ratings",
    # Transient
    "StepFunction",
    "TransientResult",
    "euler_step",
    "heun_step",
    "rk4_step",
    "temperature_rise",
    "temperature_trajectory",
    "transient_rating",
    # Units
    "METRIC_UNITS",
    "US_CUSTOMARY_UNITS",
    "Quantity",
    "UnitSystem",
]
