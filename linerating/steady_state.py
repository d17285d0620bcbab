"""Steady-state thermal rating of a bare overhead conductor.

At thermal equilibrium the Joule heating balances the net heat loss:

    I^2 R(Tc) = qc(Tc) + qr(Tc) - qs

thermal_rating solves this for I at a given conductor temperature (closed
form). conductor_temperature solves it for Tc at a given current by
inverting thermal_rating, which never decreases with temperature, with
linerating.solver.find_root.

Physically meaningless requests return 0.0 rather than raising: a conductor
colder than the air, a negative current, or a sun that heats the conductor
more than the air can cool it.

Example:
    >>> from linerating import EnvironmentSpec, get_conductor
    >>> from linerating.steady_state import conductor_temperature, thermal_rating
    >>>
    >>> env = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0)
    >>> drake = get_conductor("drake_ieee738")
    >>> rating = thermal_rating(env, drake, 100.0)
    >>> tc = conductor_temperature(env, drake, rating, 0.01)
    >>> print(f"{rating:.0f} A -> {tc:.2f} C")
"""

import logging
import math

import numpy as np

from linerating._typecheck import beartype
from linerating.conductor import ConductorSpec
from linerating.environment import EnvironmentSpec
from linerating.heat_balance import US_CUSTOMARY, HeatBalance, HeatBalanceModel
from linerating.heat_balance import heat_balance as _evaluate_heat_balance
from linerating.solver import Bracket, SolverConfig, find_root

logger = logging.getLogger(__name__)

# Initial upper end of the temperature bracket [degC]
TEMPERATURE_SEARCH_CEILING = 256.0


# =============================================================================
# Heat Balance
# =============================================================================


@beartype
def heat_balance(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    temperature: float,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
) -> HeatBalance:
    """Every term of the heat balance at a conductor temperature.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties
        temperature: Conductor temperature [degC]
        model: Heat-balance model (unit convention of the inputs)

    Returns:
        HeatBalance with qc, qr, qs and R(Tc)
    """
    return _evaluate_heat_balance(environment, conductor, temperature, model)


# =============================================================================
# Rating and Temperature
# =============================================================================


@beartype
def thermal_rating(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    conductor_temperature: float,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
) -> float:
    """Steady current that holds the conductor at a temperature.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties
        conductor_temperature: Target conductor temperature Tc [degC]
        model: Heat-balance model (unit convention of the inputs)

    Returns:
        Current [A]. 0.0 when Tc is below ambient or when solar gain exceeds
        the combined convective and radiated loss.
    """
    if conductor_temperature < environment.ambient_temperature:
        return 0.0

    balance = _evaluate_heat_balance(environment, conductor, conductor_temperature, model)
    net_loss = balance.net_loss
    if net_loss < 0:
        return 0.0

    with np.errstate(invalid="ignore", divide="ignore"):
        return float(np.sqrt(np.float64(net_loss) / balance.resistance))


@beartype
def conductor_temperature(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    current: float,
    tolerance: float,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
) -> float:
    """Steady conductor temperature produced by a constant current.

    Searches upward from ambient, doubling the upper bound until the rating
    at that temperature reaches the current, then bisects.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties
        current: Conductor current [A]
        tolerance: Width of the final temperature bracket [degC]
        model: Heat-balance model (unit convention of the inputs)

    Returns:
        Conductor temperature [degC], or 0.0 for a negative current

    Raises:
        ValueError: If tolerance is not positive
    """
    if current < 0:
        return 0.0

    ambient = environment.ambient_temperature
    config = SolverConfig(
        tolerance=tolerance,
        bracket=Bracket(ambient, max(TEMPERATURE_SEARCH_CEILING, ambient)),
    )

    def rating_at(temperature: float) -> float:
        return thermal_rating(environment, conductor, temperature, model=model)

    result = find_root(rating_at, current, config)
    if result.limit_reached:
        logger.warning(
            "No conductor temperature reaches %.1f A; returning %.6g C",
            current,
            result.value,
        )
    return result.value


# =============================================================================
# Power Rating
# =============================================================================


@beartype
def rating_mva(current: float, line_voltage_kv: float, phases: int = 3) -> float:
    """Apparent power carried by a line at a current.

    Args:
        current: Line current [A]
        line_voltage_kv: Line-to-line voltage [kV]
        phases: 3 for a three-phase circuit, 1 for single phase

    Returns:
        Apparent power [MVA]

    Raises:
        ValueError: If phases is not 1 or 3
    """
    if phases == 3:
        return math.sqrt(3.0) * current * line_voltage_kv / 1000.0
    if phases == 1:
        return current * line_voltage_kv / 1000.0
    raise ValueError(f"phases must be 1 or 3, got {phases}")
