"""Transient conductor heating and transient ratings.

After a step change in current the conductor temperature follows

    m*Cp dTc/dt = I^2 R(Tc) + qs - qc(Tc) - qr(Tc)

which is integrated here with a fixed time step. The default integrator is
explicit Euler; Heun and classical RK4 steps are available for the same
signature and can be passed as ``integrator=``.

transient_rating inverts temperature_rise over current: the largest constant
current that keeps the conductor below a maximum temperature for a number of
steps. Temperature rise never decreases with current, so the same
bracket-and-bisect root finder as the steady-state solver applies.

Example:
    >>> from linerating import EnvironmentSpec, get_conductor
    >>> from linerating.transient import temperature_trajectory, transient_rating
    >>>
    >>> env = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0)
    >>> drake = get_conductor("drake_ieee738")
    >>> result = temperature_trajectory(env, drake, 100.0, 2000.0, 60.0, 30)
    >>> print(result.summary())
    >>>
    >>> amps = transient_rating(env, drake, 100.0, 150.0, 60.0, 15, 0.01)
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np
import polars as pl
from numpy.typing import NDArray
from tqdm import tqdm

from linerating._typecheck import beartype
from linerating.conductor import ConductorSpec
from linerating.environment import EnvironmentSpec
from linerating.heat_balance import US_CUSTOMARY, HeatBalanceModel
from linerating.solver import Bracket, SolverConfig, find_root

logger = logging.getLogger(__name__)

# Initial current bracket for the transient rating search [A]
CURRENT_SEARCH_CEILING = 4096.0


# =============================================================================
# Integrators
# =============================================================================


@runtime_checkable
class StepFunction(Protocol):
    """Advances the conductor temperature by one time step.

    Args:
        temperature: Temperature at the start of the step [degC]
        rate: Net heating rate per unit length as a function of temperature
        dt: Step duration [s]
        heat_capacity: m*Cp per unit length

    Returns:
        Temperature at the end of the step [degC]
    """

    def __call__(
        self,
        temperature: float,
        rate: Callable[[float], float],
        dt: float,
        heat_capacity: float,
    ) -> float: ...


def euler_step(
    temperature: float,
    rate: Callable[[float], float],
    dt: float,
    heat_capacity: float,
) -> float:
    """Explicit Euler step (IEEE 738 eq. 23 discretised)."""
    return temperature + rate(temperature) * dt / heat_capacity


def heun_step(
    temperature: float,
    rate: Callable[[float], float],
    dt: float,
    heat_capacity: float,
) -> float:
    """Heun (improved Euler) step, second order."""
    k1 = rate(temperature) / heat_capacity
    k2 = rate(temperature + dt * k1) / heat_capacity
    return temperature + dt / 2 * (k1 + k2)


def rk4_step(
    temperature: float,
    rate: Callable[[float], float],
    dt: float,
    heat_capacity: float,
) -> float:
    """Classical fourth-order Runge-Kutta step."""
    k1 = rate(temperature) / heat_capacity
    k2 = rate(temperature + dt / 2 * k1) / heat_capacity
    k3 = rate(temperature + dt / 2 * k2) / heat_capacity
    k4 = rate(temperature + dt * k3) / heat_capacity
    return temperature + (dt / 6) * (k1 + 2 * k2 + 2 * k3 + k4)


# =============================================================================
# Heating Rate
# =============================================================================


@dataclass(frozen=True)
class _HeatingRate:
    """Net heat flow into the conductor at a fixed current [W/length].

    Solar gain does not depend on conductor temperature, so it is evaluated
    once per run.
    """

    environment: EnvironmentSpec
    conductor: ConductorSpec
    current: float
    model: HeatBalanceModel
    solar_gain: float

    @classmethod
    def build(
        cls,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
        current: float,
        model: HeatBalanceModel,
    ) -> "_HeatingRate":
        return cls(
            environment=environment,
            conductor=conductor,
            current=current,
            model=model,
            solar_gain=model.solar_gain(environment, conductor),
        )

    def resistive_heating(self, temperature: float) -> float:
        return self.conductor.resistance_at(temperature) * (self.current * self.current)

    def convective_loss(self, temperature: float) -> float:
        return self.model.convective_loss(self.environment, self.conductor, temperature)

    def radiated_loss(self, temperature: float) -> float:
        return self.model.radiated_loss(self.environment, self.conductor, temperature)

    def __call__(self, temperature: float) -> float:
        return (
            self.resistive_heating(temperature)
            + self.solar_gain
            - self.convective_loss(temperature)
            - self.radiated_loss(temperature)
        )


def _require_heat_capacity(conductor: ConductorSpec) -> float:
    if conductor.heat_capacity is None:
        raise ValueError(
            "Transient calculations need conductor.heat_capacity; "
            "use ConductorSpec.with_heat_capacity() or get_conductor()"
        )
    return conductor.heat_capacity


def _validate_stepping(step_duration: float, steps: int) -> None:
    if not step_duration > 0:
        raise ValueError(f"Step duration must be positive, got {step_duration}")
    if steps < 0:
        raise ValueError(f"Number of steps must be non-negative, got {steps}")


def _march(
    initial_temperature: float,
    rate: Callable[[float], float],
    step_duration: float,
    steps: int,
    heat_capacity: float,
    integrator: StepFunction,
) -> Iterator[float]:
    """Yield the temperature after each of `steps` integrator steps."""
    temperature = initial_temperature
    for _ in range(steps):
        temperature = integrator(temperature, rate, step_duration, heat_capacity)
        yield temperature


# =============================================================================
# Temperature Rise
# =============================================================================


@beartype
def temperature_rise(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    initial_temperature: float,
    current: float,
    step_duration: float,
    steps: int,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
    integrator: StepFunction = euler_step,
) -> float:
    """Temperature change after holding a constant current for `steps` steps.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties, heat_capacity required
        initial_temperature: Conductor temperature at t = 0 [degC]
        current: Constant conductor current [A]
        step_duration: Time step [s]
        steps: Number of steps
        model: Heat-balance model (unit convention of the inputs)
        integrator: Step function, explicit Euler by default

    Returns:
        Final minus initial temperature [degC]; 0.0 when the initial
        temperature is below ambient

    Raises:
        ValueError: If heat_capacity is missing, step_duration <= 0 or steps < 0
    """
    heat_capacity = _require_heat_capacity(conductor)
    _validate_stepping(step_duration, steps)

    if initial_temperature < environment.ambient_temperature:
        return 0.0

    rate = _HeatingRate.build(environment, conductor, current, model)
    final_temperature = initial_temperature
    for final_temperature in _march(
        initial_temperature, rate, step_duration, steps, heat_capacity, integrator
    ):
        pass
    return final_temperature - initial_temperature


# =============================================================================
# Trajectory
# =============================================================================


@beartype
@dataclass(frozen=True)
class TransientResult:
    """Temperature history of a conductor under a constant current.

    Arrays have n_steps + 1 entries; index 0 is the initial state. Heat flows
    are per unit length in the model's unit convention.

    Attributes:
        time: Elapsed time [s]
        temperature: Conductor temperature [degC]
        resistive_heating: I^2 R(Tc)
        solar_gain: qs
        convective_loss: qc
        radiated_loss: qr
        current: Conductor current [A]
        step_duration: Time step [s]
    """

    time: NDArray[np.float64]
    temperature: NDArray[np.float64]
    resistive_heating: NDArray[np.float64]
    solar_gain: NDArray[np.float64]
    convective_loss: NDArray[np.float64]
    radiated_loss: NDArray[np.float64]
    current: float
    step_duration: float

    @property
    def n_steps(self) -> int:
        return len(self.time) - 1

    @property
    def duration(self) -> float:
        """Total simulated time [s]."""
        return float(self.time[-1])

    @property
    def initial_temperature(self) -> float:
        return float(self.temperature[0])

    @property
    def final_temperature(self) -> float:
        return float(self.temperature[-1])

    @property
    def temperature_rise(self) -> float:
        return self.final_temperature - self.initial_temperature

    @property
    def peak_temperature(self) -> float:
        return float(np.max(self.temperature))

    def exceeds(self, limit: float) -> bool:
        """Whether the conductor goes above a temperature at any step."""
        return self.peak_temperature > limit

    def summary(self) -> str:
        """Human-readable summary of the run."""
        lines = [
            "Transient Heating",
            "=" * 50,
            f"Current:             {self.current:.1f} A",
            f"Steps:               {self.n_steps} x {self.step_duration:g} s "
            f"({self.duration / 60.0:.1f} min)",
            f"Initial temperature: {self.initial_temperature:.2f} C",
            f"Final temperature:   {self.final_temperature:.2f} C",
            f"Temperature rise:    {self.temperature_rise:.2f} C",
            f"Peak temperature:    {self.peak_temperature:.2f} C",
        ]
        if self.n_steps > 0 and not np.all(np.isfinite(self.temperature)):
            lines.append("WARNING: temperature diverged (non-finite values)")
        return "\n".join(lines)

    def to_dataframe(self) -> pl.DataFrame:
        """Export the history to a Polars DataFrame, one row per time point."""
        return pl.DataFrame({
            "time": self.time,
            "temperature": self.temperature,
            "resistive_heating": self.resistive_heating,
            "solar_gain": self.solar_gain,
            "convective_loss": self.convective_loss,
            "radiated_loss": self.radiated_loss,
        })


@beartype
def temperature_trajectory(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    initial_temperature: float,
    current: float,
    step_duration: float,
    steps: int,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
    integrator: StepFunction = euler_step,
    progress: bool = False,
) -> TransientResult:
    """Record the temperature and heat flows at every step.

    Runs the same integration as temperature_rise, so
    ``result.temperature_rise == temperature_rise(...)`` for identical
    arguments. Unlike temperature_rise, an initial temperature below ambient
    is integrated rather than short-circuited.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties, heat_capacity required
        initial_temperature: Conductor temperature at t = 0 [degC]
        current: Constant conductor current [A]
        step_duration: Time step [s]
        steps: Number of steps
        model: Heat-balance model (unit convention of the inputs)
        integrator: Step function, explicit Euler by default
        progress: Show a tqdm progress bar

    Returns:
        TransientResult with n_steps + 1 samples
    """
    heat_capacity = _require_heat_capacity(conductor)
    _validate_stepping(step_duration, steps)

    rate = _HeatingRate.build(environment, conductor, current, model)

    temperatures = [initial_temperature]
    iterator: Any = _march(
        initial_temperature, rate, step_duration, steps, heat_capacity, integrator
    )
    if progress:
        iterator = tqdm(iterator, desc="Integrating", total=steps)
    temperatures.extend(iterator)

    temperature = np.array(temperatures, dtype=np.float64)
    return TransientResult(
        time=np.arange(steps + 1, dtype=np.float64) * step_duration,
        temperature=temperature,
        resistive_heating=np.array([rate.resistive_heating(t) for t in temperatures]),
        solar_gain=np.full(steps + 1, rate.solar_gain, dtype=np.float64),
        convective_loss=np.array([rate.convective_loss(t) for t in temperatures]),
        radiated_loss=np.array([rate.radiated_loss(t) for t in temperatures]),
        current=current,
        step_duration=step_duration,
    )


# =============================================================================
# Transient Rating
# =============================================================================


@beartype
def transient_rating(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    initial_temperature: float,
    max_temperature: float,
    step_duration: float,
    steps: int,
    tolerance: float,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
    integrator: StepFunction = euler_step,
) -> float:
    """Largest constant current that keeps the conductor under a temperature.

    Args:
        environment: Ambient conditions
        conductor: Conductor properties, heat_capacity required
        initial_temperature: Conductor temperature at t = 0 [degC]
        max_temperature: Temperature allowed after `steps` steps [degC]
        step_duration: Time step [s]
        steps: Number of steps
        tolerance: Width of the final current bracket [A]
        model: Heat-balance model (unit convention of the inputs)
        integrator: Step function, explicit Euler by default

    Returns:
        Current [A]. 0.0 when max_temperature is below initial_temperature
        or the conductor starts below ambient, where the rise is zero for
        every current and no rating exists.

    Raises:
        ValueError: If heat_capacity is missing, step_duration <= 0, steps < 0
            or tolerance <= 0
    """
    _require_heat_capacity(conductor)
    _validate_stepping(step_duration, steps)

    if max_temperature < initial_temperature:
        return 0.0
    if initial_temperature < environment.ambient_temperature:
        return 0.0

    config = SolverConfig(tolerance=tolerance, bracket=Bracket(0.0, CURRENT_SEARCH_CEILING))

    def rise_at(current: float) -> float:
        return temperature_rise(
            environment,
            conductor,
            initial_temperature,
            current,
            step_duration,
            steps,
            model=model,
            integrator=integrator,
        )

    result = find_root(rise_at, max_temperature - initial_temperature, config)
    if result.limit_reached:
        logger.warning(
            "No current raises the conductor from %.2f C to %.2f C in %d steps",
            initial_temperature,
            max_temperature,
            steps,
        )
    return result.value
