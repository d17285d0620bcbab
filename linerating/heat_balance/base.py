"""Heat-balance model protocol and shared helpers.

IEEE 738 balances the heat flows per unit length of a bare conductor:

    I^2 R(Tc) + qs = qc + qr

where qs is solar heat gain, qc convective and qr radiated heat loss. A
HeatBalanceModel supplies qc, qr and qs in a fixed unit convention; the
resistance comes from the ConductorSpec. The solvers in
linerating.steady_state and linerating.transient only ever talk to this
protocol, so the US customary and metric variants are interchangeable.
"""

import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from linerating._typecheck import beartype
from linerating.conductor import ConductorSpec
from linerating.environment import EnvironmentSpec
from linerating.units import UnitSystem

# =============================================================================
# Model Protocol
# =============================================================================


@runtime_checkable
class HeatBalanceModel(Protocol):
    """Protocol for IEEE 738 heat-flow evaluators."""

    units: UnitSystem

    def convective_loss(
        self,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
        temperature: float,
    ) -> float:
        """Convective heat loss qc at a conductor temperature."""
        ...

    def radiated_loss(
        self,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
        temperature: float,
    ) -> float:
        """Radiated heat loss qr at a conductor temperature."""
        ...

    def solar_gain(
        self,
        environment: EnvironmentSpec,
        conductor: ConductorSpec,
    ) -> float:
        """Solar heat gain qs."""
        ...


# =============================================================================
# Heat Balance Breakdown
# =============================================================================


@beartype
@dataclass(frozen=True)
class HeatBalance:
    """Heat flows per unit length at one conductor temperature.

    Attributes:
        temperature: Conductor temperature [degC]
        convective_loss: qc [W/length]
        radiated_loss: qr [W/length]
        solar_gain: qs [W/length]
        resistance: R(Tc) [ohm/length]
    """

    temperature: float
    convective_loss: float
    radiated_loss: float
    solar_gain: float
    resistance: float

    @property
    def net_loss(self) -> float:
        """qc + qr - qs, the heat the current has to supply at equilibrium."""
        return self.convective_loss + self.radiated_loss - self.solar_gain

    def resistive_heating(self, current: float) -> float:
        """Joule heating I^2 R at this temperature [W/length]."""
        return self.resistance * (current * current)

    def net_heating(self, current: float) -> float:
        """Net heat into the conductor at a current, positive when warming."""
        return (
            self.resistive_heating(current)
            + self.solar_gain
            - self.convective_loss
            - self.radiated_loss
        )


@beartype
def heat_balance(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    temperature: float,
    model: HeatBalanceModel,
) -> HeatBalance:
    """Evaluate every term of the heat balance at a conductor temperature."""
    return HeatBalance(
        temperature=temperature,
        convective_loss=model.convective_loss(environment, conductor, temperature),
        radiated_loss=model.radiated_loss(environment, conductor, temperature),
        solar_gain=model.solar_gain(environment, conductor),
        resistance=conductor.resistance_at(temperature),
    )


# =============================================================================
# Shared Helpers
# =============================================================================


def wind_direction_factor(angle_rad: float) -> float:
    """Wind direction factor K_angle (eq. 4a), angle between wind and axis."""
    return (
        1.194
        - math.cos(angle_rad)
        + 0.194 * math.cos(2.0 * angle_rad)
        + 0.368 * math.sin(2.0 * angle_rad)
    )


def solar_intensity(altitude_deg: float, coefficients: tuple[float, ...]) -> float:
    """Total solar and sky radiated heat intensity Qs (eq. 18).

    Sixth-order polynomial in solar altitude with coefficients A..G.
    """
    a, b, c, d, e, f, g = coefficients
    hc = altitude_deg
    return (
        a
        + b * hc
        + c * hc**2
        + d * hc**3
        + e * hc**4
        + f * hc**5
        + g * hc**6
    )


def elevation_multiplier(elevation: float, thresholds: tuple[float, float, float]) -> float:
    """Solar heat multiplying factor for high altitudes (Table H.5).

    Args:
        elevation: Conductor elevation
        thresholds: Elevations above which the factor is 1.15, 1.25 and 1.30
    """
    low, mid, high = thresholds
    if elevation > high:
        return 1.3
    if elevation > mid:
        return 1.25
    if elevation > low:
        return 1.15
    return 1.0
