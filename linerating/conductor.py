"""Bare overhead conductor properties.

A ConductorSpec carries everything the heat balance needs to know about the
conductor itself: outer diameter, surface absorptivity and emissivity, the
two-point AC resistance used for linear interpolation, and (for transient
work) the heat capacity per unit length.

Values are bare floats in the unit convention of the heat-balance model they
are used with. The catalog below stores datasheet values (inches, ohm/mile)
and converts them through linerating.units on the way out.

Example:
    >>> from linerating.conductor import get_conductor
    >>> from linerating.units import US_CUSTOMARY_UNITS
    >>>
    >>> drake = get_conductor("drake", units=US_CUSTOMARY_UNITS)
    >>> print(f"R(100 C): {drake.resistance_at(100.0):.4e} ohm/ft")
"""

from dataclasses import dataclass
from typing import Any

from linerating._typecheck import beartype
from linerating.units import (
    US_CUSTOMARY_UNITS,
    Quantity,
    UnitSystem,
    inches,
    kg_per_meter,
    ohms_per_mile,
)

# =============================================================================
# Conductor Specification
# =============================================================================


@beartype
@dataclass(frozen=True)
class ConductorSpec:
    """Physical description of a bare stranded conductor.

    Attributes:
        diameter: Outer diameter D0 [ft or m]
        absorptivity: Solar absorptivity alpha (0 to 1)
        emissivity: Emissivity epsilon (0 to 1)
        t_low: Lower reference temperature for resistance [degC]
        t_high: Upper reference temperature for resistance [degC]
        r_low: AC resistance at t_low [ohm/ft or ohm/m]
        r_high: AC resistance at t_high [ohm/ft or ohm/m]
        heat_capacity: Total heat capacity m*Cp [J/(ft*degC) or J/(m*degC)],
            only needed for transient calculations
        name: Optional label used in summaries
    """

    diameter: float
    absorptivity: float
    emissivity: float
    t_low: float
    t_high: float
    r_low: float
    r_high: float
    heat_capacity: float | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.diameter <= 0:
            raise ValueError(f"Conductor diameter must be positive, got {self.diameter}")
        if not 0.0 <= self.absorptivity <= 1.0:
            raise ValueError(f"Absorptivity must be in [0, 1], got {self.absorptivity}")
        if not 0.0 <= self.emissivity <= 1.0:
            raise ValueError(f"Emissivity must be in [0, 1], got {self.emissivity}")
        if self.t_high <= self.t_low:
            raise ValueError(
                f"t_high ({self.t_high}) must be greater than t_low ({self.t_low})"
            )
        if self.r_high <= self.r_low:
            raise ValueError(
                f"Resistance must increase with temperature: "
                f"r_low={self.r_low}, r_high={self.r_high}"
            )
        if self.heat_capacity is not None and self.heat_capacity <= 0:
            raise ValueError(f"Heat capacity must be positive, got {self.heat_capacity}")

    @property
    def resistance_slope(self) -> float:
        """Change in resistance per degree [ohm/(length*degC)]."""
        return (self.r_high - self.r_low) / (self.t_high - self.t_low)

    def resistance_at(self, temperature: float) -> float:
        """AC resistance at a conductor temperature, by linear interpolation.

        Extrapolates linearly outside [t_low, t_high] (IEEE 738 eq. 10).
        """
        return (self.resistance_slope * (temperature - self.t_low)) + self.r_low

    def with_heat_capacity(self, heat_capacity: float) -> "ConductorSpec":
        """Copy of this conductor with a heat capacity set."""
        return ConductorSpec(
            diameter=self.diameter,
            absorptivity=self.absorptivity,
            emissivity=self.emissivity,
            t_low=self.t_low,
            t_high=self.t_high,
            r_low=self.r_low,
            r_high=self.r_high,
            heat_capacity=heat_capacity,
            name=self.name,
        )

    @classmethod
    def from_quantities(
        cls,
        diameter: Quantity,
        r_low: Quantity,
        r_high: Quantity,
        t_low: Quantity,
        t_high: Quantity,
        absorptivity: float = 0.8,
        emissivity: float = 0.8,
        heat_capacity: Quantity | None = None,
        units: UnitSystem = US_CUSTOMARY_UNITS,
        name: str = "",
    ) -> "ConductorSpec":
        """Build a conductor from unit-tagged values, converted into `units`."""
        return cls(
            diameter=units.magnitude(diameter),
            absorptivity=absorptivity,
            emissivity=emissivity,
            t_low=units.magnitude(t_low),
            t_high=units.magnitude(t_high),
            r_low=units.magnitude(r_low),
            r_high=units.magnitude(r_high),
            heat_capacity=(
                units.magnitude(heat_capacity) if heat_capacity is not None else None
            ),
            name=name,
        )


# =============================================================================
# Conductor Catalog
# =============================================================================

# Datasheet values for common ACSR conductors.
# diameter_in = outside diameter [in]
# r_low, r_high = AC resistance [ohm/mi] at t_low, t_high [degC]
# aluminum_kg_per_m, steel_kg_per_m = approximate mass per unit length by strand type

CONDUCTORS: dict[str, dict[str, Any]] = {
    "oriole": {
        "name": "336.4 kcmil ACSR 30/7 Oriole",
        "diameter_in": 0.741,
        "t_low": 25.0,
        "t_high": 50.0,
        "r_low": 0.2708,
        "r_high": 0.2974,
        "aluminum_kg_per_m": 0.4646,
        "steel_kg_per_m": 0.3228,
    },
    "drake": {
        "name": "795 kcmil ACSR 26/7 Drake",
        "diameter_in": 1.108,
        "t_low": 25.0,
        "t_high": 50.0,
        "r_low": 0.1166,
        "r_high": 0.1278,
        "aluminum_kg_per_m": 1.116,
        "steel_kg_per_m": 0.5119,
    },
    "drake_ieee738": {
        # Resistances used by the worked examples in IEEE 738
        "name": "795 kcmil ACSR 26/7 Drake (IEEE 738 example)",
        "diameter_in": 1.108,
        "t_low": 25.0,
        "t_high": 75.0,
        "r_low": 0.1166,
        "r_high": 0.1390,
        "aluminum_kg_per_m": 1.116,
        "steel_kg_per_m": 0.5119,
    },
    "falcon": {
        "name": "1590 kcmil ACSR 54/19 Falcon",
        "diameter_in": 1.545,
        "t_low": 25.0,
        "t_high": 50.0,
        "r_low": 0.0613,
        "r_high": 0.0678,
        "aluminum_kg_per_m": 2.2271,
        "steel_kg_per_m": 0.8338,
    },
}

# Specific heat of strand materials [J/(kg*degC)] at 25 C
HEAT_MATERIALS: dict[str, float] = {
    "aluminum": 897.0,
    "steel": 481.0,
    "copper": 385.0,
}


@beartype
def list_conductors() -> list[str]:
    """List available conductor identifiers."""
    return sorted(CONDUCTORS.keys())


@beartype
def get_conductor(
    name: str,
    units: UnitSystem = US_CUSTOMARY_UNITS,
    absorptivity: float = 0.8,
    emissivity: float = 0.8,
    with_heat_capacity: bool = True,
) -> ConductorSpec:
    """Look up a catalog conductor and express it in a unit system.

    Args:
        name: Conductor identifier (case-insensitive), see list_conductors()
        units: Unit convention of the heat-balance model it will be used with
        absorptivity: Surface absorptivity (0.5 new, 0.8-0.9 weathered)
        emissivity: Surface emissivity
        with_heat_capacity: Fill heat_capacity from the strand masses

    Raises:
        ValueError: If the conductor is not in the catalog
    """
    key = name.lower().replace(" ", "_").replace("-", "_")
    if key not in CONDUCTORS:
        available = ", ".join(list_conductors())
        raise ValueError(f"Unknown conductor: {name!r}. Available: {available}")

    data = CONDUCTORS[key]
    heat_capacity = None
    if with_heat_capacity:
        heat_capacity = conductor_heat_capacity(
            {
                "aluminum": kg_per_meter(data["aluminum_kg_per_m"]),
                "steel": kg_per_meter(data["steel_kg_per_m"]),
            },
            units=units,
        )

    return ConductorSpec(
        diameter=units.magnitude(inches(data["diameter_in"])),
        absorptivity=absorptivity,
        emissivity=emissivity,
        t_low=data["t_low"],
        t_high=data["t_high"],
        r_low=units.magnitude(ohms_per_mile(data["r_low"])),
        r_high=units.magnitude(ohms_per_mile(data["r_high"])),
        heat_capacity=heat_capacity,
        name=data["name"],
    )


@beartype
def conductor_heat_capacity(
    masses: dict[str, Quantity],
    units: UnitSystem = US_CUSTOMARY_UNITS,
) -> float:
    """Total heat capacity m*Cp of a conductor per unit length.

    Sums mass per unit length times specific heat over the strand materials
    (IEEE 738 eq. 24).

    Args:
        masses: Mass per unit length of each material, keyed by HEAT_MATERIALS name
        units: Unit convention for the result

    Returns:
        Heat capacity [J/(ft*degC) or J/(m*degC)]
    """
    total = 0.0
    for material, mass in masses.items():
        if material not in HEAT_MATERIALS:
            available = ", ".join(sorted(HEAT_MATERIALS))
            raise ValueError(f"Unknown material: {material!r}. Available: {available}")
        total += units.magnitude(mass) * HEAT_MATERIALS[material]
    return total
