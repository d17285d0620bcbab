"""Units module for linerating.

Provides a Quantity class for physical quantities with unit conversion, and
the UnitSystem descriptions that tell the rest of the package which
convention a heat-balance model expects.

The solvers themselves work on bare floats in the convention of the model
they are handed. Quantities are used at the boundary, where catalog data or
user input has to be brought into that convention.

Conversions are explicit (.to()), temperatures carry their offset from
kelvin, and every Quantity is frozen and checked by beartype.
"""

import math
from dataclasses import dataclass
from functools import total_ordering

from linerating._typecheck import beartype

# =============================================================================
# Dimension and Unit Definitions
# =============================================================================

DIMENSIONS = {
    "length": "m",
    "time": "s",
    "temperature": "K",
    "velocity": "m/s",
    "angle": "rad",
    "current": "A",
    "mass_per_length": "kg/m",
    "resistance_per_length": "ohm/m",
    "power_per_length": "W/m",
    "irradiance": "W/m^2",
    "heat_capacity_per_length": "J/(m*degC)",
    "dimensionless": "1",
}

# Conversion factors TO base SI unit
# e.g., 1 ft = 0.3048 m, so CONVERSIONS["ft"] = (0.3048, "length")
CONVERSIONS: dict[str, tuple[float, str]] = {
    # Length
    "m": (1.0, "length"),
    "mm": (0.001, "length"),
    "km": (1000.0, "length"),
    "ft": (0.3048, "length"),
    "in": (0.0254, "length"),
    "mi": (1609.344, "length"),
    # Time
    "s": (1.0, "time"),
    "min": (60.0, "time"),
    "hr": (3600.0, "time"),
    # Temperature (offsets in _TEMPERATURE_OFFSETS)
    "K": (1.0, "temperature"),
    "degC": (1.0, "temperature"),
    "degF": (5 / 9, "temperature"),
    # Velocity
    "m/s": (1.0, "velocity"),
    "ft/s": (0.3048, "velocity"),
    "km/h": (1000.0 / 3600.0, "velocity"),
    "mph": (1609.344 / 3600.0, "velocity"),
    # Angle
    "rad": (1.0, "angle"),
    "deg": (math.pi / 180.0, "angle"),
    # Current
    "A": (1.0, "current"),
    "kA": (1000.0, "current"),
    # Mass per unit length
    "kg/m": (1.0, "mass_per_length"),
    "kg/ft": (1.0 / 0.3048, "mass_per_length"),
    "lbm/ft": (0.45359237 / 0.3048, "mass_per_length"),
    # Resistance per unit length
    "ohm/m": (1.0, "resistance_per_length"),
    "ohm/km": (0.001, "resistance_per_length"),
    "ohm/ft": (1.0 / 0.3048, "resistance_per_length"),
    "ohm/mi": (1.0 / 1609.344, "resistance_per_length"),
    # Heat flow per unit length
    "W/m": (1.0, "power_per_length"),
    "W/ft": (1.0 / 0.3048, "power_per_length"),
    # Irradiance
    "W/m^2": (1.0, "irradiance"),
    "W/ft^2": (1.0 / 0.3048**2, "irradiance"),
    # Heat capacity per unit length
    "J/(m*degC)": (1.0, "heat_capacity_per_length"),
    "J/(ft*degC)": (1.0 / 0.3048, "heat_capacity_per_length"),
    # Dimensionless
    "1": (1.0, "dimensionless"),
    "": (1.0, "dimensionless"),
}

# Offset added after scaling to reach kelvin
_TEMPERATURE_OFFSETS: dict[str, float] = {
    "K": 0.0,
    "degC": 273.15,
    "degF": 273.15 - 32.0 * 5 / 9,
}


def _unit_info(unit: str) -> tuple[float, str]:
    """Scale to the SI base unit and dimension of a unit string."""
    try:
        return CONVERSIONS[unit]
    except KeyError:
        raise ValueError(f"Unknown unit: {unit!r}") from None


def _to_si(value: float, unit: str) -> float:
    scale, _ = _unit_info(unit)
    return value * scale + _TEMPERATURE_OFFSETS.get(unit, 0.0)


def _from_si(value: float, unit: str) -> float:
    scale, _ = _unit_info(unit)
    return (value - _TEMPERATURE_OFFSETS.get(unit, 0.0)) / scale


def _convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a value between units of the same dimension."""
    source = _unit_info(from_unit)[1]
    target = _unit_info(to_unit)[1]
    if source != target:
        raise ValueError(f"Cannot convert {from_unit!r} to {to_unit!r}: different dimensions")
    if from_unit == to_unit:
        return value
    return _from_si(_to_si(value, from_unit), to_unit)


# =============================================================================
# Quantity Class
# =============================================================================


@beartype
@total_ordering
@dataclass(frozen=True, slots=True)
class Quantity:
    """A physical quantity with value, unit, and dimension.

    Quantities are immutable. Sums need matching dimensions and never mix
    absolute temperatures; scaling is by plain numbers only. Ordering and
    equality compare SI values.

    Examples:
        >>> d = inches(1.108)
        >>> print(d.to("ft"))
        0.0923333 ft

        >>> r = ohms_per_mile(0.1166).to("ohm/ft")
    """

    value: float | int
    unit: str
    dimension: str

    def __post_init__(self) -> None:
        actual = _unit_info(self.unit)[1]
        if actual != self.dimension:
            raise ValueError(
                f"{self.unit!r} is a {actual} unit, not {self.dimension}"
            )

    def to(self, target_unit: str) -> "Quantity":
        """Same quantity expressed in another unit of its dimension.

        Raises:
            ValueError: If target_unit belongs to another dimension
        """
        return Quantity(_convert(self.value, self.unit, target_unit), target_unit, self.dimension)

    def to_si(self) -> "Quantity":
        return self.to(DIMENSIONS[self.dimension])

    @property
    def si_value(self) -> float:
        """Value in the SI base unit of the dimension, as a bare float."""
        return _to_si(self.value, self.unit)

    def __repr__(self) -> str:
        return f"Quantity({self.value:g} {self.unit}, {self.dimension})"

    def __str__(self) -> str:
        return f"{self.value:g} {self.unit}"

    # -------------------------------------------------------------------------
    # Arithmetic and Comparison
    # -------------------------------------------------------------------------

    def _check_dimension(self, other: "Quantity", action: str) -> None:
        if other.dimension != self.dimension:
            raise ValueError(
                f"Cannot {action} {self.dimension} and {other.dimension}: different dimensions"
            )

    def __add__(self, other: "Quantity") -> "Quantity":
        """Sum in the unit of the left operand."""
        self._check_dimension(other, "add")
        if self.dimension == "temperature":
            raise ValueError("Cannot add two absolute temperatures")
        return Quantity(self.value + other.to(self.unit).value, self.unit, self.dimension)

    def __mul__(self, factor: float | int) -> "Quantity":
        return Quantity(self.value * factor, self.unit, self.dimension)

    __rmul__ = __mul__

    def __truediv__(self, other: "Quantity | float | int") -> "Quantity | float":
        """Scale down by a number, or take the ratio of two like quantities."""
        if isinstance(other, Quantity):
            self._check_dimension(other, "divide")
            return self.si_value / other.si_value
        return Quantity(self.value / other, self.unit, self.dimension)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        if other.dimension != self.dimension:
            return False
        return math.isclose(self.si_value, other.si_value, rel_tol=1e-9)

    def __lt__(self, other: "Quantity") -> bool:
        self._check_dimension(other, "compare")
        return self.si_value < other.si_value

    def __hash__(self) -> int:
        # Equal quantities share a dimension but not necessarily a rounded value
        return hash(self.dimension)


# =============================================================================
# Unit Systems
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class UnitSystem:
    """Units a heat-balance model expects for each input and output.

    Temperatures are always degrees Celsius; IEEE 738 writes every variant
    of the heat balance in Celsius.

    Attributes:
        name: Short label for summaries
        length: Conductor diameter and elevation
        velocity: Wind speed
        resistance_per_length: Conductor AC resistance
        power_per_length: Heat flows (convective, radiated, solar, I^2 R)
        irradiance: Directly specified solar irradiance
        heat_capacity_per_length: Conductor m*Cp
        mass_per_length: Conductor mass per unit length
    """

    name: str
    length: str
    velocity: str
    resistance_per_length: str
    power_per_length: str
    irradiance: str
    heat_capacity_per_length: str
    mass_per_length: str

    def __post_init__(self) -> None:
        for field_name, dimension in (
            ("length", "length"),
            ("velocity", "velocity"),
            ("resistance_per_length", "resistance_per_length"),
            ("power_per_length", "power_per_length"),
            ("irradiance", "irradiance"),
            ("heat_capacity_per_length", "heat_capacity_per_length"),
            ("mass_per_length", "mass_per_length"),
        ):
            unit = getattr(self, field_name)
            if _unit_info(unit)[1] != dimension:
                raise ValueError(
                    f"{field_name} unit {unit!r} is not a {dimension} unit"
                )

    def magnitude(self, quantity: Quantity) -> float:
        """Express a quantity in this system's unit for its dimension."""
        unit = self.unit_for(quantity.dimension)
        return float(quantity.to(unit).value)

    def unit_for(self, dimension: str) -> str:
        """Unit this system uses for a dimension."""
        if dimension == "temperature":
            return "degC"
        for field_name in (
            "length",
            "velocity",
            "resistance_per_length",
            "power_per_length",
            "irradiance",
            "heat_capacity_per_length",
            "mass_per_length",
        ):
            unit = getattr(self, field_name)
            if CONVERSIONS[unit][1] == dimension:
                return unit
        if dimension in ("time", "current", "angle", "dimensionless"):
            return {"time": "s", "current": "A", "angle": "deg", "dimensionless": "1"}[
                dimension
            ]
        raise ValueError(f"Unit system {self.name!r} has no unit for {dimension!r}")


US_CUSTOMARY_UNITS = UnitSystem(
    name="US customary",
    length="ft",
    velocity="ft/s",
    resistance_per_length="ohm/ft",
    power_per_length="W/ft",
    irradiance="W/ft^2",
    heat_capacity_per_length="J/(ft*degC)",
    mass_per_length="kg/ft",
)

METRIC_UNITS = UnitSystem(
    name="metric",
    length="m",
    velocity="m/s",
    resistance_per_length="ohm/m",
    power_per_length="W/m",
    irradiance="W/m^2",
    heat_capacity_per_length="J/(m*degC)",
    mass_per_length="kg/m",
)


# =============================================================================
# Factory Functions - Clear, Explicit Quantity Creation
# =============================================================================


@beartype
def meters(value: float | int) -> Quantity:
    """Create a length quantity in meters."""
    return Quantity(value, "m", "length")


@beartype
def millimeters(value: float | int) -> Quantity:
    """Create a length quantity in millimeters."""
    return Quantity(value, "mm", "length")


@beartype
def feet(value: float | int) -> Quantity:
    """Create a length quantity in feet."""
    return Quantity(value, "ft", "length")


@beartype
def inches(value: float | int) -> Quantity:
    """Create a length quantity in inches."""
    return Quantity(value, "in", "length")


@beartype
def seconds(value: float | int) -> Quantity:
    """Create a time quantity in seconds."""
    return Quantity(value, "s", "time")


@beartype
def minutes(value: float | int) -> Quantity:
    """Create a time quantity in minutes."""
    return Quantity(value, "min", "time")


@beartype
def celsius(value: float | int) -> Quantity:
    """Create a temperature quantity in degrees Celsius."""
    return Quantity(value, "degC", "temperature")


@beartype
def fahrenheit(value: float | int) -> Quantity:
    """Create a temperature quantity in degrees Fahrenheit."""
    return Quantity(value, "degF", "temperature")


@beartype
def kelvin(value: float | int) -> Quantity:
    """Create a temperature quantity in kelvin."""
    return Quantity(value, "K", "temperature")


@beartype
def meters_per_second(value: float | int) -> Quantity:
    """Create a velocity quantity in m/s."""
    return Quantity(value, "m/s", "velocity")


@beartype
def feet_per_second(value: float | int) -> Quantity:
    """Create a velocity quantity in ft/s."""
    return Quantity(value, "ft/s", "velocity")


@beartype
def degrees(value: float | int) -> Quantity:
    """Create an angle quantity in degrees."""
    return Quantity(value, "deg", "angle")


@beartype
def amperes(value: float | int) -> Quantity:
    """Create a current quantity in amperes."""
    return Quantity(value, "A", "current")


@beartype
def ohms_per_mile(value: float | int) -> Quantity:
    """Create a resistance-per-length quantity in ohm/mi (datasheet convention)."""
    return Quantity(value, "ohm/mi", "resistance_per_length")


@beartype
def ohms_per_kilometer(value: float | int) -> Quantity:
    """Create a resistance-per-length quantity in ohm/km."""
    return Quantity(value, "ohm/km", "resistance_per_length")


@beartype
def watts_per_square_meter(value: float | int) -> Quantity:
    """Create an irradiance quantity in W/m^2."""
    return Quantity(value, "W/m^2", "irradiance")


@beartype
def kg_per_meter(value: float | int) -> Quantity:
    """Create a mass-per-length quantity in kg/m."""
    return Quantity(value, "kg/m", "mass_per_length")


@beartype
def pounds_per_foot(value: float | int) -> Quantity:
    """Create a mass-per-length quantity in lbm/ft."""
    return Quantity(value, "lbm/ft", "mass_per_length")


@beartype
def dimensionless(value: float | int) -> Quantity:
    """Create a dimensionless quantity."""
    return Quantity(value, "1", "dimensionless")
