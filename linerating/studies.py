"""Parametric rating studies.

Sweeps EnvironmentSpec fields over a grid of values and tabulates the
steady-state thermal rating at each point. Field names are discovered from
the dataclass itself, so any environment field can be varied.

Example:
    >>> import numpy as np
    >>> from linerating import EnvironmentSpec, get_conductor
    >>> from linerating.studies import sweep_ratings
    >>>
    >>> df = sweep_ratings(
    ...     EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0),
    ...     get_conductor("drake_ieee738"),
    ...     vary={
    ...         "ambient_temperature": [20.0, 30.0, 40.0],
    ...         "wind_speed": np.linspace(1.0, 6.0, 6),
    ...     },
    ...     conductor_temperature=100.0,
    ... )
    >>> print(df.sort("rating"))
"""

import dataclasses
import itertools
from collections.abc import Sequence
from typing import Any

import numpy as np
import polars as pl
from tqdm import tqdm

from linerating._typecheck import beartype
from linerating.conductor import ConductorSpec
from linerating.environment import Atmosphere, EnvironmentSpec
from linerating.heat_balance import US_CUSTOMARY, HeatBalanceModel
from linerating.steady_state import thermal_rating


def _environment_fields() -> list[str]:
    return [f.name for f in dataclasses.fields(EnvironmentSpec)]


def _validate_vary(vary: dict[str, Any]) -> None:
    valid_fields = _environment_fields()
    for name, values in vary.items():
        if name not in valid_fields:
            raise ValueError(
                f"Parameter '{name}' not found in EnvironmentSpec. "
                f"Valid fields: {valid_fields}"
            )
        if len(values) == 0:
            raise ValueError(f"No values given for parameter '{name}'")


def _field_value(value: Any) -> Any:
    # numpy scalars would fail the dataclass's float/int checks
    if isinstance(value, np.generic):
        return value.item()
    return value


def _column_value(value: Any) -> Any:
    """Plain value for a DataFrame cell."""
    if isinstance(value, Atmosphere):
        return value.value
    return value


def _grid(vary: dict[str, Any]) -> list[dict[str, Any]]:
    keys = list(vary.keys())
    value_lists = [[_field_value(v) for v in vary[k]] for k in keys]
    return [dict(zip(keys, combo, strict=True)) for combo in itertools.product(*value_lists)]


@beartype
def sweep_ratings(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    vary: dict[str, Sequence[Any] | np.ndarray],
    conductor_temperature: float,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
    progress: bool = False,
) -> pl.DataFrame:
    """Thermal rating over the Cartesian product of environment values.

    Args:
        environment: Base environment; unvaried fields keep these values
        conductor: Conductor properties
        vary: EnvironmentSpec field name mapped to the values to try
        conductor_temperature: Conductor temperature to rate at [degC]
        model: Heat-balance model (unit convention of the inputs)
        progress: Show a tqdm progress bar

    Returns:
        DataFrame with one column per varied field plus ``rating`` [A],
        one row per grid point in product order

    Raises:
        ValueError: If a field name is unknown or has no values
    """
    _validate_vary(vary)
    grid = _grid(vary)

    iterator: Any = grid
    if progress:
        iterator = tqdm(grid, desc="Rating sweep", total=len(grid))

    rows: list[dict[str, Any]] = []
    for params in iterator:
        env = dataclasses.replace(environment, **params)
        rating = thermal_rating(env, conductor, conductor_temperature, model=model)
        row = {name: _column_value(value) for name, value in params.items()}
        row["rating"] = rating
        rows.append(row)

    return pl.DataFrame(rows)


@beartype
def daily_rating_profile(
    environment: EnvironmentSpec,
    conductor: ConductorSpec,
    conductor_temperature: float,
    hours: Sequence[float] | np.ndarray | None = None,
    *,
    model: HeatBalanceModel = US_CUSTOMARY,
) -> pl.DataFrame:
    """Thermal rating through a day as the sun moves.

    Only meaningful with a computed solar irradiance; with a fixed
    irradiance every hour gives the same rating.

    Args:
        environment: Environment with the date and location of interest
        conductor: Conductor properties
        conductor_temperature: Conductor temperature to rate at [degC]
        hours: Local solar hours to evaluate, whole hours 0-23 by default
        model: Heat-balance model (unit convention of the inputs)

    Returns:
        DataFrame with columns ``hour_of_day`` and ``rating``
    """
    if hours is None:
        hours = [float(h) for h in range(24)]
    return sweep_ratings(
        environment,
        conductor,
        {"hour_of_day": hours},
        conductor_temperature,
        model=model,
    )
