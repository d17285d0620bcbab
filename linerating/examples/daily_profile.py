#!/usr/bin/env python
"""Daily rating profile and weather sensitivity for Linerating.

This example shows how a line's rating moves with the weather:

1. Hour-by-hour rating of a Drake conductor through a summer day
2. Sensitivity to wind speed and ambient temperature (parametric sweep)
3. The same rating in metric units
"""

import numpy as np

from linerating import (
    METRIC,
    METRIC_UNITS,
    EnvironmentSpec,
    daily_rating_profile,
    get_conductor,
    sweep_ratings,
    thermal_rating,
)
from linerating.units import celsius, feet_per_second


def main() -> None:
    """Run the daily profile and sensitivity study."""
    print()
    print("╔" + "═" * 68 + "╗")
    print("║" + "DAILY RATING PROFILE".center(68) + "║")
    print("║" + "How Weather Drives Overhead Line Ampacity".center(68) + "║")
    print("╚" + "═" * 68 + "╝")
    print()

    conductor = get_conductor("drake_ieee738")
    environment = EnvironmentSpec(ambient_temperature=40.0, wind_speed=2.0)
    max_temperature = 100.0

    # =========================================================================
    # Hour by Hour
    # =========================================================================

    print("┌" + "─" * 68 + "┐")
    print("│ HOURLY RATING".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")

    profile = daily_rating_profile(environment, conductor, max_temperature)
    for row in profile.iter_rows(named=True):
        bar = "█" * int(row["rating"] / 25)
        print(f"  {row['hour_of_day']:5.1f} h  {row['rating']:7.1f} A  {bar}")

    worst = profile.sort("rating").row(0, named=True)
    print()
    print(f"  Lowest rating: {worst['rating']:.1f} A at {worst['hour_of_day']:.0f}:00")
    print()

    # =========================================================================
    # Weather Sensitivity
    # =========================================================================

    print("┌" + "─" * 68 + "┐")
    print("│ WIND AND AMBIENT SENSITIVITY".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")

    sweep = sweep_ratings(
        environment,
        conductor,
        vary={
            "wind_speed": np.linspace(0.5, 6.0, 12),
            "ambient_temperature": [20.0, 30.0, 40.0],
        },
        conductor_temperature=max_temperature,
    )
    table = sweep.pivot(on="ambient_temperature", index="wind_speed", values="rating")
    print(table)
    print()

    # =========================================================================
    # Metric Units
    # =========================================================================

    print("┌" + "─" * 68 + "┐")
    print("│ METRIC UNITS".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")

    metric_conductor = get_conductor("drake_ieee738", units=METRIC_UNITS)
    metric_environment = EnvironmentSpec.from_quantities(
        ambient_temperature=celsius(40.0),
        wind_speed=feet_per_second(2.0),
        units=METRIC_UNITS,
    )
    metric_rating = thermal_rating(
        metric_environment, metric_conductor, max_temperature, model=METRIC
    )
    print(f"  Diameter: {metric_conductor.diameter * 1000:.2f} mm")
    print(f"  Wind: {metric_environment.wind_speed:.3f} m/s")
    print(f"  Thermal Rating: {metric_rating:.1f} A")
    print()


if __name__ == "__main__":
    main()
