#!/usr/bin/env python
"""IEEE 738 reference case for Linerating.

Reproduces the worked example for a 795 kcmil 26/7 ACSR "Drake" conductor
in US customary units:

1. Steady-state rating at 100 C
2. Steady temperature at that rating (round trip)
3. Temperature rise after one minute at 2000 A
4. Transient rating: 31 one-minute steps from 100 C up to 254.3 C
"""

from linerating import (
    Atmosphere,
    ConductorSpec,
    EnvironmentSpec,
    conductor_temperature,
    heat_balance,
    rating_mva,
    solar_position,
    temperature_rise,
    temperature_trajectory,
    thermal_rating,
    transient_rating,
)


def main() -> None:
    """Run the reference case."""
    print()
    print("╔" + "═" * 68 + "╗")
    print("║" + "IEEE 738 REFERENCE CASE".center(68) + "║")
    print("║" + "795 kcmil ACSR Drake, US Customary Units".center(68) + "║")
    print("╚" + "═" * 68 + "╝")
    print()

    # =========================================================================
    # Inputs
    # =========================================================================

    environment = EnvironmentSpec(
        ambient_temperature=40.0,
        wind_speed=2.0,  # ft/s
        wind_angle=90.0,
        solar_irradiance=None,  # computed from date and location
        elevation=0.0,
        atmosphere=Atmosphere.CLEAR,
        latitude=30.0,
        line_azimuth=90.0,  # east-west line
        month=6,
        day_of_month=10,
        hour_of_day=11.0,
    )

    conductor = ConductorSpec(
        diameter=0.092333333,  # ft (1.108 in)
        absorptivity=0.8,
        emissivity=0.8,
        t_low=25.0,
        t_high=75.0,
        r_low=2.20833e-5,  # ohm/ft
        r_high=2.63258e-5,
        heat_capacity=305.6328,  # J/(ft*C)
        name="Drake",
    )

    tolerance = 0.01

    print("┌" + "─" * 68 + "┐")
    print("│ CONDITIONS".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")
    sun = solar_position(environment)
    print(f"  Ambient temperature: {environment.ambient_temperature:.1f} C")
    print(f"  Wind: {environment.wind_speed:.1f} ft/s at {environment.wind_angle:.0f} deg")
    print(f"  Day of year: {environment.day_of_year}, {environment.hour_of_day:.0f}:00")
    print(f"  Solar altitude: {sun.altitude_deg:.2f} deg")
    print(f"  Solar azimuth: {sun.azimuth_deg:.2f} deg")
    print()

    # =========================================================================
    # Steady State
    # =========================================================================

    print("┌" + "─" * 68 + "┐")
    print("│ STEADY STATE".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")

    balance = heat_balance(environment, conductor, 100.0)
    print(f"  Convective loss qc: {balance.convective_loss:.3f} W/ft")
    print(f"  Radiated loss qr:   {balance.radiated_loss:.3f} W/ft")
    print(f"  Solar gain qs:      {balance.solar_gain:.3f} W/ft")
    print(f"  R(100 C):           {balance.resistance:.4e} ohm/ft")

    rating = thermal_rating(environment, conductor, 100.0)
    print(f"  Thermal Rating: {rating:.2f} A")
    print(f"  At 230 kV: {rating_mva(rating, 230.0):.1f} MVA")

    temperature = conductor_temperature(environment, conductor, rating, tolerance)
    print(f"  Temperature at rating: {temperature:.4f} C")
    print()

    # =========================================================================
    # Transient
    # =========================================================================

    print("┌" + "─" * 68 + "┐")
    print("│ TRANSIENT".ljust(69) + "│")
    print("└" + "─" * 68 + "┘")

    delta_t = temperature_rise(environment, conductor, 100.0, 2000.0, 60.0, 1)
    print(f"  Delta T after 60 s at 2000 A: {delta_t:.4f} C")

    t_rating = transient_rating(environment, conductor, 100.0, 254.3, 60.0, 31, tolerance)
    print(f"  Transient Rating (31 min to 254.3 C): {t_rating:.2f} A")
    print()

    trajectory = temperature_trajectory(environment, conductor, 100.0, t_rating, 60.0, 31)
    print(trajectory.summary())
    print()
    print(trajectory.to_dataframe().select("time", "temperature").tail(5))
    print()


if __name__ == "__main__":
    main()
