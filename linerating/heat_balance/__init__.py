"""IEEE 738 heat-balance models.

Two interchangeable implementations of the HeatBalanceModel protocol:

- US_CUSTOMARY: ft, ft/s, W/ft (default everywhere)
- METRIC: m, m/s, W/m

Example:
    >>> from linerating.heat_balance import METRIC, heat_balance
    >>>
    >>> hb = heat_balance(env, conductor, 100.0, model=METRIC)
    >>> print(f"qc={hb.convective_loss:.1f} qr={hb.radiated_loss:.1f} qs={hb.solar_gain:.1f} W/m")
"""

from linerating.heat_balance.base import (
    HeatBalance,
    HeatBalanceModel,
    heat_balance,
)
from linerating.heat_balance.metric import METRIC, MetricModel
from linerating.heat_balance.us_customary import US_CUSTOMARY, UsCustomaryModel

__all__ = [
    "HeatBalance",
    "HeatBalanceModel",
    "heat_balance",
    "METRIC",
    "MetricModel",
    "US_CUSTOMARY",
    "UsCustomaryModel",
]
