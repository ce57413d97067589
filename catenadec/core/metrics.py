"""Dew point and heat index computed from decoded temperature/humidity.

References:
    https://andrew.rsmas.miami.edu/bmcnoldy/Humidity.html
    https://www.wpc.ncep.noaa.gov/html/heatindex_equation.shtml
"""

from __future__ import annotations

import math

from catenadec.core.model import HeatIndexLimits

DEFAULT_HEAT_INDEX_LIMITS = HeatIndexLimits()

_MAGNUS_C1 = 243.04
_MAGNUS_C2 = 17.625


def celsius_to_fahrenheit(t: float) -> float:
    return t * 9 / 5 + 32


def fahrenheit_to_celsius(t: float) -> float:
    return (t - 32) * 5 / 9


def dew_point(t: float, rh: float) -> float:
    """Dew point in Celsius for temperature `t` (Celsius) and relative humidity `rh` (0..100).

    Humidity is clamped to [1, 100] so that very dry air does not hit the
    logarithm singularity.
    """
    h = min(max(rh / 100, 0.01), 1.0)

    lnh = math.log(h)
    txc2_tpc1 = t * _MAGNUS_C2 / (t + _MAGNUS_C1)
    return _MAGNUS_C1 * (lnh + txc2_tpc1) / (_MAGNUS_C2 - lnh - txc2_tpc1)


def regression_heat_index(t: float, rh: float) -> float:
    """Rothfusz regression, without the NWS adjustments."""
    t2 = t * t
    rh2 = rh * rh
    return (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 0.00683783 * t2
        - 0.05481717 * rh2
        + 0.00122874 * t2 * rh
        + 0.00085282 * t * rh2
        - 0.00000199 * t2 * rh2
    )


def heat_index(
    t: float,
    rh: float,
    limits: HeatIndexLimits = DEFAULT_HEAT_INDEX_LIMITS,
) -> float | None:
    """NWS heat index in Fahrenheit, or None outside the validated range.

    `t` is the dry-bulb temperature in Fahrenheit and `rh` the relative
    humidity in percent.
    """
    if not math.isfinite(t):
        return None
    t_rounded = math.floor(t + 0.5)
    if t_rounded < limits.min_temperature_f or t_rounded > limits.max_temperature_f:
        return None
    if not 0 <= rh <= 100:
        return None

    simple = 0.5 * (t + 61.0 + (t - 68.0) * 1.2 + rh * 0.094)
    if simple + t < 160.0:
        return simple

    result = regression_heat_index(t, rh)
    if rh < 13.0 and 80.0 <= t <= 112.0:
        result -= ((13.0 - rh) / 4.0) * math.sqrt((17.0 - abs(t - 95.0)) / 17.0)
    elif rh > 85.0 and 80.0 <= t <= 87.0:
        result += ((rh - 85.0) / 10.0) * ((87.0 - t) / 5.0)

    # the reference table has no entries above this
    if result >= limits.ceiling_f:
        return None
    return result


def heat_index_celsius(
    t: float,
    rh: float,
    limits: HeatIndexLimits = DEFAULT_HEAT_INDEX_LIMITS,
) -> float | None:
    """Like `heat_index`, but returns Celsius. `t` is still Fahrenheit."""
    result = heat_index(t, rh, limits)
    if result is None:
        return None
    return fahrenheit_to_celsius(result)
