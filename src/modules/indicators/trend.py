"""Trend indicators: SMA, EMA.

Pure functions operating on pandas Series. No state or side effects.
"""

import pandas as pd

from src.modules.indicators.series import (
    INDICATOR_DTYPE,
    float_values,
    indicator_series,
    validate_period,
)
from src.modules.indicators.smoothing import EmaSmoother


def sma(series: pd.Series, period: int) -> pd.Series:
    """Calculate Simple Moving Average.

    A pandas rolling window mean: pandas keeps a running window sum, removing
    the element that leaves the window and adding the new one.

    Args:
        series: Input series.
        period: Window length.

    Returns:
        SMA series (Float64). First `period - 1` values are undefined.
        An empty input yields an empty series.

    Raises:
        ValueError: If period < 1.
    """
    validate_period("Period", period)

    values = pd.Series(float_values(series), index=series.index, dtype=float)
    result = values.rolling(window=period, min_periods=period).mean()
    return result.astype(INDICATOR_DTYPE)


def ema(series: pd.Series, period: int) -> pd.Series:
    """Calculate Exponential Moving Average.

    The value at index `period - 1` is the plain SMA of the first `period`
    values. Smoothing with k = 2 / (period + 1) starts at index `period`.

    Args:
        series: Input series.
        period: EMA period.

    Returns:
        EMA series (Float64). First `period - 1` values are undefined.
        An empty input yields an empty series.

    Raises:
        ValueError: If period < 1.
    """
    validate_period("Period", period)

    smoother = EmaSmoother(period)
    out = [smoother.update(value) for value in float_values(series)]

    return indicator_series(out, series.index)
