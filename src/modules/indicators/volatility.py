"""Volatility indicators: True Range, ATR.

Pure functions operating on pandas Series. No state or side effects.
"""

import pandas as pd

from src.modules.indicators.series import float_values, indicator_series, validate_period
from src.modules.indicators.smoothing import WilderSmoother


def _check_lengths(high: pd.Series, low: pd.Series, close: pd.Series) -> None:
    if not (len(high) == len(low) == len(close)):
        raise ValueError("All price series must have the same length")


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    """Calculate per-bar True Range.

    The first bar has no previous close, so its true range is high - low.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.

    Returns:
        True range for every bar (Float64, no warm-up).

    Raises:
        ValueError: If the series lengths differ.
    """
    _check_lengths(high, low, close)

    highs = float_values(high)
    lows = float_values(low)
    closes = float_values(close)

    out: list[float | None] = []
    for i, (h, lo) in enumerate(zip(highs, lows)):
        if i == 0:
            out.append(h - lo)
        else:
            prev_close = closes[i - 1]
            out.append(max(h - lo, abs(h - prev_close), abs(lo - prev_close)))

    return indicator_series(out, high.index)


def atr(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    period: int = 14,
) -> pd.Series:
    """Calculate Average True Range.

    Seeded with the plain mean of the first `period` true ranges, then
    Wilder-smoothed: atr[i] = (atr[i-1] * (period - 1) + tr[i]) / period.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        period: ATR period (default 14).

    Returns:
        ATR values (Float64). First `period - 1` values are undefined.

    Raises:
        ValueError: If period < 1 or series lengths differ.
    """
    validate_period("Period", period)
    _check_lengths(high, low, close)

    smoother = WilderSmoother(period)
    tr = true_range(high, low, close)
    out = [smoother.update(value) for value in float_values(tr)]

    return indicator_series(out, high.index)
