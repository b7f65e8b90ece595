"""Bar Series construction and boundary validation.

A Bar Series is a DataFrame with float columns open, high, low, close and
an int64 index named `time` (epoch seconds, strictly increasing). Row order
is chronological and every recursive indicator depends on it.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

PRICE_COLUMNS = ("open", "high", "low", "close")


@dataclass(frozen=True)
class Bar:
    """One OHLC observation for a fixed time interval."""

    time: int
    open: float
    high: float
    low: float
    close: float


class InvalidBarsError(ValueError):
    """Raised when a Bar Series fails boundary validation."""


def _frame(
    times: Sequence[int],
    opens: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "open": np.asarray(opens, dtype=float),
            "high": np.asarray(highs, dtype=float),
            "low": np.asarray(lows, dtype=float),
            "close": np.asarray(closes, dtype=float),
        },
        index=pd.Index(np.asarray(times, dtype="int64"), name="time"),
    )


def empty_bars() -> pd.DataFrame:
    """Return a zero-length Bar Series."""
    return _frame([], [], [], [], [])


def bars_from_records(bars: Iterable[Bar]) -> pd.DataFrame:
    """Build a Bar Series from Bar records, keeping their order.

    Args:
        bars: Bars in chronological order.

    Returns:
        Bar Series DataFrame.
    """
    records = list(bars)
    return _frame(
        [b.time for b in records],
        [b.open for b in records],
        [b.high for b in records],
        [b.low for b in records],
        [b.close for b in records],
    )


def bars_from_ohlc_rows(rows: Iterable[Sequence[float]]) -> pd.DataFrame:
    """Build a Bar Series from `[timestamp_ms, open, high, low, close]` rows.

    This is the row shape market-data APIs such as CoinGecko return.
    Millisecond timestamps are floored to whole seconds.

    Args:
        rows: OHLC rows in chronological order.

    Returns:
        Bar Series DataFrame.

    Raises:
        InvalidBarsError: If a row does not have at least five fields.
    """
    parsed = list(rows)
    for row in parsed:
        if len(row) < 5:
            raise InvalidBarsError(f"OHLC row must have 5 fields, got {list(row)!r}")

    return _frame(
        [int(row[0]) // 1000 for row in parsed],
        [row[1] for row in parsed],
        [row[2] for row in parsed],
        [row[3] for row in parsed],
        [row[4] for row in parsed],
    )


def validate_bars(bars: pd.DataFrame) -> None:
    """Validate a Bar Series at the engine boundary.

    An empty Bar Series is valid.

    Args:
        bars: Bar Series to check.

    Raises:
        InvalidBarsError: If columns are missing, a price is NaN or infinite,
            or the time index is not strictly increasing.
    """
    missing = set(PRICE_COLUMNS) - set(bars.columns)
    if missing:
        raise InvalidBarsError(f"Missing required columns: {sorted(missing)}")

    if bars.empty:
        return

    prices = bars[list(PRICE_COLUMNS)].to_numpy(dtype=float)
    finite = np.isfinite(prices).all(axis=1)
    if not finite.all():
        bad_time = bars.index[int(np.argmin(finite))]
        raise InvalidBarsError(f"Non-finite price in bar at time {bad_time}")

    if not (bars.index.is_monotonic_increasing and bars.index.is_unique):
        raise InvalidBarsError("Bar times must be strictly increasing")


def tail_bars(bars: pd.DataFrame, limit: int) -> pd.DataFrame:
    """Keep only the most recent `limit` bars.

    Args:
        bars: Bar Series.
        limit: Maximum number of bars to retain.

    Returns:
        The last `limit` rows (or all rows if there are fewer).

    Raises:
        ValueError: If limit < 1.
    """
    if limit < 1:
        raise ValueError(f"Limit must be >= 1, got {limit}")
    if len(bars) <= limit:
        return bars
    return bars.iloc[len(bars) - limit :]
