"""Momentum indicators: RSI, MACD.

Pure functions operating on pandas Series. No state or side effects.
"""

from dataclasses import dataclass
from enum import StrEnum

import pandas as pd

from src.modules.indicators.series import float_values, indicator_series, validate_period
from src.modules.indicators.smoothing import EmaSmoother, WilderSmoother
from src.modules.indicators.trend import ema


def rsi(close: pd.Series, period: int = 14) -> pd.Series:
    """Calculate Relative Strength Index (Wilder's smoothing).

    Gains and losses of bars 1..period are averaged to seed the first
    value at index `period`; later averages are Wilder-smoothed.

    Args:
        close: Closing price series.
        period: Lookback period (default 14).

    Returns:
        RSI values between 0 and 100 (Float64). First `period` values are
        undefined. Zero average loss gives exactly 100.

    Raises:
        ValueError: If period < 1.
    """
    validate_period("Period", period)

    data = float_values(close)
    out: list[float | None] = [None] * len(data)
    avg_gains = WilderSmoother(period)
    avg_losses = WilderSmoother(period)

    for i in range(1, len(data)):
        change = data[i] - data[i - 1]
        # change first so a NaN change stays NaN
        avg_gain = avg_gains.update(max(change, 0.0))
        avg_loss = avg_losses.update(max(-change, 0.0))
        if avg_gain is None or avg_loss is None:
            continue
        if avg_loss == 0:
            out[i] = 100.0
        else:
            out[i] = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)

    return indicator_series(out, close.index)


class SignalSeeding(StrEnum):
    """How the MACD signal EMA treats the undefined head of the MACD line."""

    # Start the signal EMA at the first defined MACD value.
    DEFINED_ONLY = "defined_only"
    # Treat undefined MACD values as 0.0 when feeding the signal EMA.
    ZERO_FILL = "zero_fill"


@dataclass(frozen=True)
class MacdResult:
    """MACD bundle, every series aligned to the input index.

    Attributes:
        line: EMA(fast) - EMA(slow).
        signal: EMA of the MACD line.
        histogram: line - signal.
        cross_up: True on the bar where line crosses above signal.
        cross_down: True on the bar where line crosses below signal.
    """

    line: pd.Series
    signal: pd.Series
    histogram: pd.Series
    cross_up: pd.Series
    cross_down: pd.Series


def signal_line(
    line: pd.Series,
    period: int = 9,
    seeding: SignalSeeding = SignalSeeding.DEFINED_ONLY,
) -> pd.Series:
    """Calculate the MACD signal line.

    Args:
        line: MACD line (Float64, undefined during warm-up).
        period: Signal EMA period (default 9).
        seeding: Treatment of undefined MACD values (see SignalSeeding).

    Returns:
        Signal line (Float64).

    Raises:
        ValueError: If period < 1.
    """
    validate_period("Period", period)

    data = float_values(line)
    undefined = line.isna().to_numpy()

    if seeding is SignalSeeding.ZERO_FILL:
        data = [0.0 if missing else value for value, missing in zip(data, undefined)]
        start = 0
    else:
        defined_positions = [i for i, missing in enumerate(undefined) if not missing]
        start = defined_positions[0] if defined_positions else len(data)

    out: list[float | None] = [None] * len(data)
    smoother = EmaSmoother(period)
    for i in range(start, len(data)):
        out[i] = smoother.update(data[i])

    return indicator_series(out, line.index)


def detect_crossovers(
    line: pd.Series,
    signal: pd.Series,
) -> tuple[pd.Series, pd.Series]:
    """Find the bars where `line` crosses `signal`.

    A cross at i needs both series defined at i-1 and i. A tie on the
    previous bar counts as not yet crossed.

    Args:
        line: Fast series.
        signal: Slow series.

    Returns:
        (cross_up, cross_down) boolean series.
    """
    a = float_values(line)
    b = float_values(signal)
    defined = (line.notna() & signal.notna()).to_numpy()

    up = [False] * len(a)
    down = [False] * len(a)
    for i in range(1, len(a)):
        if not (defined[i - 1] and defined[i]):
            continue
        if a[i - 1] <= b[i - 1] and a[i] > b[i]:
            up[i] = True
        if a[i - 1] >= b[i - 1] and a[i] < b[i]:
            down[i] = True

    return (
        pd.Series(up, index=line.index, dtype=bool),
        pd.Series(down, index=line.index, dtype=bool),
    )


def macd(
    close: pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
    seeding: SignalSeeding = SignalSeeding.DEFINED_ONLY,
) -> MacdResult:
    """Calculate MACD line, signal line, histogram and crossovers.

    Args:
        close: Closing price series.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal line EMA period (default 9).
        seeding: Signal line seeding policy (default DEFINED_ONLY).

    Returns:
        MacdResult aligned to `close`.

    Raises:
        ValueError: If fast >= slow or any period < 1.
    """
    if fast < 1 or slow < 1 or signal < 1:
        raise ValueError(f"All periods must be >= 1, got fast={fast}, slow={slow}, signal={signal}")
    if fast >= slow:
        raise ValueError(f"Fast period must be < slow period, got fast={fast}, slow={slow}")

    line = ema(close, fast) - ema(close, slow)
    sig = signal_line(line, signal, seeding)
    histogram = line - sig
    cross_up, cross_down = detect_crossovers(line, sig)

    return MacdResult(
        line=line,
        signal=sig,
        histogram=histogram,
        cross_up=cross_up,
        cross_down=cross_down,
    )
