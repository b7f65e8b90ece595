"""Signal Generator: rule-based Buy/Sell events.

A pure reduction over one Bar Series and its indicator series. Nothing
is carried between calls; every call returns a fresh list.

Rules (evaluated per bar, Buy first, at most one event per bar):
    Buy:  EMA50 > EMA200, MACD crosses up,   RSI defined and > 40
    Sell: EMA50 < EMA200, MACD crosses down, RSI defined and < 60

Bars before the warm-up floor (200, tied to the slow trend EMA) never
emit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import pandas as pd

from src.modules.indicators.momentum import MacdResult
from src.modules.indicators.series import float_values

WARMUP_BARS = 200

BUY_RSI_FLOOR = 40.0
SELL_RSI_CEILING = 60.0

# Buy prices undershoot the bar low, sell prices overshoot the bar high
BUY_PRICE_FACTOR = 0.997
SELL_PRICE_FACTOR = 1.003


class SignalKind(StrEnum):
    """Direction of a signal event."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class SignalEvent:
    """A discrete trading signal.

    Attributes:
        time: Bar time (epoch seconds).
        kind: BUY or SELL.
        price: Marker price (low * 0.997 for buys, high * 1.003 for sells).
        rationale: Human-readable justification.
    """

    time: int
    kind: SignalKind
    price: float
    rationale: str


def generate_signals(
    bars: pd.DataFrame,
    trend_fast: pd.Series,
    trend_slow: pd.Series,
    macd_result: MacdResult,
    rsi_values: pd.Series,
    warmup: int = WARMUP_BARS,
    trend_periods: tuple[int, int] = (50, 200),
) -> list[SignalEvent]:
    """Derive Buy/Sell events from aligned indicator series.

    Args:
        bars: Bar Series (needs high and low columns).
        trend_fast: Fast trend EMA (EMA50).
        trend_slow: Slow trend EMA (EMA200).
        macd_result: MACD bundle with crossover flags.
        rsi_values: RSI series.
        warmup: Bars skipped unconditionally at the start.
        trend_periods: Periods of the trend EMAs, used in the rationale.

    Returns:
        Signal events in ascending bar order.

    Raises:
        ValueError: If warmup < 0 or a series is not aligned with the bars.
    """
    if warmup < 0:
        raise ValueError(f"Warmup must be >= 0, got {warmup}")

    n = len(bars)
    aligned = (
        trend_fast,
        trend_slow,
        macd_result.cross_up,
        macd_result.cross_down,
        rsi_values,
    )
    if any(len(series) != n for series in aligned):
        raise ValueError(f"All indicator series must have {n} elements to match the bars")

    fast_label = f"EMA{trend_periods[0]}"
    slow_label = f"EMA{trend_periods[1]}"

    fast = float_values(trend_fast)
    slow = float_values(trend_slow)
    rsi_list = float_values(rsi_values)
    trend_defined = (trend_fast.notna() & trend_slow.notna()).to_numpy()
    rsi_defined = rsi_values.notna().to_numpy()
    cross_up = macd_result.cross_up.to_numpy()
    cross_down = macd_result.cross_down.to_numpy()

    times = bars.index.tolist()
    lows = bars["low"].tolist()
    highs = bars["high"].tolist()

    signals: list[SignalEvent] = []
    for i in range(warmup, n):
        if not trend_defined[i] or not rsi_defined[i]:
            continue

        rsi_now = rsi_list[i]
        if fast[i] > slow[i] and cross_up[i] and rsi_now > BUY_RSI_FLOOR:
            signals.append(
                SignalEvent(
                    time=int(times[i]),
                    kind=SignalKind.BUY,
                    price=lows[i] * BUY_PRICE_FACTOR,
                    rationale=f"{fast_label}>{slow_label}; MACD up; RSI={rsi_now:.1f}",
                )
            )
        elif fast[i] < slow[i] and cross_down[i] and rsi_now < SELL_RSI_CEILING:
            signals.append(
                SignalEvent(
                    time=int(times[i]),
                    kind=SignalKind.SELL,
                    price=highs[i] * SELL_PRICE_FACTOR,
                    rationale=f"{fast_label}<{slow_label}; MACD down; RSI={rsi_now:.1f}",
                )
            )

    return signals
