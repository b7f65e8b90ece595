"""Summary Projector.

Reduces an EngineResult to the latest value of every derived series plus
the most recent signals, and renders it as a text digest. Also maps
signal events to chart marker payloads for the rendering side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from src.modules.indicators.series import latest_defined
from src.modules.signals.engine import EngineResult
from src.modules.signals.generator import SignalEvent, SignalKind

RECENT_SIGNALS = 5


class Trend(StrEnum):
    """Long-term trend classification from the trend EMA pair."""

    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class IndicatorSummary:
    """Latest values of every derived series.

    Attributes:
        last_close: Close of the last bar (None for an empty series).
        trend: Trend classification.
        macd_histogram: Latest defined MACD histogram value.
        rsi: Latest defined RSI value.
        atr: Latest defined ATR value.
        signal_count: Total number of signals.
        recent_signals: Up to the last 5 signals, oldest first.
        trend_periods: Periods of the trend EMA pair.
        rsi_period: RSI lookback.
        atr_period: ATR lookback.
    """

    last_close: float | None
    trend: Trend
    macd_histogram: float | None
    rsi: float | None
    atr: float | None
    signal_count: int
    recent_signals: list[SignalEvent] = field(default_factory=list)
    trend_periods: tuple[int, int] = (50, 200)
    rsi_period: int = 14
    atr_period: int = 14


def classify_trend(result: EngineResult) -> Trend:
    """Classify the trend from the last bar where both trend EMAs are defined.

    Args:
        result: Engine output.

    Returns:
        BULLISH if fast > slow, BEARISH if fast < slow, else NEUTRAL
        (including when the slow EMA never warmed up).
    """
    both = (result.trend_fast.notna() & result.trend_slow.notna()).to_numpy()
    positions = both.nonzero()[0]
    if len(positions) == 0:
        return Trend.NEUTRAL

    last = int(positions[-1])
    fast = float(result.trend_fast.iloc[last])
    slow = float(result.trend_slow.iloc[last])
    if fast > slow:
        return Trend.BULLISH
    if fast < slow:
        return Trend.BEARISH
    return Trend.NEUTRAL


def summarize(result: EngineResult) -> IndicatorSummary:
    """Project an engine result onto its latest values.

    Args:
        result: Engine output.

    Returns:
        IndicatorSummary.
    """
    close = result.bars["close"]
    last_close = float(close.iloc[-1]) if len(close) else None

    return IndicatorSummary(
        last_close=last_close,
        trend=classify_trend(result),
        macd_histogram=latest_defined(result.macd.histogram),
        rsi=latest_defined(result.rsi),
        atr=latest_defined(result.atr),
        signal_count=len(result.signals),
        recent_signals=list(result.signals[-RECENT_SIGNALS:]),
        trend_periods=(result.params.trend_fast, result.params.trend_slow),
        rsi_period=result.params.rsi_period,
        atr_period=result.params.atr_period,
    )


def format_timestamp(epoch_seconds: int) -> str:
    """Render an epoch-seconds bar time as a UTC timestamp."""
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _fmt(value: float | None, digits: int) -> str:
    return "n/a" if value is None else f"{value:.{digits}f}"


def format_summary(summary: IndicatorSummary, title: str | None = None) -> str:
    """Render the summary as a multi-line text digest.

    Args:
        summary: Projected summary.
        title: Optional header line (e.g. "Bitcoin (BTC)").

    Returns:
        Digest text.
    """
    fast_label = f"EMA{summary.trend_periods[0]}"
    slow_label = f"EMA{summary.trend_periods[1]}"
    trend_icon = {Trend.BULLISH: "🟢", Trend.BEARISH: "🔴", Trend.NEUTRAL: "⚪"}[summary.trend]

    if summary.trend is Trend.BULLISH:
        trend_text = f"{summary.trend.value} ({fast_label} > {slow_label})"
    elif summary.trend is Trend.BEARISH:
        trend_text = f"{summary.trend.value} ({fast_label} < {slow_label})"
    else:
        trend_text = summary.trend.value

    last_close = "n/a" if summary.last_close is None else f"{summary.last_close}"

    lines = []
    if title:
        lines.append(f"📊 {title}")
    lines += [
        f"Last price: {last_close}",
        f"Trend: {trend_icon} {trend_text}",
        f"MACD histogram (latest): {_fmt(summary.macd_histogram, 6)}",
        f"RSI({summary.rsi_period}): {_fmt(summary.rsi, 2)}",
        f"ATR({summary.atr_period}): {_fmt(summary.atr, 6)}",
        f"Signals found: {summary.signal_count}",
        f"Last {RECENT_SIGNALS} signals:",
    ]

    if summary.recent_signals:
        for signal in summary.recent_signals:
            lines.append(
                f"  • {format_timestamp(signal.time)} {signal.kind.value} {signal.rationale}"
            )
    else:
        lines.append("  • none")

    return "\n".join(lines)


def signal_markers(signals: list[SignalEvent]) -> list[dict[str, Any]]:
    """Map signal events to chart marker payloads.

    Buys sit below the bar as green up-arrows, sells above it as red
    down-arrows.

    Args:
        signals: Signal events.

    Returns:
        One marker dict per signal, in the same order.
    """
    markers = []
    for signal in signals:
        if signal.kind is SignalKind.BUY:
            style = {"position": "belowBar", "shape": "arrowUp", "color": "#10b981"}
        else:
            style = {"position": "aboveBar", "shape": "arrowDown", "color": "#ef4444"}
        markers.append(
            {
                "time": signal.time,
                **style,
                "text": signal.kind.value,
                "price": signal.price,
            }
        )
    return markers
