"""Signal Engine: orchestrates indicator computation and signal derivation.

This is the single entry point of the pipeline:

    Bar Series -> {EMA trend pair, RSI, ATR, MACD} -> Signal Generator

Every call recomputes everything from the full Bar Series. Nothing is
cached between calls, so the same bars always give identical output.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from src.modules.data.bars import validate_bars
from src.modules.indicators.momentum import MacdResult, SignalSeeding, macd, rsi
from src.modules.indicators.trend import ema
from src.modules.indicators.volatility import atr
from src.modules.signals.generator import WARMUP_BARS, SignalEvent, generate_signals
from src.shared.logger import get_logger

logger = get_logger(__name__)


def _first_defined(series: pd.Series) -> int | None:
    """Position of the first defined value, or None if there is none."""
    defined = series.notna().to_numpy()
    return int(defined.argmax()) if defined.any() else None


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator periods and signal rule parameters.

    Attributes:
        macd_fast: Fast EMA period of the MACD line.
        macd_slow: Slow EMA period of the MACD line.
        macd_signal: EMA period of the MACD signal line.
        rsi_period: RSI lookback.
        atr_period: ATR lookback.
        trend_fast: Fast trend EMA period.
        trend_slow: Slow trend EMA period.
        warmup: Bars skipped before any signal may fire.
        signal_seeding: MACD signal line seeding policy.
    """

    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    rsi_period: int = 14
    atr_period: int = 14
    trend_fast: int = 50
    trend_slow: int = 200
    warmup: int = WARMUP_BARS
    signal_seeding: SignalSeeding = SignalSeeding.DEFINED_ONLY

    def __post_init__(self) -> None:
        periods = {
            "macd_fast": self.macd_fast,
            "macd_slow": self.macd_slow,
            "macd_signal": self.macd_signal,
            "rsi_period": self.rsi_period,
            "atr_period": self.atr_period,
            "trend_fast": self.trend_fast,
            "trend_slow": self.trend_slow,
        }
        for name, value in periods.items():
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast must be < macd_slow, got {self.macd_fast} >= {self.macd_slow}"
            )
        if self.warmup < 0:
            raise ValueError(f"warmup must be >= 0, got {self.warmup}")


@dataclass(frozen=True)
class EngineResult:
    """Everything one engine run derives from a Bar Series.

    All series share the Bar Series index.

    Attributes:
        bars: The Bar Series the result was computed from.
        trend_fast: Fast trend EMA (EMA50 by default).
        trend_slow: Slow trend EMA (EMA200 by default).
        macd: MACD bundle.
        rsi: RSI series.
        atr: ATR series.
        signals: Buy/Sell events in bar order.
        params: Parameters used for the run.
    """

    bars: pd.DataFrame
    trend_fast: pd.Series
    trend_slow: pd.Series
    macd: MacdResult
    rsi: pd.Series
    atr: pd.Series
    signals: list[SignalEvent]
    params: IndicatorParams


class SignalEngine:
    """Computes indicators and signals for one instrument's Bar Series.

    Usage:
        engine = SignalEngine()
        result = engine.compute(bars)
        result.signals[-1].rationale
    """

    def __init__(self, params: IndicatorParams | None = None) -> None:
        """Initialize SignalEngine.

        Args:
            params: Indicator parameters (defaults: 12/26/9, RSI 14,
                ATR 14, EMA 50/200, warm-up 200).
        """
        self.params = params or IndicatorParams()

    def compute(self, bars: pd.DataFrame, validate: bool = True) -> EngineResult:
        """Compute every indicator series and the signal list.

        Args:
            bars: Bar Series (open, high, low, close; int time index).
                May be empty.
            validate: If True, reject malformed bars before computing.

        Returns:
            EngineResult aligned to `bars`.

        Raises:
            InvalidBarsError: If validation is on and the bars are malformed.
        """
        if validate:
            validate_bars(bars)

        p = self.params
        close = bars["close"]

        trend_fast = ema(close, p.trend_fast)
        trend_slow = ema(close, p.trend_slow)
        rsi_values = rsi(close, p.rsi_period)
        atr_values = atr(bars["high"], bars["low"], close, p.atr_period)
        macd_result = macd(close, p.macd_fast, p.macd_slow, p.macd_signal, p.signal_seeding)

        signals = generate_signals(
            bars,
            trend_fast,
            trend_slow,
            macd_result,
            rsi_values,
            warmup=p.warmup,
            trend_periods=(p.trend_fast, p.trend_slow),
        )

        logger.debug(
            "Indicator warm-up",
            extra={
                "first_defined": {
                    "trend_fast": _first_defined(trend_fast),
                    "trend_slow": _first_defined(trend_slow),
                    "rsi": _first_defined(rsi_values),
                    "atr": _first_defined(atr_values),
                    "macd_histogram": _first_defined(macd_result.histogram),
                },
                "cross_up": int(macd_result.cross_up.sum()),
                "cross_down": int(macd_result.cross_down.sum()),
            },
        )
        logger.info(
            f"Computed indicators for {len(bars)} bars, {len(signals)} signals",
            extra={"bars": len(bars), "signals": len(signals)},
        )

        return EngineResult(
            bars=bars,
            trend_fast=trend_fast,
            trend_slow=trend_slow,
            macd=macd_result,
            rsi=rsi_values,
            atr=atr_values,
            signals=signals,
            params=p,
        )
