"""Technical indicators for the signal engine.

All indicators are pure functions: Series in, Series (or MacdResult) out.
No state, no side effects. Undefined warm-up values are `pd.NA`.
"""

from src.modules.indicators.momentum import (
    MacdResult,
    SignalSeeding,
    detect_crossovers,
    macd,
    rsi,
    signal_line,
)
from src.modules.indicators.trend import ema, sma
from src.modules.indicators.volatility import atr, true_range

__all__ = [
    "sma",
    "ema",
    "rsi",
    "macd",
    "signal_line",
    "detect_crossovers",
    "MacdResult",
    "SignalSeeding",
    "atr",
    "true_range",
]
