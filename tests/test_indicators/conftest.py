"""Shared fixtures for indicator tests.

All data is static and deterministic. No network calls, no randomness.
"""

import pandas as pd
import pytest

from src.modules.data.bars import Bar, bars_from_records

START_TIME = 1_700_000_000
BAR_SECONDS = 4 * 60 * 60


def _bars_from_closes(closes: list[float], spread: float = 1.0) -> pd.DataFrame:
    """Bars with open = previous close, high/low = close +/- spread."""
    records = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i else close
        records.append(
            Bar(
                time=START_TIME + i * BAR_SECONDS,
                open=open_,
                high=max(open_, close) + spread,
                low=min(open_, close) - spread,
                close=close,
            )
        )
    return bars_from_records(records)


@pytest.fixture
def sample_ohlc() -> pd.DataFrame:
    """60 bars of a gradual uptrend with a repeating noise pattern."""
    closes = [100.0]
    move = [0.5, 0.8, -0.3, 1.0, 0.0, 0.6, -0.7, 0.4, 1.2, -0.5]
    for i in range(1, 60):
        closes.append(closes[-1] + move[i % len(move)])
    return _bars_from_closes(closes, spread=0.5)


@pytest.fixture
def linear_uptrend_ohlc() -> pd.DataFrame:
    """260 bars, close = 100 + 0.5 * i, high = close + 1, low = close - 1."""
    records = [
        Bar(
            time=START_TIME + i * BAR_SECONDS,
            open=100.0 + i * 0.5,
            high=101.0 + i * 0.5,
            low=99.0 + i * 0.5,
            close=100.0 + i * 0.5,
        )
        for i in range(260)
    ]
    return bars_from_records(records)


@pytest.fixture
def flat_ohlc() -> pd.DataFrame:
    """260 bars where open == high == low == close == 100."""
    records = [
        Bar(time=START_TIME + i * BAR_SECONDS, open=100.0, high=100.0, low=100.0, close=100.0)
        for i in range(260)
    ]
    return bars_from_records(records)


@pytest.fixture
def all_gains_close() -> pd.Series:
    """Close series where every bar is an up bar (for RSI = 100)."""
    return pd.Series([100.0 + i for i in range(20)], dtype=float)


@pytest.fixture
def all_losses_close() -> pd.Series:
    """Close series where every bar is a down bar (for RSI = 0)."""
    return pd.Series([120.0 - i for i in range(20)], dtype=float)
