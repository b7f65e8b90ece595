"""Shared fixtures for signal tests.

All data is static and deterministic. No network calls, no randomness.
Datasets are 260+ bars, enough to clear the 200-bar signal warm-up.
"""

import math

import pandas as pd
import pytest

from src.modules.data.bars import Bar, bars_from_records

START_TIME = 1_700_000_000
BAR_SECONDS = 4 * 60 * 60

# A 40-bar price cycle on top of the trend gives clean MACD crossovers
CYCLE_BARS = 40
CYCLE_AMPLITUDE = 5.0


def _bars(closes: list[float], spread: float) -> pd.DataFrame:
    return bars_from_records(
        Bar(
            time=START_TIME + i * BAR_SECONDS,
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
        )
        for i, close in enumerate(closes)
    )


def _cycle(i: int) -> float:
    return CYCLE_AMPLITUDE * math.sin(2 * math.pi * i / CYCLE_BARS)


@pytest.fixture
def cyclic_uptrend_ohlc() -> pd.DataFrame:
    """300 bars rising 0.5 per bar with a 40-bar cycle on top."""
    return _bars([100.0 + 0.5 * i + _cycle(i) for i in range(300)], spread=1.0)


@pytest.fixture
def cyclic_downtrend_ohlc() -> pd.DataFrame:
    """Mirror image of the cyclic uptrend."""
    return _bars([400.0 - 0.5 * i - _cycle(i) for i in range(300)], spread=1.0)


@pytest.fixture
def linear_uptrend_ohlc() -> pd.DataFrame:
    """260 bars, close = 100 + 0.5 * i, high = close + 1, low = close - 1."""
    return _bars([100.0 + 0.5 * i for i in range(260)], spread=1.0)


@pytest.fixture
def flat_ohlc() -> pd.DataFrame:
    """260 bars at a constant 100 with no range."""
    return _bars([100.0] * 260, spread=0.0)
