"""Shared fixtures for summary tests."""

import math

import pandas as pd
import pytest

from src.modules.data.bars import Bar, bars_from_records

START_TIME = 1_700_000_000
BAR_SECONDS = 4 * 60 * 60


def _bars(closes: list[float]) -> pd.DataFrame:
    return bars_from_records(
        Bar(
            time=START_TIME + i * BAR_SECONDS,
            open=close,
            high=close + 1.0,
            low=close - 1.0,
            close=close,
        )
        for i, close in enumerate(closes)
    )


def _cycle(i: int) -> float:
    return 5.0 * math.sin(2 * math.pi * i / 40)


@pytest.fixture
def rising_bars() -> pd.DataFrame:
    """300 rising bars with a 40-bar cycle; several buy signals."""
    return _bars([100.0 + 0.5 * i + _cycle(i) for i in range(300)])


@pytest.fixture
def falling_bars() -> pd.DataFrame:
    """300 falling bars with a 40-bar cycle."""
    return _bars([400.0 - 0.5 * i - _cycle(i) for i in range(300)])


@pytest.fixture
def short_bars() -> pd.DataFrame:
    """50 bars: RSI and ATR warm up, the EMA200 never does."""
    return _bars([100.0 + 0.1 * i for i in range(50)])
