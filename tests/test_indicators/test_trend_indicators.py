"""Tests for SMA and EMA.

Each function is tested for:
- Correct output on known data
- Warm-up (undefined) behavior
- Edge cases (empty, shorter than the period, period = 1)
- Validation errors (bad parameters)
"""

import pandas as pd
import pytest

from src.modules.indicators.trend import ema, sma

# ========================================================================
# SMA Tests
# ========================================================================


class TestSMA:
    """Tests for Simple Moving Average."""

    def test_sma_known_values(self) -> None:
        """Mean of the trailing window once the window is full."""
        result = sma(pd.Series([1.0, 2.0, 3.0, 4.0, 5.0]), period=3)
        assert result.iloc[:2].isna().all()
        assert result.iloc[2:].tolist() == [2.0, 3.0, 4.0]

    def test_sma_dtype_is_nullable(self) -> None:
        """Undefined values are pd.NA, not zero."""
        result = sma(pd.Series([1.0, 2.0]), period=2)
        assert str(result.dtype) == "Float64"
        assert result.iloc[0] is pd.NA

    def test_sma_period_one_is_identity(self, sample_ohlc: pd.DataFrame) -> None:
        """sma(x, 1) == x exactly."""
        close = sample_ohlc["close"]
        result = sma(close, period=1)
        assert result.tolist() == close.tolist()

    def test_sma_matches_rolling_mean(self, sample_ohlc: pd.DataFrame) -> None:
        """Same values as a pandas rolling mean, undefined values as pd.NA."""
        close = sample_ohlc["close"]
        expected = close.rolling(window=10).mean()
        result = sma(close, period=10)
        assert result.isna().sum() == 9
        assert result.iloc[9:].tolist() == pytest.approx(expected.iloc[9:].tolist())

    def test_sma_undefined_window(self) -> None:
        """A missing input leaves every window that contains it undefined."""
        result = sma(pd.Series([1.0, float("nan"), 3.0, 4.0, 5.0]), period=2)
        assert result.isna().tolist() == [True, True, True, False, False]
        assert result.iloc[3:].tolist() == [3.5, 4.5]

    def test_sma_shorter_than_period(self) -> None:
        """A series shorter than the period is entirely undefined."""
        result = sma(pd.Series([1.0, 2.0, 3.0]), period=5)
        assert len(result) == 3
        assert result.isna().all()

    def test_sma_empty_series(self) -> None:
        """Empty input gives empty output, no error."""
        result = sma(pd.Series(dtype=float), period=5)
        assert len(result) == 0

    def test_sma_keeps_index(self, sample_ohlc: pd.DataFrame) -> None:
        """Output is aligned to the input index."""
        result = sma(sample_ohlc["close"], period=10)
        assert result.index.equals(sample_ohlc.index)

    def test_sma_bad_period(self) -> None:
        """Should raise ValueError for period < 1."""
        with pytest.raises(ValueError, match="Period"):
            sma(pd.Series([1.0]), period=0)

    def test_sma_is_local_to_window(self, sample_ohlc: pd.DataFrame) -> None:
        """Recomputing on a slice reproduces values whose window lies inside it."""
        period = 10
        full = sma(sample_ohlc["close"], period)
        sliced_bars = sample_ohlc.iloc[25:]
        sliced = sma(sliced_bars["close"], period)

        for t in sliced_bars.index[period - 1 :]:
            assert sliced.loc[t] == pytest.approx(full.loc[t], rel=1e-12)


# ========================================================================
# EMA Tests
# ========================================================================


class TestEMA:
    """Tests for Exponential Moving Average."""

    def test_ema_known_values(self) -> None:
        """Seed is the SMA of the first window, then k = 2 / (period + 1)."""
        result = ema(pd.Series([1.0, 2.0, 3.0, 4.0, 5.0]), period=3)
        assert result.iloc[:2].isna().all()
        assert result.iloc[2:].tolist() == [2.0, 3.0, 4.0]

    def test_ema_seed_is_unsmoothed(self) -> None:
        """The value at period - 1 is the plain mean, not a smoothed value."""
        result = ema(pd.Series([10.0, 0.0, 20.0, 0.0]), period=3)
        assert result.iloc[2] == 10.0
        assert result.iloc[3] == pytest.approx(0.0 * 0.5 + 10.0 * 0.5)

    def test_ema_warm_up(self, sample_ohlc: pd.DataFrame) -> None:
        """First period - 1 values are undefined, the rest defined."""
        result = ema(sample_ohlc["close"], period=20)
        assert result.iloc[:19].isna().all()
        assert result.iloc[19:].notna().all()

    def test_ema_period_one_is_identity(self, sample_ohlc: pd.DataFrame) -> None:
        """ema(x, 1) == x from the seed index (0) onward."""
        close = sample_ohlc["close"]
        result = ema(close, period=1)
        assert result.tolist() == close.tolist()

    def test_ema_shorter_than_period(self) -> None:
        """A series shorter than the period is entirely undefined."""
        result = ema(pd.Series([1.0, 2.0, 3.0]), period=4)
        assert len(result) == 3
        assert result.isna().all()

    def test_ema_empty_series(self) -> None:
        """Empty input gives empty output, no error."""
        assert len(ema(pd.Series(dtype=float), period=3)) == 0

    def test_ema_tracks_uptrend(self, linear_uptrend_ohlc: pd.DataFrame) -> None:
        """EMA lags below price in a rising market."""
        close = linear_uptrend_ohlc["close"]
        result = ema(close, period=50)
        valid = result.dropna()
        assert (valid < close.loc[valid.index]).all()

    def test_ema_bad_period(self) -> None:
        """Should raise ValueError for period < 1."""
        with pytest.raises(ValueError, match="Period"):
            ema(pd.Series([1.0]), period=-1)

    def test_ema_truncation_changes_values(self, sample_ohlc: pd.DataFrame) -> None:
        """EMA depends on its whole seed history, so slicing shifts the seed."""
        period = 10
        full = ema(sample_ohlc["close"], period)
        sliced_bars = sample_ohlc.iloc[20:]
        sliced = ema(sliced_bars["close"], period)

        seed_time = sliced_bars.index[period - 1]
        assert abs(sliced.loc[seed_time] - full.loc[seed_time]) > 1e-9
