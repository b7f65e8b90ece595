"""Helpers shared by the indicator functions.

Indicator outputs use the pandas nullable "Float64" dtype: an element is
either a float or `pd.NA` ("not yet computable"). `pd.NA` is never zero
and never silently mixes with a real value.
"""

import numpy as np
import pandas as pd

INDICATOR_DTYPE = "Float64"


def float_values(series: pd.Series) -> list[float]:
    """Return the series as plain Python floats, NA mapped to NaN."""
    return series.to_numpy(dtype=float, na_value=np.nan).tolist()


def indicator_series(values: list[float | None], index: pd.Index) -> pd.Series:
    """Wrap computed values (None = undefined) as an indicator series."""
    return pd.Series(values, index=index, dtype=INDICATOR_DTYPE)


def latest_defined(series: pd.Series) -> float | None:
    """Last defined value of an indicator series, or None if there is none."""
    defined = series.dropna()
    if defined.empty:
        return None
    return float(defined.iloc[-1])


def validate_period(name: str, period: int) -> None:
    """Raise ValueError unless `period` is a positive integer."""
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")
