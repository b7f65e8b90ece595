"""Seeded recursive smoothers for EMA, RSI and ATR.

Each smoother is a two-phase state machine:

    Accumulating(total, count) --(period values seen)--> Smoothing(prev)

While accumulating it emits nothing. On the `period`-th value it emits the
plain mean of the window as the seed (no smoothing applied at the seed
index), then applies its recursive update to every later value.

The two variants differ only in the recursive step:
    EMA:    next = value * k + prev * (1 - k),     k = 2 / (period + 1)
    Wilder: next = (prev * (period - 1) + value) / period
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Accumulating:
    """Building the seed window."""

    total: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class Smoothing:
    """Seed emitted; recursive updates from `prev`."""

    prev: float


class SeededSmoother(ABC):
    """Base class for seeded smoothing state machines."""

    def __init__(self, period: int) -> None:
        if period < 1:
            raise ValueError(f"Period must be >= 1, got {period}")
        self.period = period
        self._state: Accumulating | Smoothing = Accumulating()

    @property
    def state(self) -> Accumulating | Smoothing:
        """Current phase of the state machine."""
        return self._state

    @abstractmethod
    def _step(self, prev: float, value: float) -> float:
        """Recursive update applied after the seed."""

    def update(self, value: float) -> float | None:
        """Feed the next value.

        Args:
            value: Next input value.

        Returns:
            The smoothed value, or None while the seed window is filling.
        """
        state = self._state
        if isinstance(state, Accumulating):
            total = state.total + value
            count = state.count + 1
            if count < self.period:
                self._state = Accumulating(total, count)
                return None
            seed = total / self.period
            self._state = Smoothing(seed)
            return seed

        smoothed = self._step(state.prev, value)
        self._state = Smoothing(smoothed)
        return smoothed


class EmaSmoother(SeededSmoother):
    """Standard EMA smoothing, k = 2 / (period + 1).

    An input equal to the previous EMA returns that EMA unchanged instead of
    evaluating the weighted sum, so a constant series yields an exactly
    constant EMA (the weighted sum can land an ulp off, e.g. 101.30000000000001).
    """

    def __init__(self, period: int) -> None:
        super().__init__(period)
        self.k = 2.0 / (period + 1)

    def _step(self, prev: float, value: float) -> float:
        if value == prev:
            return prev
        return value * self.k + prev * (1 - self.k)


class WilderSmoother(SeededSmoother):
    """Wilder's smoothing (effective alpha = 1 / period)."""

    def _step(self, prev: float, value: float) -> float:
        return (prev * (self.period - 1) + value) / self.period
