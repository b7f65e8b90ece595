"""Data Provider Protocols.

Defines the interface of the market data collaborator that supplies Bar
Series to the signal engine.
"""

from typing import Protocol

import pandas as pd

from src.modules.data.coins import Coin


class MarketDataProvider(Protocol):
    """Protocol for market data providers.

    Any source able to produce OHLC bars and a coin listing can feed the
    engine through this interface.
    """

    @property
    def name(self) -> str:
        """Provider name for logging and error messages."""
        ...

    def get_ohlc(self, coin_id: str, days: int) -> pd.DataFrame:
        """Fetch OHLC bars for a coin.

        Args:
            coin_id: Provider-specific coin identifier (e.g., 'bitcoin').
            days: Lookback window in days.

        Returns:
            Bar Series DataFrame (see src.modules.data.bars).

        Raises:
            ProviderError: If the provider fails to fetch data.
        """
        ...

    def get_top_coins(self, limit: int) -> list[Coin]:
        """Fetch the largest coins by market capitalisation.

        Args:
            limit: Maximum number of coins.

        Returns:
            Coins ordered by market cap, largest first.

        Raises:
            ProviderError: If the provider fails to fetch data.
        """
        ...


class ProviderError(Exception):
    """Exception raised when a provider fails to fetch data."""

    def __init__(self, provider: str, resource: str, message: str) -> None:
        """Initialize ProviderError.

        Args:
            provider: Name of the failing provider.
            resource: Coin or listing that was being fetched.
            message: Error description.
        """
        self.provider = provider
        self.resource = resource
        super().__init__(f"[{provider}] Failed to fetch {resource}: {message}")
