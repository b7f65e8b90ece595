"""CoinGecko Market Data Provider.

Public REST API; the free tier needs no key. A demo key, when
configured, is sent in the `x-cg-demo-api-key` header.
"""

from typing import Any

import httpx
import pandas as pd

from src.modules.data.bars import InvalidBarsError, bars_from_ohlc_rows
from src.modules.data.coins import Coin
from src.modules.data.protocols import ProviderError
from src.shared.config import Config
from src.shared.logger import get_logger

logger = get_logger(__name__)

TOP_COINS_LIMIT = 200


class CoinGeckoProvider:
    """CoinGecko market data provider.

    OHLC candles come back as `[timestamp_ms, open, high, low, close]`
    rows; candle width depends on `days` (30-minute bars up to 2 days,
    4-hour bars up to 30 days, 4-day bars beyond).
    """

    def __init__(self, config: Config) -> None:
        """Initialize CoinGeckoProvider.

        Args:
            config: Application configuration.
        """
        self._base_url = config.coingecko_base_url
        self._vs_currency = config.vs_currency
        self._timeout = config.http_timeout
        self._headers = (
            {"x-cg-demo-api-key": config.coingecko_api_key}
            if config.coingecko_api_key
            else {}
        )

    @property
    def name(self) -> str:
        """Provider name."""
        return "CoinGecko"

    def get_ohlc(self, coin_id: str, days: int) -> pd.DataFrame:
        """Fetch OHLC bars for a coin.

        Args:
            coin_id: CoinGecko coin id (e.g., 'bitcoin').
            days: Lookback window in days.

        Returns:
            Bar Series DataFrame with times in epoch seconds.

        Raises:
            ProviderError: If the API fails or returns no usable bars.
        """
        logger.info(
            "Fetching OHLC from CoinGecko",
            extra={"coin_id": coin_id, "days": days},
        )

        data = self._get(
            f"/coins/{coin_id}/ohlc",
            {"vs_currency": self._vs_currency, "days": str(days)},
            resource=coin_id,
        )

        if not data:
            raise ProviderError(self.name, coin_id, "No OHLC returned")

        try:
            bars = bars_from_ohlc_rows(data)
        except (InvalidBarsError, TypeError, ValueError) as e:
            raise ProviderError(self.name, coin_id, f"Malformed OHLC payload: {e}") from e

        # Overlapping candles are possible at window edges; keep the last one
        bars = bars[~bars.index.duplicated(keep="last")].sort_index()
        return bars

    def get_top_coins(self, limit: int = TOP_COINS_LIMIT) -> list[Coin]:
        """Fetch the top coins by market capitalisation.

        Args:
            limit: Maximum number of coins (CoinGecko caps a page at 250).

        Returns:
            Coins ordered by market cap, symbols upper-cased.

        Raises:
            ProviderError: If the API fails or returns a malformed listing.
        """
        data = self._get(
            "/coins/markets",
            {
                "vs_currency": self._vs_currency,
                "order": "market_cap_desc",
                "per_page": str(limit),
                "page": "1",
                "sparkline": "false",
            },
            resource="coin list",
        )

        if not isinstance(data, list):
            raise ProviderError(self.name, "coin list", f"Expected a list, got {type(data).__name__}")

        try:
            coins = [
                Coin(id=item["id"], name=item["name"], symbol=str(item["symbol"]).upper())
                for item in data
            ]
        except (KeyError, TypeError) as e:
            raise ProviderError(self.name, "coin list", f"Malformed coin payload: {e!r}") from e

        logger.info(f"Loaded {len(coins)} coins from CoinGecko")
        return coins

    def _get(self, path: str, params: dict[str, str], resource: str) -> Any:
        """GET a JSON document, mapping transport errors to ProviderError."""
        url = f"{self._base_url}{path}"
        logger.debug(f"GET {url}", extra={"params": params})
        try:
            with httpx.Client(timeout=self._timeout, headers=self._headers) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                self.name,
                resource,
                f"HTTP {e.response.status_code}: {e.response.text}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(self.name, resource, str(e)) from e
