"""Configuration loader for the market-data shell.

Loads configuration from environment variables with sensible defaults.
Indicator periods are not configured here: they are plain parameters of
the engine (see `src.modules.signals.engine.IndicatorParams`).
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Attributes:
        environment: Current environment (dev/prod).
        coingecko_base_url: Base URL of the CoinGecko REST API.
        coingecko_api_key: Optional demo API key (sent as a header when set).
        vs_currency: Quote currency for prices.
        default_days: Default OHLC lookback window in days.
        bar_limit: Maximum number of most recent bars kept for analysis.
        http_timeout: HTTP timeout in seconds.
    """

    environment: str
    coingecko_base_url: str
    coingecko_api_key: str
    vs_currency: str
    default_days: int
    bar_limit: int
    http_timeout: float


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        Config object with all settings.

    Raises:
        ValueError: If a numeric environment variable cannot be parsed.
    """
    return Config(
        environment=os.getenv("ENVIRONMENT", "dev"),
        coingecko_base_url=os.getenv(
            "COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3"
        ).rstrip("/"),
        coingecko_api_key=os.getenv("COINGECKO_API_KEY", ""),
        vs_currency=os.getenv("VS_CURRENCY", "usd"),
        default_days=_int_env("DEFAULT_DAYS", 7),
        bar_limit=_int_env("BAR_LIMIT", 500),
        http_timeout=_float_env("HTTP_TIMEOUT", 30.0),
    )
