"""Analyze a coin: fetch OHLC, compute indicators and signals, print a digest.

Usage:
    ohlc-signals bitcoin
    ohlc-signals BTC --days 30 --limit 300
    python -m src.app.analyze "Ethereum (ETH)" --markers
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from src.modules.data.bars import InvalidBarsError, tail_bars
from src.modules.data.coins import resolve_coin, search_coins
from src.modules.data.protocols import MarketDataProvider, ProviderError
from src.modules.data.providers.coingecko import TOP_COINS_LIMIT, CoinGeckoProvider
from src.modules.signals.engine import SignalEngine
from src.modules.summary.digest import format_summary, signal_markers, summarize
from src.shared.config import Config, load_config
from src.shared.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_UNKNOWN_COIN = 1
EXIT_DATA_ERROR = 2


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Create the argument parser with config-driven defaults."""
    parser = argparse.ArgumentParser(
        description="Compute EMA/MACD/RSI/ATR and buy/sell signals for a coin"
    )
    parser.add_argument("coin", help="Coin name, symbol or id (e.g. 'bitcoin', 'BTC')")
    parser.add_argument(
        "--days",
        type=int,
        default=config.default_days,
        help=f"OHLC lookback window in days (default: {config.default_days})",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=config.bar_limit,
        help=f"Keep only the most recent N bars (default: {config.bar_limit})",
    )
    parser.add_argument(
        "--markers",
        action="store_true",
        help="Also print chart markers for the signals as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(
    args: argparse.Namespace,
    provider: MarketDataProvider,
    engine: SignalEngine | None = None,
) -> int:
    """Resolve the coin, compute signals and print the digest.

    Args:
        args: Parsed CLI arguments.
        provider: Market data source.
        engine: Signal engine (default parameters when omitted).

    Returns:
        Process exit code.
    """
    engine = engine or SignalEngine()

    try:
        coins = provider.get_top_coins(TOP_COINS_LIMIT)
    except ProviderError as e:
        logger.error(f"Failed to load coin list: {e}")
        print(f"Error loading coin list: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR

    coin = resolve_coin(coins, args.coin)
    if coin is None:
        suggestions = search_coins(coins, args.coin)
        print(f"Unknown coin: {args.coin!r}", file=sys.stderr)
        if suggestions:
            print("Did you mean:", file=sys.stderr)
            for s in suggestions:
                print(f"  {s.title}", file=sys.stderr)
        return EXIT_UNKNOWN_COIN

    try:
        bars = provider.get_ohlc(coin.id, args.days)
        bars = tail_bars(bars, args.limit)
        result = engine.compute(bars)
    except (ProviderError, InvalidBarsError) as e:
        logger.error(f"Failed to analyze {coin.id}: {e}")
        print(f"{coin.title}: error: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR

    print(format_summary(summarize(result), title=coin.title))

    if args.markers:
        print(json.dumps(signal_markers(result.signals), indent=2))

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    config = load_config()
    args = build_parser(config).parse_args(argv)

    if args.verbose:
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("src."):
                logging.getLogger(name).setLevel(logging.DEBUG)

    if args.limit < 1 or args.days < 1:
        print("--days and --limit must be >= 1", file=sys.stderr)
        return EXIT_DATA_ERROR

    return run(args, CoinGeckoProvider(config))


if __name__ == "__main__":
    sys.exit(main())
