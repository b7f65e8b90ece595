"""Coin listing and symbol lookup."""

from __future__ import annotations

from dataclasses import dataclass

MAX_SUGGESTIONS = 12


@dataclass(frozen=True)
class Coin:
    """A tradable coin.

    Attributes:
        id: Provider identifier used in API paths (e.g., 'bitcoin').
        name: Display name (e.g., 'Bitcoin').
        symbol: Upper-case ticker symbol (e.g., 'BTC').
    """

    id: str
    name: str
    symbol: str

    @property
    def title(self) -> str:
        """Display title, e.g. 'Bitcoin (BTC)'."""
        return f"{self.name} ({self.symbol})"


def search_coins(coins: list[Coin], query: str, limit: int = MAX_SUGGESTIONS) -> list[Coin]:
    """Find coins whose name or symbol contains the query.

    Matching is case-insensitive; input order (market cap) is kept.

    Args:
        coins: Coin listing.
        query: Free text typed by the user.
        limit: Maximum number of matches.

    Returns:
        Up to `limit` matches. A blank query matches nothing.
    """
    q = query.strip().lower()
    if not q:
        return []

    matches = [c for c in coins if q in c.name.lower() or q in c.symbol.lower()]
    return matches[:limit]


def resolve_coin(coins: list[Coin], query: str) -> Coin | None:
    """Resolve a query to a coin by exact name, symbol or id.

    Also accepts the 'Name (SYMBOL)' title form produced by `Coin.title`.

    Args:
        coins: Coin listing.
        query: Name, symbol or title.

    Returns:
        The first exact match in listing order, or None.
    """
    q = query.strip().lower()
    if not q:
        return None

    for coin in coins:
        if q in (coin.name.lower(), coin.symbol.lower(), coin.id.lower(), coin.title.lower()):
            return coin
    return None
