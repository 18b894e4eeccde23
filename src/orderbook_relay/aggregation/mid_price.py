"""Reference price for a trading pair."""

from __future__ import annotations

from orderbook_relay.models.orderbook import OrderbookEntry


def resolve_mid_price(
    bid: OrderbookEntry | None,
    ask: OrderbookEntry | None,
    current: OrderbookEntry | None = None,
) -> float | None:
    """Return the mid price of a pair, or None if no side has a level.

    Uses the first level of each side as its best price; levels are not
    re-sorted. With only one usable side, the current entry's best price
    is the reference.
    """
    if bid is not None and ask is not None and bid.levels and ask.levels:
        return (bid.levels[0][1] + ask.levels[0][1]) / 2
    if current is not None and current.levels:
        return current.levels[0][1]
    return None
