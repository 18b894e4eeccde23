"""Pair listing and pair views over a snapshot.

The swap API publishes each direction of a pool as its own ``bid`` entry:
``WETH/USDC`` and ``USDC/WETH`` are the two sides of one market. These helpers
present a snapshot the way the orderbook page does.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from orderbook_relay.models.enums import Side
from orderbook_relay.models.orderbook import Level, OrderbookEntry


@dataclass(frozen=True)
class PairView:
    base: str
    quote: str
    bid: OrderbookEntry | None
    ask: OrderbookEntry | None


def unique_pairs(snapshot: Sequence[OrderbookEntry]) -> list[str]:
    """Return ``BASE/QUOTE`` labels, one per market, first direction seen wins."""
    pairs: list[str] = []
    seen: set[tuple[str, ...]] = set()
    for entry in snapshot:
        if entry.side is not Side.BID:
            continue
        tokens = tuple(sorted((entry.base_symbol, entry.quote_symbol)))
        if tokens in seen:
            continue
        seen.add(tokens)
        pairs.append(f"{entry.base_symbol}/{entry.quote_symbol}")
    return pairs


def select_pair_view(snapshot: Sequence[OrderbookEntry], base: str, quote: str) -> PairView:
    """Find the bid entry for BASE→QUOTE and, as its ask side, the bid entry for QUOTE→BASE."""
    bid = ask = None
    for entry in snapshot:
        if entry.side is not Side.BID:
            continue
        if bid is None and entry.base_symbol == base and entry.quote_symbol == quote:
            bid = entry
        elif ask is None and entry.base_symbol == quote and entry.quote_symbol == base:
            ask = entry
    return PairView(base=base, quote=quote, bid=bid, ask=ask)


def invert_levels(levels: Sequence[Level]) -> list[Level]:
    """Express reversed-direction levels in the pair's units: (amount*price, 1/price)."""
    return [(amount * price, 1 / price) for amount, price in levels if price > 0]
