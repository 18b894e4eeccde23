"""Shared test fixtures for orderbook-relay tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure src is on the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from orderbook_relay.models.orderbook import OrderbookEntry  # noqa: E402


# ─── Sample data ──────────────────────────────────────────────────────────────

def make_entry(
    side: str = "bid",
    levels: list[list[float]] | None = None,
    base: str = "WETH",
    quote: str = "USDT",
    **extra: Any,
) -> OrderbookEntry:
    return OrderbookEntry(
        base_symbol=base,
        quote_symbol=quote,
        base_address=f"0x{base.lower()}",
        quote_address=f"0x{quote.lower()}",
        side=side,
        levels=levels or [],
        **extra,
    )


SAMPLE_SNAPSHOT_JSON: list[dict[str, Any]] = [
    {
        "base_symbol": "WBNB",
        "quote_symbol": "USDT",
        "base_address": "0xbb4c",
        "quote_address": "0x55d3",
        "side": "bid",
        "levels": [[2.0, 99.95], [2.0, 99.93], [3.0, 99.5], [5.0, 95.0]],
    },
    {
        "base_symbol": "USDT",
        "quote_symbol": "WBNB",
        "base_address": "0x55d3",
        "quote_address": "0xbb4c",
        "side": "bid",
        "levels": [[100.0, 0.01], [250.0, 0.0099]],
    },
]


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_snapshot_json() -> list[dict[str, Any]]:
    return [dict(entry, levels=[list(level) for level in entry["levels"]]) for entry in SAMPLE_SNAPSHOT_JSON]


@pytest.fixture
def sample_snapshot(sample_snapshot_json) -> list[OrderbookEntry]:
    return [OrderbookEntry(**entry) for entry in sample_snapshot_json]
