"""Tests for mid-price resolution."""

from conftest import make_entry
from orderbook_relay.aggregation.mid_price import resolve_mid_price


class TestResolveMidPrice:
    def test_both_sides(self):
        bid = make_entry("bid", [[1.0, 100.0], [1.0, 99.0]])
        ask = make_entry("ask", [[1.0, 102.0], [1.0, 103.0]])
        assert resolve_mid_price(bid, ask, bid) == 101.0

    def test_bid_only(self):
        bid = make_entry("bid", [[1.0, 100.0]])
        assert resolve_mid_price(bid, None, bid) == 100.0

    def test_empty_other_side_falls_back_to_current(self):
        bid = make_entry("bid", [])
        ask = make_entry("ask", [[1.0, 102.0]])
        assert resolve_mid_price(bid, ask, ask) == 102.0

    def test_current_side_empty_and_other_side_empty(self):
        bid = make_entry("bid", [])
        ask = make_entry("ask", [])
        assert resolve_mid_price(bid, ask, bid) is None

    def test_no_entries(self):
        assert resolve_mid_price(None, None) is None

    def test_uses_first_level_without_sorting(self):
        bid = make_entry("bid", [[1.0, 90.0], [1.0, 100.0]])
        ask = make_entry("ask", [[1.0, 110.0], [1.0, 101.0]])
        assert resolve_mid_price(bid, ask, ask) == 100.0
