"""Tests for level validation and bucket accumulation."""

import math

import pytest

from orderbook_relay.aggregation.levels import BucketAccumulator, total_amount, validate_levels
from orderbook_relay.errors import InvalidInputError


class TestValidateLevels:
    def test_accepts_zero_and_positive(self):
        validate_levels([(0.0, 0.0), (1.5, 2.5)])  # Should not raise

    @pytest.mark.parametrize(
        "level",
        [(-1.0, 1.0), (1.0, -0.5), (math.nan, 1.0), (1.0, math.inf), (-math.inf, 1.0)],
    )
    def test_rejects_bad_values(self, level):
        with pytest.raises(InvalidInputError):
            validate_levels([(1.0, 1.0), level])


class TestBucketAccumulator:
    def test_weighted_price(self):
        acc = BucketAccumulator()
        acc.add(1.0, 10.0)
        acc.add(3.0, 20.0)
        assert acc.close() == (4.0, 17.5)

    def test_zero_amount_falls_back_to_last_price(self):
        acc = BucketAccumulator()
        acc.add(0.0, 10.0)
        acc.add(0.0, 12.0)
        assert acc.close() == (0.0, 12.0)

    def test_empty_flag(self):
        acc = BucketAccumulator()
        assert acc.empty
        acc.add(0.0, 1.0)
        assert not acc.empty


def test_total_amount():
    assert total_amount([(0.1, 1.0)] * 10) == pytest.approx(1.0)
    assert total_amount([]) == 0.0
