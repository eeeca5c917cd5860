"""Tests for synthetic market data generation."""

import random

import pytest
from pydantic import ValidationError

from market.generator import (
    DATASETS,
    DAY_MS,
    MAX_VOLUME,
    available_datasets,
    generate,
    generate_dataset,
)

NOW_MS = 1_700_000_000_000


class TestGenerate:
    @pytest.mark.parametrize("kind", ["crypto", "stock", "forex"])
    @pytest.mark.parametrize("length", [1, 2, 100, 500])
    def test_length_spacing_and_prices(self, kind, length):
        series = generate(kind, length, rng=random.Random(11))
        assert len(series) == length
        for prev, cur in zip(series, series[1:]):
            assert cur.timestamp - prev.timestamp == DAY_MS
        assert all(p.price > 0 for p in series)

    def test_last_point_is_now(self):
        series = generate("stock", 30, rng=random.Random(0), now_ms=NOW_MS)
        assert series[-1].timestamp == NOW_MS
        assert series[0].timestamp == NOW_MS - 29 * DAY_MS

    def test_prices_rounded_to_cents(self):
        series = generate("crypto", 50, rng=random.Random(5))
        assert all(round(p.price, 2) == p.price for p in series)

    def test_volume_range(self):
        series = generate("crypto", 200, rng=random.Random(9))
        assert all(0 <= p.volume < MAX_VOLUME for p in series)

    def test_step_bounded_by_volatility(self):
        # Stock volatility is 2%; rounding to cents adds at most half a cent per side.
        series = generate("stock", 200, rng=random.Random(3))
        for prev, cur in zip(series, series[1:]):
            assert abs(cur.price / prev.price - 1) <= 0.02 + 1e-4

    def test_first_step_starts_from_start_price(self):
        first = generate("crypto", 1, rng=random.Random(1))[0]
        assert 45_000 * 0.95 - 0.01 <= first.price <= 45_000 * 1.05 + 0.01

    def test_seeded_runs_repeat(self):
        a = generate("forex", 40, rng=random.Random(21), now_ms=NOW_MS)
        b = generate("forex", 40, rng=random.Random(21), now_ms=NOW_MS)
        assert a == b

    def test_points_are_frozen(self):
        point = generate("stock", 1, rng=random.Random(0))[0]
        with pytest.raises(ValidationError):
            point.price = 1.0

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown instrument kind"):
            generate("bonds", 10)

    @pytest.mark.parametrize("length", [0, -5])
    def test_non_positive_length(self, length):
        with pytest.raises(ValueError, match="must be positive"):
            generate("stock", length)


class TestDatasets:
    def test_available(self):
        assert available_datasets() == ["BTC-USD", "S&P500", "EUR-USD"]

    def test_kinds(self):
        assert DATASETS == {"BTC-USD": "crypto", "S&P500": "stock", "EUR-USD": "forex"}

    def test_generate_dataset_default_length(self):
        assert len(generate_dataset("EUR-USD", rng=random.Random(2))) == 100

    def test_generate_dataset_matches_kind(self):
        by_name = generate_dataset("S&P500", 25, rng=random.Random(4), now_ms=NOW_MS)
        by_kind = generate("stock", 25, rng=random.Random(4), now_ms=NOW_MS)
        assert by_name == by_kind

    def test_unknown_dataset(self):
        with pytest.raises(KeyError, match="Unknown dataset 'DOGE-USD'"):
            generate_dataset("DOGE-USD")
