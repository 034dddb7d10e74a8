from __future__ import annotations

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from rental.services.pricing import (
    calculate_billable_days,
    calculate_days,
    calculate_total_price,
    get_tiered_price,
    price_fixed_rate,
    quote_line,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (date(2025, 6, 1), date(2025, 6, 1), 1),
        (date(2025, 6, 1), date(2025, 6, 2), 2),
        (date(2025, 6, 1), date(2025, 6, 10), 10),
        # across a month and a leap day
        (date(2024, 2, 28), date(2024, 3, 1), 3),
    ],
)
def test_calculate_days_counts_both_endpoints(start, end, expected):
    assert calculate_days(start, end) == expected
    assert calculate_billable_days(start, end) == expected


def test_reversed_range_gives_same_count():
    a, b = date(2025, 6, 1), date(2025, 6, 5)
    assert calculate_days(b, a) == calculate_days(a, b) == 5


def test_days_always_at_least_one():
    start = date(2025, 1, 1)
    for offset in range(0, 40):
        assert calculate_days(start, start + timedelta(days=offset)) >= 1


@pytest.mark.parametrize(
    ("days", "expected"),
    [(1, 100), (3, 100), (4, 80), (7, 80), (8, 60), (30, 60)],
)
def test_tier_boundaries(days, expected):
    assert get_tiered_price(days, 100, 80, 60) == expected


def test_total_price_is_rate_times_quantity_times_days():
    assert calculate_total_price(5, 2, 100, 80, 60) == 800
    assert calculate_total_price(2, 1, 100, 80, 60) == 200


def test_quote_line_adds_deposit_per_unit():
    equipment = SimpleNamespace(
        price_1_to_3_days=100, price_4_to_7_days=80, price_8_plus_days=60, deposit=50
    )

    quote = quote_line(equipment, date(2025, 6, 1), date(2025, 6, 2), 1)

    assert quote.days == 2
    assert quote.daily_price == 100
    assert quote.rental == 200
    assert quote.deposit_total == 50
    assert quote.total == 250


def test_quote_line_uses_tier_of_whole_duration():
    equipment = SimpleNamespace(
        price_1_to_3_days=100, price_4_to_7_days=80, price_8_plus_days=60, deposit=10
    )

    quote = quote_line(equipment, date(2025, 6, 1), date(2025, 6, 8), 3)

    assert quote.days == 8
    assert quote.daily_price == 60
    assert quote.rental == 60 * 3 * 8
    assert quote.deposit_total == 30


def test_price_fixed_rate_ignores_tiers():
    quote = price_fixed_rate(120, 40, 2, date(2025, 6, 1), date(2025, 6, 10))
    assert quote.days == 10
    assert quote.rental == 120 * 2 * 10
    assert quote.total == 2400 + 80
