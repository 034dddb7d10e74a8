"""Tiered daily pricing.

Rates step at 3 and 7 days: a 1-3 day rental uses ``price_1_to_3_days`` for
every day, 4-7 days use ``price_4_to_7_days``, and 8+ days use
``price_8_plus_days``. All amounts are whole currency units.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol


class TieredPrices(Protocol):
    price_1_to_3_days: int
    price_4_to_7_days: int
    price_8_plus_days: int
    deposit: int


@dataclass(frozen=True)
class LineQuote:
    days: int
    quantity: int
    daily_price: int
    deposit: int  # per unit
    rental: int
    deposit_total: int

    @property
    def total(self) -> int:
        return self.rental + self.deposit_total


def calculate_days(date_from: date, date_to: date) -> int:
    """Inclusive calendar day count; both endpoints are charged."""
    return abs((date_to - date_from).days) + 1


def calculate_billable_days(date_from: date, date_to: date) -> int:
    # Every day is billable (no free first day)
    return calculate_days(date_from, date_to)


def get_tiered_price(
    days: int, price_1_to_3_days: int, price_4_to_7_days: int, price_8_plus_days: int
) -> int:
    if days <= 3:
        return price_1_to_3_days
    if days <= 7:
        return price_4_to_7_days
    return price_8_plus_days


def calculate_total_price(
    days: int,
    quantity: int,
    price_1_to_3_days: int,
    price_4_to_7_days: int,
    price_8_plus_days: int,
) -> int:
    """Rental only; the caller adds ``deposit * quantity`` for the payable total."""
    rate = get_tiered_price(days, price_1_to_3_days, price_4_to_7_days, price_8_plus_days)
    return rate * quantity * days


def quote_line(equipment: TieredPrices, date_from: date, date_to: date, quantity: int) -> LineQuote:
    days = calculate_billable_days(date_from, date_to)
    daily = get_tiered_price(
        days,
        equipment.price_1_to_3_days,
        equipment.price_4_to_7_days,
        equipment.price_8_plus_days,
    )
    return LineQuote(
        days=days,
        quantity=quantity,
        daily_price=daily,
        deposit=equipment.deposit,
        rental=daily * quantity * days,
        deposit_total=equipment.deposit * quantity,
    )


def price_fixed_rate(
    daily_price: int, deposit: int, quantity: int, date_from: date, date_to: date
) -> LineQuote:
    """Quote a line whose per-day rate was agreed explicitly (admin re-pricing)."""
    days = calculate_billable_days(date_from, date_to)
    return LineQuote(
        days=days,
        quantity=quantity,
        daily_price=daily_price,
        deposit=deposit,
        rental=daily_price * quantity * days,
        deposit_total=deposit * quantity,
    )


__all__ = [
    "LineQuote",
    "calculate_billable_days",
    "calculate_days",
    "calculate_total_price",
    "get_tiered_price",
    "price_fixed_rate",
    "quote_line",
]
