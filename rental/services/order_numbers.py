"""Year-scoped order numbers such as ``P2025001``."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable

from rental.core.config import get_settings
from rental.services.status import today as local_today

PREFIX = "P"


def _current_year() -> int:
    # Same calendar as the status resolver
    return local_today(get_settings().timezone).year


def format_order_number(year: int, counter: int) -> str:
    # Zero-padded to 3; wider counters are kept whole
    return f"{PREFIX}{year}{counter:03d}"


def next_counter(existing: Iterable[str], year: int) -> int:
    """Return ``max + 1`` over order numbers carrying ``year``'s prefix, else 1."""
    head = f"{PREFIX}{year}"
    highest = 0
    for number in existing:
        if not number or not number.startswith(head):
            continue
        suffix = number[len(head):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest + 1


class OrderNumberGenerator:
    """Process-wide counter; safe to call from threads and tasks."""

    def __init__(self, clock: Callable[[], int] = _current_year) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._year = clock()
        self._counter = 1

    def seed(self, existing: Iterable[str], year: int | None = None) -> int:
        with self._lock:
            self._year = year if year is not None else self._clock()
            self._counter = next_counter(existing, self._year)
            return self._counter

    def reset(self) -> None:
        with self._lock:
            self._year = self._clock()
            self._counter = 1

    def peek(self) -> str:
        with self._lock:
            return format_order_number(self._year, self._counter)

    def generate(self) -> str:
        with self._lock:
            year = self._clock()
            if year != self._year:
                self._year = year
                self._counter = 1
            number = format_order_number(self._year, self._counter)
            self._counter += 1
            return number


order_numbers = OrderNumberGenerator()
