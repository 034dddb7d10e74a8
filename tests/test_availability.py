from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from rental.models import ReservationStatus
from rental.services.availability import (
    check_equipment_availability,
    get_available_quantity,
    overlaps,
    reserved_quantity,
)
from tests.fakes import FakeEquipmentRepository, FakeReservationRepository, FakeUnitOfWork, equipment

pytestmark = pytest.mark.unit


def d(day: int) -> date:
    return date(2025, 6, day)


def booked(start: int, end: int, quantity: int = 1, equipment_id: int = 1):
    return SimpleNamespace(
        equipment_id=equipment_id, date_from=d(start), date_to=d(end), quantity=quantity
    )


def _uow_with(stock: int, *spans, status=ReservationStatus.pending) -> FakeUnitOfWork:
    reservations = FakeReservationRepository()
    for span in spans:
        reservations.reservations.append(SimpleNamespace(id=0, status=status, items=[span]))
    return FakeUnitOfWork(FakeEquipmentRepository([equipment(1, stock=stock)]), reservations)


def test_overlap_is_inclusive_at_both_ends():
    assert overlaps(d(1), d(3), d(3), d(5))
    assert overlaps(d(3), d(5), d(1), d(3))
    assert overlaps(d(2), d(2), d(1), d(5))
    assert not overlaps(d(1), d(2), d(3), d(4))
    assert not overlaps(d(5), d(6), d(1), d(4))


def test_reserved_quantity_sums_only_overlapping_spans():
    spans = [booked(1, 2, 1), booked(2, 4, 2), booked(10, 12, 5)]
    assert reserved_quantity(spans, d(2), d(3)) == 3
    assert reserved_quantity(spans, d(5), d(9)) == 0


async def test_overlapping_bookings_exhaust_stock():
    uow = _uow_with(3, booked(1, 3, 1), booked(2, 5, 2))
    assert await get_available_quantity(uow, 1, d(2), d(3)) == 0
    assert not await check_equipment_availability(uow, 1, d(2), d(3))


async def test_non_overlapping_booking_does_not_reduce_stock():
    uow = _uow_with(3, booked(10, 12, 2))
    assert await get_available_quantity(uow, 1, d(1), d(5)) == 3


async def test_availability_never_negative():
    uow = _uow_with(1, booked(1, 5, 2), booked(1, 5, 2))
    assert await get_available_quantity(uow, 1, d(1), d(5)) == 0


async def test_unknown_equipment_has_no_availability():
    uow = _uow_with(3)
    assert await get_available_quantity(uow, 999, d(1), d(2)) == 0
    assert not await check_equipment_availability(uow, 999, d(1), d(2))


async def test_cancelled_reservations_count_by_default():
    uow = _uow_with(2, booked(1, 3, 2), status=ReservationStatus.cancelled)
    assert await get_available_quantity(uow, 1, d(1), d(3)) == 0


async def test_cancelled_reservations_can_be_ignored():
    uow = _uow_with(2, booked(1, 3, 2), status=ReservationStatus.cancelled)
    assert await get_available_quantity(uow, 1, d(1), d(3), ignore_cancelled=True) == 2
