"""Stock availability over inclusive date ranges."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from rental.infra.unit_of_work import UnitOfWork
from rental.models import ReservationStatus


class BookedSpan(Protocol):
    date_from: date
    date_to: date
    quantity: int


def overlaps(a_from: date, a_to: date, b_from: date, b_to: date) -> bool:
    """Inclusive interval overlap; touching endpoints count as overlapping."""
    return a_from <= b_to and b_from <= a_to


def reserved_quantity(spans: Iterable[BookedSpan], date_from: date, date_to: date) -> int:
    return sum(
        int(s.quantity) for s in spans if overlaps(s.date_from, s.date_to, date_from, date_to)
    )


async def get_available_quantity(
    uow: UnitOfWork,
    equipment_id: int,
    date_from: date,
    date_to: date,
    *,
    ignore_cancelled: bool = False,
) -> int:
    equipment = await uow.equipments.get(equipment_id)
    if equipment is None:
        return 0
    excluded = (ReservationStatus.cancelled,) if ignore_cancelled else ()
    items = await uow.reservations.list_items_for_equipment(
        equipment_id, exclude_statuses=excluded
    )
    reserved = reserved_quantity(items, date_from, date_to)
    return max(0, int(equipment.stock) - reserved)


async def check_equipment_availability(
    uow: UnitOfWork,
    equipment_id: int,
    date_from: date,
    date_to: date,
    *,
    ignore_cancelled: bool = False,
) -> bool:
    available = await get_available_quantity(
        uow, equipment_id, date_from, date_to, ignore_cancelled=ignore_cancelled
    )
    return available > 0

