"""Utilities to map ORM/domain objects into DTOs."""

from __future__ import annotations

from collections.abc import Iterable

from rental.dto.equipment import EquipmentDTO, QuoteDTO
from rental.dto.reservation import ReservationDTO, ReservationItemDTO, ReservationWithItemsDTO
from rental.models import Equipment, Reservation, ReservationItem
from rental.services.pricing import LineQuote


def map_equipment(equipment: Equipment) -> EquipmentDTO:
    dto = EquipmentDTO.model_validate(equipment)
    if not dto.categories:
        dto.categories = ["general"]
    return dto


def map_item(item: ReservationItem) -> ReservationItemDTO:
    return ReservationItemDTO.model_validate(item)


def map_items(items: Iterable[ReservationItem]) -> list[ReservationItemDTO]:
    return [map_item(i) for i in items]


def map_reservation(reservation: Reservation) -> ReservationDTO:
    return ReservationDTO.model_validate(reservation)


def map_reservation_with_items(reservation: Reservation) -> ReservationWithItemsDTO:
    base = ReservationDTO.model_validate(reservation).model_dump()
    return ReservationWithItemsDTO(**base, items=map_items(reservation.items))


def map_quote(equipment_id: int, quote: LineQuote) -> QuoteDTO:
    return QuoteDTO(
        equipment_id=equipment_id,
        days=quote.days,
        quantity=quote.quantity,
        daily_price=quote.daily_price,
        deposit=quote.deposit,
        rental=quote.rental,
        deposit_total=quote.deposit_total,
        total=quote.total,
    )
