"""Catalog use cases: listing, admin CRUD, availability and quotes."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

import structlog

from rental.core.exceptions import NotFoundError
from rental.dto import AvailabilityDTO, EquipmentDTO, QuoteDTO, ReservationItemDTO
from rental.dto.mappers import map_equipment, map_items, map_quote
from rental.infra.unit_of_work import UnitOfWorkFactory
from rental.models import ReservationStatus
from rental.repositories.interfaces import SortOrderChange
from rental.services.availability import get_available_quantity
from rental.services.common import database_errors
from rental.services.pricing import quote_line

logger = structlog.get_logger(__name__)


class EquipmentService:
    def __init__(self, uow_factory: UnitOfWorkFactory, *, ignore_cancelled: bool = False) -> None:
        self._uow_factory = uow_factory
        self._ignore_cancelled = ignore_cancelled

    async def list(self) -> list[EquipmentDTO]:
        with database_errors():
            async with self._uow_factory() as uow:
                rows = await uow.equipments.list_all()
                return [map_equipment(e) for e in rows]

    async def get(self, equipment_id: int) -> EquipmentDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                equipment = await uow.equipments.get(equipment_id)
                if equipment is None:
                    raise NotFoundError("equipment not found")
                return map_equipment(equipment)

    async def create(self, fields: dict[str, Any]) -> EquipmentDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                equipment = await uow.equipments.create(**fields)
                dto = map_equipment(equipment)
        logger.info("equipment_created", equipment_id=dto.id, name=dto.name)
        return dto

    async def update(self, equipment_id: int, fields: dict[str, Any]) -> EquipmentDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                equipment = await uow.equipments.get(equipment_id)
                if equipment is None:
                    raise NotFoundError("equipment not found")
                await uow.equipments.update(equipment, **fields)
                dto = map_equipment(equipment)
        logger.info("equipment_updated", equipment_id=equipment_id)
        return dto

    async def delete(self, equipment_id: int) -> None:
        with database_errors():
            async with self._uow_factory() as uow:
                equipment = await uow.equipments.get(equipment_id)
                if equipment is None:
                    raise NotFoundError("equipment not found")
                await uow.equipments.delete(equipment)
        logger.info("equipment_deleted", equipment_id=equipment_id)

    async def reorder(self, changes: Sequence[SortOrderChange]) -> int:
        with database_errors():
            async with self._uow_factory() as uow:
                touched = await uow.equipments.reorder(changes)
        logger.info("equipment_reordered", requested=len(changes), updated=touched)
        return touched

    async def availability(self, equipment_id: int, date_from: date, date_to: date) -> AvailabilityDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                qty = await get_available_quantity(
                    uow, equipment_id, date_from, date_to, ignore_cancelled=self._ignore_cancelled
                )
        return AvailabilityDTO(available=qty > 0, available_quantity=qty)

    async def quote(
        self, equipment_id: int, date_from: date, date_to: date, quantity: int
    ) -> QuoteDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                equipment = await uow.equipments.get(equipment_id)
                if equipment is None:
                    raise NotFoundError("equipment not found")
                return map_quote(equipment_id, quote_line(equipment, date_from, date_to, quantity))

    async def booked_items(self, equipment_id: int) -> list[ReservationItemDTO]:
        """Reservation lines of one equipment, for the availability calendar."""
        excluded = (ReservationStatus.cancelled,) if self._ignore_cancelled else ()
        with database_errors():
            async with self._uow_factory() as uow:
                items = await uow.reservations.list_items_for_equipment(
                    equipment_id, exclude_statuses=excluded
                )
                return map_items(items)
