"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from rental.models import Equipment, Reservation, ReservationItem, ReservationStatus


@dataclass
class SortOrderChange:
    equipment_id: int
    sort_order: int


class EquipmentRepository(Protocol):
    """Catalog persistence boundary."""

    async def list_all(self) -> list[Equipment]: ...

    async def get(self, equipment_id: int) -> Equipment | None: ...

    async def lock_many(self, equipment_ids: Iterable[int]) -> dict[int, Equipment]: ...

    async def create(self, **fields: Any) -> Equipment: ...

    async def update(self, equipment: Equipment, **fields: Any) -> Equipment: ...

    async def delete(self, equipment: Equipment) -> None: ...

    async def reorder(self, changes: Sequence[SortOrderChange]) -> int: ...


class ReservationRepository(Protocol):
    """Reservation and line-item persistence boundary."""

    async def add(self, reservation: Reservation) -> Reservation: ...

    async def get(self, reservation_id: int) -> Reservation | None: ...

    async def get_by_order_number(self, order_number: str) -> Reservation | None: ...

    async def list_all(self) -> list[Reservation]: ...

    async def list_order_numbers(self) -> list[str]: ...

    async def delete(self, reservation: Reservation) -> None: ...

    async def list_items(self, reservation_id: int) -> list[ReservationItem]: ...

    async def list_items_for_equipment(
        self,
        equipment_id: int,
        *,
        exclude_statuses: Sequence[ReservationStatus] = (),
    ) -> list[ReservationItem]: ...

    async def replace_items(
        self, reservation: Reservation, items: Sequence[ReservationItem]
    ) -> list[ReservationItem]: ...

    async def flush(self) -> None: ...
