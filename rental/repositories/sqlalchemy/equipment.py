"""SQLAlchemy implementation of the equipment repository."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rental.models import Equipment
from rental.repositories.interfaces import EquipmentRepository, SortOrderChange


class SqlAlchemyEquipmentRepository(EquipmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Equipment]:
        stmt = select(Equipment).order_by(Equipment.sort_order.asc(), Equipment.id.asc())
        return list((await self._session.scalars(stmt)).all())

    async def get(self, equipment_id: int) -> Equipment | None:
        return await self._session.get(Equipment, int(equipment_id))

    async def lock_many(self, equipment_ids: Iterable[int]) -> dict[int, Equipment]:
        ids = sorted({int(i) for i in equipment_ids})
        if not ids:
            return {}
        # Sorted ids keep lock acquisition order stable across checkouts.
        # SQLite ignores FOR UPDATE; it serializes writers itself.
        stmt = select(Equipment).where(Equipment.id.in_(ids)).order_by(Equipment.id).with_for_update()
        rows = (await self._session.scalars(stmt)).all()
        return {int(e.id): e for e in rows}

    async def create(self, **fields: Any) -> Equipment:
        equipment = Equipment(**fields)
        self._session.add(equipment)
        await self._session.flush()
        return equipment

    async def update(self, equipment: Equipment, **fields: Any) -> Equipment:
        for key, value in fields.items():
            setattr(equipment, key, value)
        await self._session.flush()
        return equipment

    async def delete(self, equipment: Equipment) -> None:
        await self._session.delete(equipment)
        await self._session.flush()

    async def reorder(self, changes: Sequence[SortOrderChange]) -> int:
        touched = 0
        for change in changes:
            result = await self._session.execute(
                update(Equipment)
                .where(Equipment.id == int(change.equipment_id))
                .values(sort_order=int(change.sort_order))
            )
            touched += result.rowcount or 0
        return touched
