"""SQLAlchemy implementation of the reservation repository."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rental.models import Reservation, ReservationItem, ReservationStatus
from rental.repositories.interfaces import ReservationRepository


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, reservation: Reservation) -> Reservation:
        self._session.add(reservation)
        await self._session.flush()
        return reservation

    async def get(self, reservation_id: int) -> Reservation | None:
        return await self._session.get(Reservation, int(reservation_id))

    async def get_by_order_number(self, order_number: str) -> Reservation | None:
        stmt = select(Reservation).where(Reservation.order_number == order_number)
        return (await self._session.scalars(stmt)).first()

    async def list_all(self) -> list[Reservation]:
        stmt = select(Reservation).order_by(Reservation.created_at.desc(), Reservation.id.desc())
        return list((await self._session.scalars(stmt)).all())

    async def list_order_numbers(self) -> list[str]:
        rows = await self._session.scalars(select(Reservation.order_number))
        return [str(n) for n in rows.all()]

    async def delete(self, reservation: Reservation) -> None:
        # Items go with it through the delete-orphan cascade
        await self._session.delete(reservation)
        await self._session.flush()

    async def list_items(self, reservation_id: int) -> list[ReservationItem]:
        stmt = (
            select(ReservationItem)
            .where(ReservationItem.reservation_id == int(reservation_id))
            .order_by(ReservationItem.id.asc())
        )
        return list((await self._session.scalars(stmt)).all())

    async def list_items_for_equipment(
        self,
        equipment_id: int,
        *,
        exclude_statuses: Sequence[ReservationStatus] = (),
    ) -> list[ReservationItem]:
        stmt = select(ReservationItem).where(ReservationItem.equipment_id == int(equipment_id))
        if exclude_statuses:
            stmt = stmt.join(Reservation, Reservation.id == ReservationItem.reservation_id).where(
                Reservation.status.not_in(list(exclude_statuses))
            )
        stmt = stmt.order_by(ReservationItem.date_from.asc(), ReservationItem.id.asc())
        return list((await self._session.scalars(stmt)).all())

    async def replace_items(
        self, reservation: Reservation, items: Sequence[ReservationItem]
    ) -> list[ReservationItem]:
        reservation.items = list(items)
        await self._session.flush()
        return list(reservation.items)

    async def flush(self) -> None:
        await self._session.flush()
