"""Transaction boundary handed to the rental services."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rental.repositories.interfaces import EquipmentRepository, ReservationRepository
from rental.repositories.sqlalchemy import (
    SqlAlchemyEquipmentRepository,
    SqlAlchemyReservationRepository,
)


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    equipments: EquipmentRepository
    reservations: ReservationRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


UnitOfWorkFactory = Callable[[], UnitOfWork]


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One session per ``async with`` block.

    The stock check and the reservation insert of a checkout share this
    block, so row locks taken by ``equipments.lock_many`` hold until the
    commit on exit. Any exception rolls everything back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("unit of work is already open")
        self._session = self._session_factory()
        self.equipments = SqlAlchemyEquipmentRepository(self._session)
        self.reservations = SqlAlchemyReservationRepository(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            if exc_type is None:
                await session.commit()
            else:
                await session.rollback()
        finally:
            await session.close()

    async def commit(self) -> None:
        if self._session is not None:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session is not None:
            await self._session.rollback()
