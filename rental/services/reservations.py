"""Reservation use cases: checkout, public lookups and back-office edits."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from rental.core.config import Settings
from rental.core.exceptions import (
    ConflictError,
    InfrastructureError,
    InsufficientStockError,
    NotFoundError,
)
from rental.dto import (
    CheckoutResultDTO,
    ReservationDTO,
    ReservationItemDTO,
    ReservationWithItemsDTO,
)
from rental.dto.mappers import map_items, map_reservation, map_reservation_with_items
from rental.infra.unit_of_work import UnitOfWork, UnitOfWorkFactory
from rental.models import Reservation, ReservationItem, ReservationStatus
from rental.schemas.reservation import CartLine, CheckoutRequest, ItemWrite
from rental.services.availability import get_available_quantity, reserved_quantity
from rental.services.common import database_errors
from rental.services.contracts import render_contract
from rental.services.notifications import contract_party
from rental.services.order_numbers import OrderNumberGenerator, order_numbers
from rental.services.payment_qr import payment_url, qr_svg_data_url
from rental.services.pricing import LineQuote, price_fixed_rate, quote_line
from rental.services.status import resolve_status
from rental.services.status import today as local_today

logger = structlog.get_logger(__name__)


@dataclass
class CheckoutOutcome:
    result: CheckoutResultDTO
    equipment_names: dict[int, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ContractFile:
    order_number: str
    content: bytes

    @property
    def filename(self) -> str:
        return f"contract-{self.order_number}.pdf"


def _item_from_quote(line_from: date, line_to: date, equipment_id: int, quote: LineQuote) -> ReservationItem:
    return ReservationItem(
        equipment_id=equipment_id,
        date_from=line_from,
        date_to=line_to,
        days=quote.days,
        quantity=quote.quantity,
        daily_price=quote.daily_price,
        deposit=quote.deposit,
        total_price=quote.total,
    )


def _apply_totals(reservation: Reservation, items: Sequence[ReservationItem]) -> None:
    reservation.quantity = sum(int(i.quantity) for i in items)
    reservation.total_price = sum(int(i.total_price) for i in items)
    reservation.total_deposit = sum(int(i.deposit) * int(i.quantity) for i in items)


async def seed_order_counter(
    uow_factory: UnitOfWorkFactory,
    generator: OrderNumberGenerator = order_numbers,
    *,
    year: int | None = None,
) -> int:
    """Continue numbering after the highest persisted order of the year.

    Falls back to 1 when the store cannot be read.
    """
    try:
        async with uow_factory() as uow:
            existing = await uow.reservations.list_order_numbers()
    except Exception:
        # drivers raise OSError when the host is unreachable
        logger.error("order_counter_seed_failed", exc_info=True)
        generator.seed([], year)
        return 1
    counter = generator.seed(existing, year)
    logger.info("order_counter_seeded", next_counter=counter, next_number=generator.peek())
    return counter


class ReservationService:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        settings: Settings,
        *,
        generator: OrderNumberGenerator = order_numbers,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._settings = settings
        self._generator = generator
        self._clock = clock or (lambda: local_today(settings.timezone))

    # --- checkout ---

    async def _check_stock(
        self, uow: UnitOfWork, lines: Sequence[CartLine]
    ) -> tuple[list[ReservationItem], dict[int, str]]:
        locked = await uow.equipments.lock_many(line.equipment_id for line in lines)
        accepted: dict[int, list[CartLine]] = defaultdict(list)
        items: list[ReservationItem] = []
        names: dict[int, str] = {}

        for line in lines:
            equipment = locked.get(line.equipment_id)
            if equipment is None:
                raise InsufficientStockError(
                    equipment_id=line.equipment_id,
                    name=f"Equipment {line.equipment_id}",
                    available=0,
                    requested=line.quantity,
                )
            names[int(equipment.id)] = equipment.name
            available = await get_available_quantity(
                uow,
                line.equipment_id,
                line.date_from,
                line.date_to,
                ignore_cancelled=self._settings.availability_ignore_cancelled,
            )
            # Earlier lines of the same cart hold stock too
            available = max(
                0,
                available
                - reserved_quantity(accepted[line.equipment_id], line.date_from, line.date_to),
            )
            if available < line.quantity:
                raise InsufficientStockError(
                    equipment_id=line.equipment_id,
                    name=equipment.name,
                    available=available,
                    requested=line.quantity,
                )
            accepted[line.equipment_id].append(line)
            quote = quote_line(equipment, line.date_from, line.date_to, line.quantity)
            items.append(_item_from_quote(line.date_from, line.date_to, line.equipment_id, quote))
        return items, names

    async def checkout(self, request: CheckoutRequest) -> CheckoutOutcome:
        first = request.items[0]
        try:
            async with self._uow_factory() as uow:
                items, names = await self._check_stock(uow, request.items)
                reservation = Reservation(
                    order_number=self._generator.generate(),
                    customer_name=request.customer_name,
                    customer_email=str(request.customer_email),
                    customer_phone=request.customer_phone,
                    customer_address=request.customer_address,
                    customer_note=request.customer_note,
                    pickup_location=request.pickup_location.value,
                    date_from=first.date_from,
                    date_to=first.date_to,
                    status=ReservationStatus.pending,
                    items=items,
                )
                _apply_totals(reservation, items)
                await uow.reservations.add(reservation)
        except IntegrityError as exc:
            logger.warning("order_number_conflict", error=str(exc.orig))
            raise ConflictError("order number already in use, please retry") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureError("database unavailable") from exc

        url = payment_url(self._settings.public_base_url, reservation.order_number)
        result = CheckoutResultDTO(
            reservation=map_reservation(reservation),
            items=map_items(items),
            payment_url=url,
            qr_code=qr_svg_data_url(url),
        )
        logger.info(
            "reservation_created",
            order_number=reservation.order_number,
            lines=len(items),
            total_price=reservation.total_price,
        )
        return CheckoutOutcome(result=result, equipment_names=names)

    # --- public lookups ---

    async def get_by_order_number(self, order_number: str) -> ReservationWithItemsDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await uow.reservations.get_by_order_number(order_number)
                if reservation is None:
                    raise NotFoundError("reservation not found")
                return map_reservation_with_items(reservation)

    async def list_items(self, reservation_id: int) -> list[ReservationItemDTO]:
        with database_errors():
            async with self._uow_factory() as uow:
                if await uow.reservations.get(reservation_id) is None:
                    raise NotFoundError("reservation not found")
                return map_items(await uow.reservations.list_items(reservation_id))

    # --- back office ---

    async def list_all(self) -> list[ReservationWithItemsDTO]:
        """All reservations, newest first, with date-driven statuses persisted."""
        today = self._clock()
        with database_errors():
            async with self._uow_factory() as uow:
                rows = await uow.reservations.list_all()
                for reservation in rows:
                    resolved = resolve_status(
                        reservation.status, reservation.date_from, reservation.date_to, today
                    )
                    if resolved != reservation.status:
                        logger.info(
                            "reservation_status_auto_updated",
                            order_number=reservation.order_number,
                            old=ReservationStatus(reservation.status).value,
                            new=resolved.value,
                        )
                        reservation.status = resolved
                await uow.reservations.flush()
                return [map_reservation_with_items(r) for r in rows]

    async def _require(self, uow: UnitOfWork, reservation_id: int) -> Reservation:
        reservation = await uow.reservations.get(reservation_id)
        if reservation is None:
            raise NotFoundError("reservation not found")
        return reservation

    async def update(
        self, reservation_id: int, *, date_from: date, date_to: date, quantity: int
    ) -> ReservationDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await self._require(uow, reservation_id)
                reservation.date_from = date_from
                reservation.date_to = date_to
                reservation.quantity = quantity
                await uow.reservations.flush()
                dto = map_reservation(reservation)
        logger.info("reservation_updated", reservation_id=reservation_id)
        return dto

    async def replace_items(
        self, reservation_id: int, lines: Sequence[ItemWrite]
    ) -> ReservationWithItemsDTO:
        """Swap all lines for ``lines`` priced over the reservation's own range."""
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await self._require(uow, reservation_id)
                items = [
                    _item_from_quote(
                        reservation.date_from,
                        reservation.date_to,
                        line.equipment_id,
                        price_fixed_rate(
                            line.daily_price,
                            line.deposit,
                            line.quantity,
                            reservation.date_from,
                            reservation.date_to,
                        ),
                    )
                    for line in lines
                ]
                await uow.reservations.replace_items(reservation, items)
                _apply_totals(reservation, items)
                await uow.reservations.flush()
                dto = map_reservation_with_items(reservation)
        logger.info(
            "reservation_items_replaced",
            reservation_id=reservation_id,
            lines=len(items),
            total_price=dto.total_price,
        )
        return dto

    async def set_status(self, reservation_id: int, status: ReservationStatus) -> ReservationDTO:
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await self._require(uow, reservation_id)
                reservation.status = ReservationStatus(status)
                await uow.reservations.flush()
                dto = map_reservation(reservation)
        logger.info("reservation_status_set", reservation_id=reservation_id, status=dto.status.value)
        return dto

    async def delete(self, reservation_id: int) -> None:
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await self._require(uow, reservation_id)
                await uow.reservations.delete(reservation)
        logger.info("reservation_deleted", reservation_id=reservation_id)

    async def contract(self, reservation_id: int) -> ContractFile:
        with database_errors():
            async with self._uow_factory() as uow:
                reservation = await self._require(uow, reservation_id)
                snapshot = map_reservation_with_items(reservation)
                names = {int(e.id): e.name for e in await uow.equipments.list_all()}
        pdf = await run_in_threadpool(
            render_contract, snapshot, snapshot.items, names, contract_party(self._settings)
        )
        return ContractFile(order_number=snapshot.order_number, content=pdf)
