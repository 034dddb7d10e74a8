from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, status

from rental.api.deps import get_reservation_service, get_settings
from rental.core.config import Settings
from rental.dto import CheckoutResultDTO, ReservationItemDTO, ReservationWithItemsDTO
from rental.schemas.common import ErrorResponse
from rental.schemas.reservation import CheckoutRequest
from rental.services.notifications import send_contract_notification
from rental.services.reservations import ReservationService

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post(
    "",
    response_model=CheckoutResultDTO,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Check out a cart",
    description=(
        "Re-checks stock for every line, prices them server-side and stores the "
        "reservation. The contract PDF is emailed after the response."
    ),
)
async def checkout(
    payload: CheckoutRequest,
    background: BackgroundTasks,
    svc: ReservationService = Depends(get_reservation_service),
    settings: Settings = Depends(get_settings),
):
    outcome = await svc.checkout(payload)
    background.add_task(
        send_contract_notification,
        settings,
        outcome.result.reservation,
        outcome.result.items,
        outcome.equipment_names,
    )
    return outcome.result


@router.get(
    "/by-number/{order_number}",
    response_model=ReservationWithItemsDTO,
    responses={404: {"model": ErrorResponse}},
    summary="Reservation with its lines by order number",
)
async def get_by_order_number(
    order_number: str, svc: ReservationService = Depends(get_reservation_service)
):
    return await svc.get_by_order_number(order_number)


@router.get(
    "/{reservation_id}/items",
    response_model=list[ReservationItemDTO],
    responses={404: {"model": ErrorResponse}},
    summary="Lines of a reservation",
)
async def list_items(reservation_id: int, svc: ReservationService = Depends(get_reservation_service)):
    return await svc.list_items(reservation_id)
