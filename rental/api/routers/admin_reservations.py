from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from rental.api.deps import get_reservation_service, require_admin
from rental.dto import ReservationDTO, ReservationWithItemsDTO
from rental.schemas.common import ErrorResponse
from rental.schemas.reservation import (
    ItemsReplaceRequest,
    ReservationUpdateRequest,
    StatusUpdateRequest,
)
from rental.services.reservations import ReservationService

router = APIRouter(
    prefix="/admin/reservations",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=list[ReservationWithItemsDTO],
    summary="All reservations, newest first",
    description="Statuses are advanced by date (pending -> borrowed -> returned) and saved.",
)
async def list_reservations(svc: ReservationService = Depends(get_reservation_service)):
    return await svc.list_all()


@router.put("/{reservation_id}", response_model=ReservationDTO, summary="Change range and quantity")
async def update_reservation(
    reservation_id: int,
    payload: ReservationUpdateRequest,
    svc: ReservationService = Depends(get_reservation_service),
):
    return await svc.update(
        reservation_id,
        date_from=payload.date_from,
        date_to=payload.date_to,
        quantity=payload.quantity,
    )


@router.put(
    "/{reservation_id}/items",
    response_model=ReservationWithItemsDTO,
    summary="Replace and re-price lines",
)
async def replace_items(
    reservation_id: int,
    payload: ItemsReplaceRequest,
    svc: ReservationService = Depends(get_reservation_service),
):
    return await svc.replace_items(reservation_id, payload.items)


@router.patch("/{reservation_id}/status", response_model=ReservationDTO, summary="Set status")
async def set_status(
    reservation_id: int,
    payload: StatusUpdateRequest,
    svc: ReservationService = Depends(get_reservation_service),
):
    return await svc.set_status(reservation_id, payload.status)


@router.delete("/{reservation_id}", status_code=204, summary="Delete with its lines")
async def delete_reservation(
    reservation_id: int, svc: ReservationService = Depends(get_reservation_service)
):
    await svc.delete(reservation_id)
    return None


@router.get(
    "/{reservation_id}/contract",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Download the rental contract PDF",
)
async def download_contract(
    reservation_id: int, svc: ReservationService = Depends(get_reservation_service)
):
    contract = await svc.contract(reservation_id)
    return Response(
        content=contract.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{contract.filename}"'},
    )
