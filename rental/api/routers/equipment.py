from __future__ import annotations

from fastapi import APIRouter, Depends

from rental.api.deps import get_equipment_service
from rental.dto import AvailabilityDTO, EquipmentDTO, QuoteDTO, ReservationItemDTO
from rental.schemas.common import ErrorResponse
from rental.schemas.equipment import AvailabilityRequest, QuoteRequest
from rental.services.equipment import EquipmentService

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("", response_model=list[EquipmentDTO], summary="Catalog ordered by sort_order")
async def list_equipment(svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.list()


@router.get(
    "/{equipment_id}",
    response_model=EquipmentDTO,
    responses={404: {"model": ErrorResponse}},
    summary="Equipment detail",
)
async def get_equipment(equipment_id: int, svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.get(equipment_id)


@router.post(
    "/{equipment_id}/availability",
    response_model=AvailabilityDTO,
    summary="Free units for an inclusive date range",
    description="Unknown equipment reports 0 available units instead of 404.",
)
async def check_availability(
    equipment_id: int,
    payload: AvailabilityRequest,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.availability(equipment_id, payload.date_from, payload.date_to)


@router.post(
    "/{equipment_id}/quote",
    response_model=QuoteDTO,
    responses={404: {"model": ErrorResponse}},
    summary="Tiered price for a rental line",
)
async def quote(
    equipment_id: int,
    payload: QuoteRequest,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.quote(equipment_id, payload.date_from, payload.date_to, payload.quantity)


@router.get(
    "/{equipment_id}/reservations",
    response_model=list[ReservationItemDTO],
    summary="Booked lines for the availability calendar",
)
async def booked_items(equipment_id: int, svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.booked_items(equipment_id)
