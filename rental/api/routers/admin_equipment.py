from __future__ import annotations

from fastapi import APIRouter, Depends

from rental.api.deps import get_equipment_service, require_admin
from rental.dto import EquipmentDTO
from rental.repositories.interfaces import SortOrderChange
from rental.schemas.common import ErrorResponse, OkResponse
from rental.schemas.equipment import EquipmentWriteRequest, ReorderEntry
from rental.services.equipment import EquipmentService

router = APIRouter(
    prefix="/admin/equipment",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}},
)


@router.post("", response_model=EquipmentDTO, status_code=201, summary="Add equipment")
async def create_equipment(
    payload: EquipmentWriteRequest, svc: EquipmentService = Depends(get_equipment_service)
):
    return await svc.create(payload.model_dump())


@router.post("/reorder", response_model=OkResponse, summary="Set catalog positions")
async def reorder_equipment(
    payload: list[ReorderEntry], svc: EquipmentService = Depends(get_equipment_service)
):
    await svc.reorder([SortOrderChange(equipment_id=e.id, sort_order=e.sort_order) for e in payload])
    return {"ok": True}


@router.put(
    "/{equipment_id}",
    response_model=EquipmentDTO,
    responses={404: {"model": ErrorResponse}},
    summary="Replace equipment",
)
async def update_equipment(
    equipment_id: int,
    payload: EquipmentWriteRequest,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.update(equipment_id, payload.model_dump())


@router.delete(
    "/{equipment_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Delete equipment",
)
async def delete_equipment(equipment_id: int, svc: EquipmentService = Depends(get_equipment_service)):
    await svc.delete(equipment_id)
    return None
