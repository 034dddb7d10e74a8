# rental/api/routers/healthz.py
from fastapi import APIRouter

from rental.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("", response_model=OkResponse, summary="Liveness probe (no DB access)")
async def healthz():
    return {"ok": True}
