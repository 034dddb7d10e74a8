from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from rental import db
from rental.core.startup import is_migration_completed, last_migration_error
from rental.schemas.common import OkResponse
from rental.services.health import HealthService

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="503 while migrations are pending, otherwise runs SELECT 1.",
)
async def readyz():
    if not is_migration_completed():
        error = {"code": "migrations_pending", "message": "Database migrations are still running"}
        detail = last_migration_error()
        if detail:
            error["detail"] = detail
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error})

    async with db.SessionLocal() as session:
        return await HealthService(session).ok()
