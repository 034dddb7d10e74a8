"""API dependency helpers and service providers."""

from fastapi import Depends, Request

from rental import db
from rental.core.config import Settings, get_settings
from rental.core.exceptions import AuthenticationError
from rental.infra.unit_of_work import SqlAlchemyUnitOfWork
from rental.services.equipment import EquipmentService
from rental.services.reservations import ReservationService

__all__ = [
    "SESSION_USER_KEY",
    "get_equipment_service",
    "get_reservation_service",
    "get_settings",
    "require_admin",
    "uow_factory",
]

SESSION_USER_KEY = "admin_user"


def uow_factory() -> SqlAlchemyUnitOfWork:
    # Resolved per call so a reconfigured engine (tests, scripts) is picked up
    return SqlAlchemyUnitOfWork(db.SessionLocal)


def get_equipment_service(settings: Settings = Depends(get_settings)) -> EquipmentService:
    return EquipmentService(uow_factory, ignore_cancelled=settings.availability_ignore_cancelled)


def get_reservation_service(settings: Settings = Depends(get_settings)) -> ReservationService:
    return ReservationService(uow_factory, settings)


def require_admin(request: Request) -> str:
    """Return the logged-in admin name or fail with 401."""
    user = request.session.get(SESSION_USER_KEY)
    if not user:
        raise AuthenticationError("authentication required")
    return str(user)
