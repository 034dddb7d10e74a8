"""SQLAlchemy implementations of repository interfaces."""

from .equipment import SqlAlchemyEquipmentRepository
from .reservation import SqlAlchemyReservationRepository

__all__ = [
    "SqlAlchemyEquipmentRepository",
    "SqlAlchemyReservationRepository",
]
