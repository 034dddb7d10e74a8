# Module imports so Alembic autogenerate sees every table
# rental/models/__init__.py
from .base import Base
from .equipment import Equipment
from .reservation import PickupLocation, Reservation, ReservationItem, ReservationStatus

__all__ = [
    "Base",
    "Equipment",
    "PickupLocation",
    "Reservation",
    "ReservationItem",
    "ReservationStatus",
]
