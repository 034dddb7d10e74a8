"""Public DTO exports for FastAPI response models."""

from .equipment import AvailabilityDTO, EquipmentDTO, QuoteDTO
from .reservation import (
    CheckoutResultDTO,
    ReservationDTO,
    ReservationItemDTO,
    ReservationWithItemsDTO,
)

__all__ = [
    "AvailabilityDTO",
    "CheckoutResultDTO",
    "EquipmentDTO",
    "QuoteDTO",
    "ReservationDTO",
    "ReservationItemDTO",
    "ReservationWithItemsDTO",
]
