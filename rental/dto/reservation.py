"""DTOs for reservations and their line items."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from rental.models import ReservationStatus


class ReservationItemDTO(BaseModel):
    id: int
    reservation_id: int
    equipment_id: int
    date_from: date
    date_to: date
    days: int
    quantity: int
    daily_price: int
    deposit: int = Field(description="Deposit per unit")
    total_price: int = Field(description="Rental plus deposit for this line")

    model_config = ConfigDict(from_attributes=True)


class ReservationDTO(BaseModel):
    id: int
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    customer_note: str | None = None
    pickup_location: str
    date_from: date
    date_to: date
    quantity: int
    total_price: int = Field(description="Sum of line totals, deposits included")
    total_deposit: int
    status: ReservationStatus
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReservationWithItemsDTO(ReservationDTO):
    items: list[ReservationItemDTO] = Field(default_factory=list)


class CheckoutResultDTO(BaseModel):
    reservation: ReservationDTO
    items: list[ReservationItemDTO]
    payment_url: str
    qr_code: str = Field(description="SVG data URL encoding payment_url")
