from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from rental.models import PickupLocation, ReservationStatus
from rental.schemas.common import DateRange


class CartLine(DateRange):
    equipment_id: int
    quantity: int = Field(default=1, ge=1)


class CheckoutRequest(BaseModel):
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1, max_length=64)
    customer_address: str = Field(min_length=1)
    customer_note: str | None = None
    pickup_location: PickupLocation
    items: list[CartLine] = Field(min_length=1, description="Cart lines, at least one")


class ReservationUpdateRequest(DateRange):
    quantity: int = Field(ge=1)


class ItemWrite(BaseModel):
    """A line as edited by an admin; price and deposit are taken as given."""

    equipment_id: int
    quantity: int = Field(ge=1)
    daily_price: int = Field(ge=0)
    deposit: int = Field(default=0, ge=0, description="Deposit per unit")


class ItemsReplaceRequest(BaseModel):
    items: list[ItemWrite] = Field(min_length=1)


class StatusUpdateRequest(BaseModel):
    status: ReservationStatus
