"""DTOs for catalog resources exposed via the public API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EquipmentDTO(BaseModel):
    id: int = Field(description="Equipment ID")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Long description")
    image_url: str = Field(default="", description="Image URL")
    price_1_to_3_days: int = Field(description="Daily rate for 1-3 day rentals")
    price_4_to_7_days: int = Field(description="Daily rate for 4-7 day rentals")
    price_8_plus_days: int = Field(description="Daily rate for rentals of 8+ days")
    deposit: int = Field(description="Refundable deposit per unit")
    stock: int = Field(description="Units owned")
    sort_order: int = Field(default=0, description="Catalog position")
    categories: list[str] = Field(default_factory=lambda: ["general"])

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 3,
                "name": "Tent for 3",
                "description": "Lightweight three-season tent",
                "image_url": "/images/tent-3.jpg",
                "price_1_to_3_days": 250,
                "price_4_to_7_days": 200,
                "price_8_plus_days": 150,
                "deposit": 1500,
                "stock": 4,
                "sort_order": 2,
                "categories": ["tents"],
            }
        },
    )


class AvailabilityDTO(BaseModel):
    available: bool
    available_quantity: int = Field(ge=0)


class QuoteDTO(BaseModel):
    equipment_id: int
    days: int = Field(description="Billable days, both endpoints included")
    quantity: int
    daily_price: int = Field(description="Tier rate applied to every day")
    deposit: int = Field(description="Deposit per unit")
    rental: int
    deposit_total: int
    total: int = Field(description="rental + deposit_total")
