from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from rental.schemas.common import DateRange


class AvailabilityRequest(DateRange):
    pass


class QuoteRequest(DateRange):
    quantity: int = Field(default=1, ge=1)


class EquipmentWriteRequest(BaseModel):
    """Create or fully replace a catalog entry."""

    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="")
    image_url: str = Field(default="", max_length=500)
    price_1_to_3_days: int = Field(ge=0)
    price_4_to_7_days: int = Field(ge=0)
    price_8_plus_days: int = Field(ge=0)
    deposit: int = Field(default=0, ge=0)
    stock: int = Field(ge=0)
    sort_order: int = Field(default=0)
    categories: list[str] = Field(default_factory=lambda: ["general"], min_length=1)

    @field_validator("categories")
    @classmethod
    def _strip_categories(cls, value: list[str]) -> list[str]:
        cleaned = [c.strip() for c in value if c and c.strip()]
        if not cleaned:
            raise ValueError("at least one category is required")
        return cleaned


class ReorderEntry(BaseModel):
    id: int
    sort_order: int
