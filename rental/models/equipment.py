from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from rental.models.base import Base, utcnow


class Equipment(Base):
    __tablename__ = "equipment"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_equipment_stock_nonneg"),
        CheckConstraint(
            "price_1_to_3_days >= 0 AND price_4_to_7_days >= 0 AND price_8_plus_days >= 0",
            name="ck_equipment_prices_nonneg",
        ),
        CheckConstraint("deposit >= 0", name="ck_equipment_deposit_nonneg"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    # Daily rate per tier, whole currency units
    price_1_to_3_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_4_to_7_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_8_plus_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deposit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # per unit
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    categories: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=lambda: ["general"]
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"Equipment(id={self.id!r}, name={self.name!r}, stock={self.stock!r})"
