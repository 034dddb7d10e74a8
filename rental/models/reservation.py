from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from rental.models.base import Base, utcnow


class ReservationStatus(str, Enum):
    pending = "pending"
    borrowed = "borrowed"
    returned = "returned"
    cancelled = "cancelled"


class PickupLocation(str, Enum):
    brno = "brno"
    bilovice = "bilovice"
    olomouc = "olomouc"


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (CheckConstraint("date_from <= date_to", name="ck_reservations_range"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    order_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(320), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_address: Mapped[str] = mapped_column(Text, nullable=False)
    customer_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    pickup_location: Mapped[str] = mapped_column(String(32), nullable=False)
    date_from: Mapped[date] = mapped_column(Date, nullable=False)
    date_to: Mapped[date] = mapped_column(Date, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    # total_price already contains the deposits; total_deposit is the refundable part
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    total_deposit: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[ReservationStatus] = mapped_column(
        SQLEnum(
            ReservationStatus,
            name="reservation_status",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ReservationStatus.pending,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    items: Mapped[list[ReservationItem]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ReservationItem.id",
    )

    def __repr__(self) -> str:
        return f"Reservation(order_number={self.order_number!r}, status={self.status!r})"


class ReservationItem(Base):
    __tablename__ = "reservation_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_reservation_items_quantity"),
        CheckConstraint("date_from <= date_to", name="ck_reservation_items_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reservation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # No FK: equipment may be deleted while historical lines stay
    equipment_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date_from: Mapped[date] = mapped_column(Date, nullable=False)
    date_to: Mapped[date] = mapped_column(Date, nullable=False)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    daily_price: Mapped[int] = mapped_column(Integer, nullable=False)
    deposit: Mapped[int] = mapped_column(Integer, nullable=False)  # per unit
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    reservation: Mapped[Reservation] = relationship(back_populates="items")
