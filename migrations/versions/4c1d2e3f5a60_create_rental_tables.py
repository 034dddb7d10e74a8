"""create equipment, reservations and reservation_items

Revision ID: 4c1d2e3f5a60
Revises:
Create Date: 2025-03-02 00:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1d2e3f5a60"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_STATUSES = ("pending", "borrowed", "returned", "cancelled")


def upgrade() -> None:
    op.create_table(
        "equipment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("image_url", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("price_1_to_3_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("price_4_to_7_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("price_8_plus_days", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deposit", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("stock >= 0", name="ck_equipment_stock_nonneg"),
        sa.CheckConstraint(
            "price_1_to_3_days >= 0 AND price_4_to_7_days >= 0 AND price_8_plus_days >= 0",
            name="ck_equipment_prices_nonneg",
        ),
        sa.CheckConstraint("deposit >= 0", name="ck_equipment_deposit_nonneg"),
    )
    op.create_index("ix_equipment_id", "equipment", ["id"])
    op.create_index("ix_equipment_sort_order", "equipment", ["sort_order"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_number", sa.String(length=32), nullable=False, unique=True),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=False),
        sa.Column("customer_phone", sa.String(length=64), nullable=False),
        sa.Column("customer_address", sa.Text(), nullable=False),
        sa.Column("customer_note", sa.Text(), nullable=True),
        sa.Column("pickup_location", sa.String(length=32), nullable=False),
        sa.Column("date_from", sa.Date(), nullable=False),
        sa.Column("date_to", sa.Date(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_price", sa.Integer(), nullable=False),
        sa.Column("total_deposit", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*_STATUSES, name="reservation_status", native_enum=False, length=16),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.CheckConstraint("date_from <= date_to", name="ck_reservations_range"),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index("ix_reservations_status", "reservations", ["status"])
    op.create_index("ix_reservations_created_at", "reservations", ["created_at"])

    op.create_table(
        "reservation_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Integer(),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("equipment_id", sa.Integer(), nullable=False),
        sa.Column("date_from", sa.Date(), nullable=False),
        sa.Column("date_to", sa.Date(), nullable=False),
        sa.Column("days", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("daily_price", sa.Integer(), nullable=False),
        sa.Column("deposit", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity >= 1", name="ck_reservation_items_quantity"),
        sa.CheckConstraint("date_from <= date_to", name="ck_reservation_items_range"),
    )
    op.create_index("ix_reservation_items_reservation_id", "reservation_items", ["reservation_id"])
    # Availability scans every line of one equipment
    op.create_index("ix_reservation_items_equipment_id", "reservation_items", ["equipment_id"])


def downgrade() -> None:
    op.drop_index("ix_reservation_items_equipment_id", table_name="reservation_items")
    op.drop_index("ix_reservation_items_reservation_id", table_name="reservation_items")
    op.drop_table("reservation_items")
    op.drop_index("ix_reservations_created_at", table_name="reservations")
    op.drop_index("ix_reservations_status", table_name="reservations")
    op.drop_index("ix_reservations_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_equipment_sort_order", table_name="equipment")
    op.drop_index("ix_equipment_id", table_name="equipment")
    op.drop_table("equipment")
