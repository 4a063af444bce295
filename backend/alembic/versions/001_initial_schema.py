"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-11-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

course_type = sa.Enum("starter", "main", "dessert", name="course_type")
payment_status = sa.Enum("pending", "paid", name="payment_status")


def upgrade() -> None:
    # Menu items
    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", course_type, nullable=False),
        sa.Column("subcategory", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("surcharge", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
        sa.CheckConstraint("surcharge >= 0", name="ck_menu_items_surcharge_non_negative"),
    )
    op.create_index("ix_menu_items_type", "menu_items", ["type"])

    # Bookings
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_reference", sa.String(40), nullable=False),
        sa.Column("organizer_name", sa.String(200), nullable=False),
        sa.Column("organizer_email", sa.String(255), nullable=True),
        sa.Column("organizer_phone", sa.String(50), nullable=True),
        sa.Column("booking_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("total_guests", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_status", payment_status, nullable=False, server_default="pending"),
        sa.Column("payment_link", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_bookings_booking_reference", "bookings", ["booking_reference"], unique=True)
    op.create_index("ix_bookings_payment_status", "bookings", ["payment_status"])

    # Guests
    op.create_table(
        "guests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_id", sa.Integer(), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False),
        sa.Column("guest_name", sa.String(200), nullable=False),
        sa.Column("dietary_requirements", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_guests_booking_id", "guests", ["booking_id"])

    # Guest orders
    op.create_table(
        "guest_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("guest_id", sa.Integer(), sa.ForeignKey("guests.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "menu_item_id", sa.Integer(), sa.ForeignKey("menu_items.id", ondelete="RESTRICT"), nullable=False
        ),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_guest_orders_guest_id", "guest_orders", ["guest_id"])
    op.create_index("ix_guest_orders_menu_item_id", "guest_orders", ["menu_item_id"])


def downgrade() -> None:
    op.drop_index("ix_guest_orders_menu_item_id", table_name="guest_orders")
    op.drop_index("ix_guest_orders_guest_id", table_name="guest_orders")
    op.drop_table("guest_orders")
    op.drop_index("ix_guests_booking_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_bookings_payment_status", table_name="bookings")
    op.drop_index("ix_bookings_booking_reference", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_menu_items_type", table_name="menu_items")
    op.drop_table("menu_items")
    course_type.drop(op.get_bind(), checkfirst=True)
    payment_status.drop(op.get_bind(), checkfirst=True)
