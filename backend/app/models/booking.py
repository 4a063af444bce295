"""Booking, guest and guest order models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.db.base import Base, TimestampMixin
from app.models.menu import MenuItem
from app.models.validators import non_negative, positive


class PaymentStatus(str, Enum):
    """Payment state of a booking's deposit."""

    PENDING = "pending"
    PAID = "paid"


class Booking(Base, TimestampMixin):
    """A party booking made by one organizer for one or more guests."""

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)
    booking_reference: Mapped[str] = mapped_column(String(40), unique=True, nullable=False, index=True)
    organizer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    organizer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    organizer_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    total_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name="payment_status", values_callable=lambda e: [m.value for m in e]),
        default=PaymentStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    guests: Mapped[list["Guest"]] = relationship(
        "Guest",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="Guest.id",
    )

    @validates("total_amount")
    def _validate_total(self, key, value):
        return non_negative(key, value)

    @validates("total_guests")
    def _validate_guest_count(self, key, value):
        return positive(key, value)


class Guest(Base):
    """One diner within a booking."""

    __tablename__ = "guests"

    id: Mapped[int] = mapped_column(primary_key=True)
    booking_id: Mapped[int] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    guest_name: Mapped[str] = mapped_column(String(200), nullable=False)
    dietary_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    booking: Mapped["Booking"] = relationship("Booking", back_populates="guests")
    orders: Mapped[list["GuestOrder"]] = relationship(
        "GuestOrder",
        back_populates="guest",
        cascade="all, delete-orphan",
        order_by="GuestOrder.id",
    )

    def order_for(self, course: str) -> Optional["GuestOrder"]:
        """Return the order in the given course slot, if any."""
        for order in self.orders:
            if order.menu_item is not None and order.menu_item.type.value == course:
                return order
        return None


class GuestOrder(Base):
    """A guest's dish choice for one course."""

    __tablename__ = "guest_orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    guest_id: Mapped[int] = mapped_column(
        ForeignKey("guests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id: Mapped[int] = mapped_column(
        ForeignKey("menu_items.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    guest: Mapped["Guest"] = relationship("Guest", back_populates="orders")
    menu_item: Mapped["MenuItem"] = relationship("MenuItem")
