"""Booking reports for the admin dashboard: totals, dish counts, CSV export."""

import csv
import io
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from app.models.booking import Booking, PaymentStatus
from app.models.menu import CourseType
from app.services.pricing_service import round2

CSV_COLUMNS = [
    "Booking Reference",
    "Organizer",
    "Guest",
    "Starter",
    "Main",
    "Dessert",
    "Dietary Requirements",
    "Deposit",
    "Payment Status",
]


@dataclass
class BookingStats:
    total_bookings: int
    paid_bookings: int
    pending_bookings: int
    total_guests: int
    revenue: Decimal
    outstanding: Decimal


@dataclass
class GuestRow:
    """One line of the kitchen / payments sheet."""

    booking_reference: str
    organizer_name: str
    guest_name: str
    starter: str
    main: str
    dessert: str
    dietary_requirements: str
    deposit: Decimal
    payment_status: str


def summarize(bookings: Sequence[Booking]) -> BookingStats:
    """Counts and money totals; revenue only counts paid bookings."""
    paid = [b for b in bookings if b.payment_status == PaymentStatus.PAID]
    pending = [b for b in bookings if b.payment_status != PaymentStatus.PAID]
    return BookingStats(
        total_bookings=len(bookings),
        paid_bookings=len(paid),
        pending_bookings=len(pending),
        total_guests=sum(b.total_guests for b in bookings),
        revenue=round2(sum((Decimal(b.total_amount) for b in paid), Decimal("0"))),
        outstanding=round2(sum((Decimal(b.total_amount) for b in pending), Decimal("0"))),
    )


def dish_summary(bookings: Sequence[Booking]) -> Dict[str, List[Tuple[str, int]]]:
    """How many of each dish to prepare, per course, most ordered first."""
    counts: Dict[str, Counter] = {course.value: Counter() for course in CourseType}
    for booking in bookings:
        for guest in booking.guests:
            for order in guest.orders:
                if order.menu_item is None:
                    continue
                counts[order.menu_item.type.value][order.menu_item.name] += order.quantity
    return {
        course: sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
        for course, counter in counts.items()
    }


def guest_rows(bookings: Sequence[Booking]) -> List[GuestRow]:
    """Flatten bookings to one row per guest.

    The per-guest deposit is the booking total split evenly across guests.
    """
    rows = []
    for booking in bookings:
        share = round2(Decimal(booking.total_amount) / booking.total_guests) if booking.total_guests else Decimal("0.00")
        for guest in booking.guests:
            dishes = {}
            for course in CourseType:
                order = guest.order_for(course.value)
                dishes[course.value] = order.menu_item.name if order else "-"
            rows.append(GuestRow(
                booking_reference=booking.booking_reference,
                organizer_name=booking.organizer_name,
                guest_name=guest.guest_name,
                starter=dishes["starter"],
                main=dishes["main"],
                dessert=dishes["dessert"],
                dietary_requirements=guest.dietary_requirements or "",
                deposit=share,
                payment_status=booking.payment_status.value,
            ))
    return rows


def export_csv(bookings: Sequence[Booking]) -> str:
    """CSV text with one row per guest."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for row in guest_rows(bookings):
        writer.writerow([
            row.booking_reference,
            row.organizer_name,
            row.guest_name,
            row.starter,
            row.main,
            row.dessert,
            row.dietary_requirements,
            f"{row.deposit:.2f}",
            row.payment_status,
        ])
    return buffer.getvalue()
