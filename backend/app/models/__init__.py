"""SQLAlchemy models."""

from app.models.menu import MenuItem, CourseType
from app.models.booking import Booking, Guest, GuestOrder, PaymentStatus

__all__ = [
    "MenuItem",
    "CourseType",
    "Booking",
    "Guest",
    "GuestOrder",
    "PaymentStatus",
]
