"""Booking schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.booking import PaymentStatus
from app.schemas.menu import MenuItemSummary
from app.services.pricing_service import CourseOption, GuestSelection


# Requests

class CourseSelection(BaseModel):
    """Dish ids a guest picked, one per course slot."""
    starter: Optional[int] = Field(default=None, gt=0)
    main: Optional[int] = Field(default=None, gt=0)
    dessert: Optional[int] = Field(default=None, gt=0)


class GuestCreate(BaseModel):
    """A guest as submitted from the booking form."""
    model_config = ConfigDict(populate_by_name=True)

    guest_name: Optional[str] = None
    course_option: CourseOption = Field(default=CourseOption.THREE_COURSE, alias="courseOption")
    dietary_requirements: Optional[str] = None
    orders: CourseSelection = Field(default_factory=CourseSelection)

    def to_selection(self) -> GuestSelection:
        return GuestSelection(
            guest_name=self.guest_name or "",
            course_option=self.course_option,
            starter_id=self.orders.starter,
            main_id=self.orders.main,
            dessert_id=self.orders.dessert,
            dietary_requirements=self.dietary_requirements,
        )


class BookingCreate(BaseModel):
    """Booking form submission. Any client-side total is ignored."""
    model_config = ConfigDict(extra="ignore")

    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
    organizer_phone: Optional[str] = None
    notes: Optional[str] = None
    guests: List[GuestCreate] = Field(default_factory=list, max_length=50)


class QuoteRequest(BaseModel):
    """Guests to price without creating a booking."""
    guests: List[GuestCreate] = Field(default_factory=list, max_length=50)


class PaymentStatusUpdate(BaseModel):
    # Plain str so unknown values get the service's 400 message
    payment_status: Optional[str] = None


# Responses

class SurchargeLineResponse(BaseModel):
    guest_name: str
    item_name: str
    amount: float


class QuoteResponse(BaseModel):
    guest_count: int
    deposit_total: float
    surcharge_total: float
    subtotal: float
    tip: float
    total: float
    surcharges: List[SurchargeLineResponse] = []


class BookingReceiptResponse(BaseModel):
    id: int
    booking_reference: str
    total_amount: float
    total_guests: int
    payment_link: Optional[str] = None


class GuestOrderResponse(BaseModel):
    id: int
    menu_item_id: int
    quantity: int
    menu_item: Optional[MenuItemSummary] = None

    model_config = {"from_attributes": True}


class GuestResponse(BaseModel):
    id: int
    guest_name: str
    dietary_requirements: Optional[str] = None
    orders: List[GuestOrderResponse] = []

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    """Booking row without nested guests."""
    id: int
    booking_reference: str
    organizer_name: str
    organizer_email: Optional[str] = None
    organizer_phone: Optional[str] = None
    booking_date: datetime
    total_guests: int
    total_amount: float
    payment_status: PaymentStatus
    payment_link: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingDetailResponse(BookingResponse):
    """Booking with guests, orders and the dishes they reference."""
    guests: List[GuestResponse] = []


class BookingDeleteResponse(BaseModel):
    success: bool = True
    message: str = "Booking deleted successfully"
    booking: BookingResponse


class BookingStatsResponse(BaseModel):
    total_bookings: int
    paid_bookings: int
    pending_bookings: int
    total_guests: int
    revenue: float
    outstanding: float


class DishCountResponse(BaseModel):
    name: str
    count: int


class BookingSummaryResponse(BaseModel):
    stats: BookingStatsResponse
    dishes: dict[str, List[DishCountResponse]]
