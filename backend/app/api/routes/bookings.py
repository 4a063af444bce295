"""Public booking routes: quote, create and look up by reference."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from app.core.config import SettingsDep
from app.core.rate_limit import limiter
from app.db.session import DbSession
from app.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingReceiptResponse,
    QuoteRequest,
    QuoteResponse,
)
from app.services.booking_service import BookingCreationError, BookingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse)
@limiter.limit("120/minute")
def quote_booking(request: Request, body: QuoteRequest, db: DbSession, settings: SettingsDep):
    """Live price for the selections so far; nothing is stored."""
    service = BookingService(db, settings)
    breakdown = service.quote([guest.to_selection() for guest in body.guests])
    return breakdown.to_dict()


@router.post("", response_model=BookingReceiptResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def create_booking(request: Request, body: BookingCreate, db: DbSession, settings: SettingsDep):
    """Create a booking. The total is always recomputed server-side."""
    service = BookingService(db, settings)
    try:
        receipt = service.create_booking(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingCreationError:
        raise HTTPException(status_code=500, detail="Failed to create booking")

    return BookingReceiptResponse(
        id=receipt.id,
        booking_reference=receipt.booking_reference,
        total_amount=float(receipt.total_amount),
        total_guests=receipt.total_guests,
        payment_link=receipt.payment_link,
    )


@router.get("", response_model=BookingDetailResponse)
@limiter.limit("60/minute")
def get_booking(
    request: Request,
    db: DbSession,
    settings: SettingsDep,
    reference: Optional[str] = Query(None, max_length=40),
):
    """Booking with guests and their dishes, by booking reference."""
    if not reference:
        raise HTTPException(status_code=400, detail="Reference parameter required")

    try:
        booking = BookingService(db, settings).get_by_reference(reference)
    except Exception as e:
        logger.error(f"Error fetching booking {reference}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch booking")

    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking
