"""Admin routes: login check and booking management."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel

from app.core.config import SettingsDep
from app.core.rate_limit import limiter
from app.core.security import AdminAuthError, RequireAdmin, authenticate_admin
from app.core.validators import PositiveIntId
from app.db.session import DbSession
from app.schemas.booking import (
    BookingDeleteResponse,
    BookingDetailResponse,
    BookingResponse,
    BookingSummaryResponse,
    PaymentStatusUpdate,
)
from app.services import booking_report_service as reports
from app.services.booking_service import BookingService, InvalidPaymentStatusError

logger = logging.getLogger(__name__)
auth_logger = logging.getLogger("auth")

router = APIRouter()


class AdminLoginRequest(BaseModel):
    password: Optional[str] = None


class AdminLoginResponse(BaseModel):
    success: bool
    token: str


@router.post("/auth", response_model=AdminLoginResponse)
@limiter.limit("5/minute")
def admin_login(request: Request, body: AdminLoginRequest, settings: SettingsDep):
    """Check the admin password.

    The shared secret is the credential: the client sends it back as a
    Bearer token on every admin call.
    """
    client_ip = request.client.host if request.client else "unknown"
    if not body.password:
        raise HTTPException(status_code=400, detail="Password is required")

    try:
        authenticate_admin(body.password, settings, client_ip)
    except AdminAuthError:
        auth_logger.warning(f"Failed admin login - Client: {client_ip}")
        raise HTTPException(status_code=401, detail="Invalid password")

    auth_logger.info(f"Admin login - Client: {client_ip}")
    return AdminLoginResponse(success=True, token=body.password)


def _load_bookings(service: BookingService, admin, payment_status: Optional[str]):
    try:
        return service.list_all(admin, payment_status)
    except InvalidPaymentStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching bookings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch bookings")


@router.get("/bookings", response_model=List[BookingDetailResponse])
def list_bookings(
    db: DbSession,
    settings: SettingsDep,
    admin: RequireAdmin,
    payment_status: Optional[str] = Query(None, description="pending, paid or all"),
):
    """All bookings with guests and dishes, newest first."""
    return _load_bookings(BookingService(db, settings), admin, payment_status)


@router.get("/bookings/summary", response_model=BookingSummaryResponse)
def bookings_summary(
    db: DbSession,
    settings: SettingsDep,
    admin: RequireAdmin,
    payment_status: Optional[str] = Query(None),
):
    """Headline numbers and per-dish counts for the kitchen."""
    bookings = _load_bookings(BookingService(db, settings), admin, payment_status)
    stats = reports.summarize(bookings)
    dishes = reports.dish_summary(bookings)
    return {
        "stats": {
            "total_bookings": stats.total_bookings,
            "paid_bookings": stats.paid_bookings,
            "pending_bookings": stats.pending_bookings,
            "total_guests": stats.total_guests,
            "revenue": float(stats.revenue),
            "outstanding": float(stats.outstanding),
        },
        "dishes": {
            course: [{"name": name, "count": count} for name, count in entries]
            for course, entries in dishes.items()
        },
    }


@router.get("/bookings/export")
def export_bookings(
    db: DbSession,
    settings: SettingsDep,
    admin: RequireAdmin,
    payment_status: Optional[str] = Query(None),
):
    """One CSV row per guest."""
    bookings = _load_bookings(BookingService(db, settings), admin, payment_status)
    filename = f"bookings_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.csv"
    return Response(
        content=reports.export_csv(bookings),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
def update_booking_payment_status(
    booking_id: PositiveIntId,
    body: PaymentStatusUpdate,
    db: DbSession,
    settings: SettingsDep,
    admin: RequireAdmin,
):
    """Mark a booking paid or pending."""
    service = BookingService(db, settings)
    try:
        booking = service.set_payment_status(admin, booking_id, body.payment_status)
    except InvalidPaymentStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update booking")

    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.delete("/bookings/{booking_id}", response_model=BookingDeleteResponse)
def delete_booking(
    booking_id: PositiveIntId,
    db: DbSession,
    settings: SettingsDep,
    admin: RequireAdmin,
):
    """Delete a booking together with its guests and orders."""
    service = BookingService(db, settings)
    try:
        deleted = service.delete_booking(admin, booking_id)
    except Exception as e:
        logger.error(f"Error deleting booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete booking")

    if deleted is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return BookingDeleteResponse(booking=deleted)
