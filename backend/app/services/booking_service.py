"""Booking Service - creates, looks up and administers dinner bookings.

Creation flow:
1. Validate organizer details and every guest's course selection
2. Load all referenced dishes in one query and check each sits in its slot
3. Re-price with the fresh catalog (a client-side total is never used)
4. Generate a booking reference and payment link
5. Insert booking, guests and orders in one transaction; roll back on any
   failure so a half-written booking is never visible

Admin operations take an ``AdminSession``; lookups that find nothing return
None rather than raising.
"""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.config import Settings
from app.core.security import AdminSession
from app.core.validators import is_valid_email
from app.models.booking import Booking, Guest, GuestOrder, PaymentStatus
from app.models.menu import MenuItem
from app.schemas.booking import BookingCreate, BookingResponse
from app.services.pricing_service import (
    DepositTiers,
    GuestSelection,
    PricingBreakdown,
    compute_total,
)
from app.services.selection_validator import validate_selections

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_uppercase
MAX_REFERENCE_ATTEMPTS = 5
STATUS_FILTER_ALL = "all"


class BookingValidationError(ValueError):
    """Booking-level input problem (organizer details, unknown dishes)."""


class InvalidPaymentStatusError(ValueError):
    """Payment status outside pending/paid."""


class BookingCreationError(Exception):
    """Persisting a booking failed; nothing was written."""


@dataclass(frozen=True)
class BookingReceipt:
    """What the visitor gets back after a successful booking."""

    id: int
    booking_reference: str
    total_amount: Decimal
    total_guests: int
    payment_link: str


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_booking_reference(
    prefix: str = "XM",
    random_length: int = 4,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Build ``PREFIX-<base36 ms timestamp>-<random base36>``, upper case."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(random_length))
    return f"{prefix}-{to_base36(timestamp_ms)}-{suffix}"


def generate_payment_link(amount: Decimal, base_url: str, link_hash: str) -> str:
    """Payment-request URL for the given amount, e.g. ``.../22.00?h=abc``."""
    return f"{base_url.rstrip('/')}/{Decimal(amount):.2f}?h={link_hash}"


def parse_payment_status(value: Optional[str]) -> PaymentStatus:
    try:
        return PaymentStatus(value)
    except ValueError:
        raise InvalidPaymentStatusError("Invalid payment status")


class BookingService:
    """Create and manage bookings."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.tiers = DepositTiers.from_settings(settings)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def load_catalog(self, item_ids: Iterable[int]) -> Dict[int, MenuItem]:
        """Fetch the given dishes in one query, keyed by id."""
        ids = sorted(set(item_ids))
        if not ids:
            return {}
        rows = self.db.execute(select(MenuItem).where(MenuItem.id.in_(ids))).scalars().all()
        return {item.id: item for item in rows}

    def quote(self, selections: List[GuestSelection]) -> PricingBreakdown:
        """Price selections against the current catalog without validating them."""
        catalog = self.load_catalog(i for s in selections for i in s.selected_ids())
        return compute_total(selections, catalog, self.tiers, self.settings.tip_rate)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _validate_organizer(self, form: BookingCreate) -> None:
        if not (form.organizer_name or "").strip():
            raise BookingValidationError("Organizer name is required")
        email = (form.organizer_email or "").strip()
        if email and not is_valid_email(email):
            raise BookingValidationError("Invalid email address")

    @staticmethod
    def _check_catalog(selections: List[GuestSelection], catalog: Dict[int, MenuItem]) -> None:
        """Every chosen id must exist and belong to the slot it was chosen for."""
        for selection in selections:
            for course, item_id in selection.slots().items():
                if item_id is None:
                    continue
                item = catalog.get(item_id)
                if item is None or item.type.value != course:
                    raise BookingValidationError(f"Menu item {item_id} is not a valid {course}")

    def _unique_reference(self) -> str:
        """Generate a reference not already stored.

        The unique constraint on the column still guards against a race
        between two concurrent submissions.
        """
        for _ in range(MAX_REFERENCE_ATTEMPTS):
            reference = generate_booking_reference(
                self.settings.booking_reference_prefix,
                self.settings.booking_reference_random_length,
            )
            exists = self.db.execute(
                select(Booking.id).where(Booking.booking_reference == reference)
            ).first()
            if exists is None:
                return reference
            logger.warning(f"Booking reference collision on {reference}, regenerating")
        raise BookingCreationError("Could not generate a unique booking reference")

    def create_booking(self, form: BookingCreate) -> BookingReceipt:
        """Validate, price and persist a booking atomically.

        Raises:
            BookingValidationError / SelectionValidationError: bad input,
                nothing written.
            BookingCreationError: the transaction failed and was rolled back.
        """
        self._validate_organizer(form)
        selections = [guest.to_selection() for guest in form.guests]
        validate_selections(selections)

        catalog = self.load_catalog(i for s in selections for i in s.selected_ids())
        self._check_catalog(selections, catalog)

        pricing = compute_total(selections, catalog, self.tiers, self.settings.tip_rate)

        try:
            reference = self._unique_reference()
            booking = Booking(
                booking_reference=reference,
                organizer_name=form.organizer_name.strip(),
                organizer_email=(form.organizer_email or "").strip() or None,
                organizer_phone=(form.organizer_phone or "").strip() or None,
                notes=form.notes,
                total_guests=len(selections),
                total_amount=pricing.total,
                payment_status=PaymentStatus.PENDING,
                payment_link=generate_payment_link(
                    pricing.total,
                    self.settings.payment_link_base_url,
                    self.settings.payment_link_hash,
                ),
            )
            for selection in selections:
                guest = Guest(
                    guest_name=selection.guest_name.strip(),
                    dietary_requirements=selection.dietary_requirements or None,
                )
                guest.orders = [
                    GuestOrder(menu_item_id=item_id, quantity=1)
                    for item_id in selection.selected_ids()
                ]
                booking.guests.append(guest)

            self.db.add(booking)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating booking: {e}", exc_info=True)
            raise BookingCreationError("Failed to create booking") from e

        self.db.refresh(booking)
        logger.info(
            f"Booking {booking.booking_reference} created: "
            f"{booking.total_guests} guests, total {pricing.total}"
        )
        return BookingReceipt(
            id=booking.id,
            booking_reference=booking.booking_reference,
            total_amount=pricing.total,
            total_guests=booking.total_guests,
            payment_link=booking.payment_link,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def _with_details():
        return selectinload(Booking.guests).selectinload(Guest.orders).selectinload(GuestOrder.menu_item)

    def get_by_reference(self, reference: str) -> Optional[Booking]:
        """Booking with guests, orders and dishes, or None."""
        stmt = (
            select(Booking)
            .options(self._with_details())
            .where(Booking.booking_reference == reference)
        )
        return self.db.execute(stmt).scalars().first()

    def get_by_id(self, admin: AdminSession, booking_id: int) -> Optional[Booking]:
        stmt = select(Booking).options(self._with_details()).where(Booking.id == booking_id)
        return self.db.execute(stmt).scalars().first()

    def list_all(
        self,
        admin: AdminSession,
        payment_status: Optional[Union[str, PaymentStatus]] = None,
    ) -> List[Booking]:
        """All bookings with details, newest first.

        An empty ``payment_status`` or "all" disables the filter.
        """
        stmt = select(Booking).options(self._with_details())
        if payment_status and payment_status != STATUS_FILTER_ALL:
            stmt = stmt.where(Booking.payment_status == parse_payment_status(payment_status))
        stmt = stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_payment_status(
        self,
        admin: AdminSession,
        booking_id: int,
        new_status: Optional[Union[str, PaymentStatus]],
    ) -> Optional[Booking]:
        """Mark a booking paid or pending.

        The status is checked before the row is touched, so an invalid value
        leaves the booking unchanged.
        """
        status = parse_payment_status(new_status)
        booking = self.db.get(Booking, booking_id)
        if booking is None:
            return None
        try:
            booking.payment_status = status
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(booking)
        logger.info(f"Booking {booking.booking_reference} payment status set to {status.value}")
        return booking

    def delete_booking(self, admin: AdminSession, booking_id: int) -> Optional[BookingResponse]:
        """Delete a booking with its guests and orders.

        Returns a snapshot of the deleted booking taken before the delete.
        """
        booking = self.get_by_id(admin, booking_id)
        if booking is None:
            return None
        snapshot = BookingResponse.model_validate(booking)
        try:
            self.db.delete(booking)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Booking {snapshot.booking_reference} deleted ({snapshot.total_guests} guests)")
        return snapshot

    def delete_all(self, admin: AdminSession) -> int:
        """Remove every booking. Used by the maintenance script."""
        bookings = self.db.execute(select(Booking)).scalars().all()
        try:
            for booking in bookings:
                self.db.delete(booking)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return len(bookings)
