"""Pricing Service - deposit, surcharge and tip calculation for bookings.

Each guest pays a fixed deposit that depends on their course option, plus
the surcharge of every premium dish they pick. A 10% tip is then added on
top of the aggregate.

    subtotal = sum(deposits) + sum(surcharges)
    tip      = round2(subtotal * tip_rate)
    total    = subtotal + tip

Rounding happens once, on the aggregate, never per guest or per line.

The functions here are pure: they take the catalog as an argument and never
touch the database, so the same code prices the live quote shown to the
visitor and the authoritative total stored with the booking.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

CENT = Decimal("0.01")
DEFAULT_TIP_RATE = Decimal("0.10")


class CourseOption(str, Enum):
    """Meal size chosen per guest."""

    TWO_COURSE = "2-course"
    THREE_COURSE = "3-course"


def round2(amount: Decimal) -> Decimal:
    """Round a money amount to pence, half up."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class DepositTiers:
    """Per-guest deposit keyed by course option."""

    three_course: Decimal = Decimal("10.00")
    two_course: Decimal = Decimal("5.00")

    def for_option(self, option: CourseOption) -> Decimal:
        if CourseOption(option) == CourseOption.TWO_COURSE:
            return self.two_course
        return self.three_course

    @classmethod
    def from_settings(cls, settings) -> "DepositTiers":
        return cls(
            three_course=to_decimal(settings.deposit_amount),
            two_course=to_decimal(settings.two_course_deposit_amount),
        )


@dataclass
class GuestSelection:
    """One guest's course option and chosen dish ids (any may be missing)."""

    guest_name: str
    course_option: CourseOption
    starter_id: Optional[int] = None
    main_id: Optional[int] = None
    dessert_id: Optional[int] = None
    dietary_requirements: Optional[str] = None

    def selected_ids(self) -> List[int]:
        """Chosen dish ids in course order, skipping empty slots."""
        return [i for i in (self.starter_id, self.main_id, self.dessert_id) if i is not None]

    def slots(self) -> Dict[str, Optional[int]]:
        return {"starter": self.starter_id, "main": self.main_id, "dessert": self.dessert_id}


@dataclass(frozen=True)
class SurchargeLine:
    """A single premium dish charge, for itemized display."""

    guest_name: str
    item_name: str
    amount: Decimal


@dataclass
class PricingBreakdown:
    """Result of pricing a set of guest selections."""

    guest_count: int
    deposit_total: Decimal
    surcharge_total: Decimal
    subtotal: Decimal
    tip: Decimal
    total: Decimal
    surcharges: List[SurchargeLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guest_count": self.guest_count,
            "deposit_total": float(self.deposit_total),
            "surcharge_total": float(self.surcharge_total),
            "subtotal": float(self.subtotal),
            "tip": float(self.tip),
            "total": float(self.total),
            "surcharges": [
                {"guest_name": s.guest_name, "item_name": s.item_name, "amount": float(s.amount)}
                for s in self.surcharges
            ],
        }


def guest_surcharges(selection: GuestSelection, catalog: Mapping[int, Any]) -> List[SurchargeLine]:
    """Surcharge lines for one guest.

    Ids missing from the catalog contribute nothing; the visitor may not have
    picked that course yet.
    """
    lines = []
    for item_id in selection.selected_ids():
        item = catalog.get(item_id)
        if item is None:
            continue
        amount = to_decimal(getattr(item, "surcharge", 0))
        if amount > 0:
            lines.append(SurchargeLine(selection.guest_name, item.name, amount))
    return lines


def compute_total(
    selections: Iterable[GuestSelection],
    catalog: Mapping[int, Any],
    tiers: Optional[DepositTiers] = None,
    tip_rate: Decimal = DEFAULT_TIP_RATE,
) -> PricingBreakdown:
    """Price a booking.

    Args:
        selections: Guest selections, in display order.
        catalog: Menu items keyed by id. Anything with ``name`` and
            ``surcharge`` attributes works (ORM rows, test doubles).
        tiers: Deposit tiers; defaults to 10.00 / 5.00.
        tip_rate: Fraction added on top of the subtotal.

    Returns:
        PricingBreakdown with pence-rounded tip and total.
    """
    tiers = tiers or DepositTiers()
    deposit_total = Decimal("0")
    surcharge_lines: List[SurchargeLine] = []
    guest_count = 0

    for selection in selections:
        guest_count += 1
        deposit_total += tiers.for_option(selection.course_option)
        surcharge_lines.extend(guest_surcharges(selection, catalog))

    surcharge_total = sum((line.amount for line in surcharge_lines), Decimal("0"))
    subtotal = round2(deposit_total + surcharge_total)
    tip = round2(subtotal * to_decimal(tip_rate))
    total = round2(subtotal + tip)

    return PricingBreakdown(
        guest_count=guest_count,
        deposit_total=round2(deposit_total),
        surcharge_total=round2(surcharge_total),
        subtotal=subtotal,
        tip=tip,
        total=total,
        surcharges=surcharge_lines,
    )
