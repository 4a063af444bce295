"""Christmas menu catalog models."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Enum as SQLEnum, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.db.base import Base, TimestampMixin
from app.models.validators import non_negative, not_blank


class CourseType(str, Enum):
    """Course slot a dish belongs to."""

    STARTER = "starter"
    MAIN = "main"
    DESSERT = "dessert"


class MenuItem(Base, TimestampMixin):
    """A dish on the set menu.

    ``price`` is informational; the amount collected at booking time is the
    per-guest deposit plus ``surcharge`` for premium dishes.
    """

    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[CourseType] = mapped_column(
        SQLEnum(CourseType, name="course_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    subcategory: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # steak, regular
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    surcharge: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @validates("price", "surcharge")
    def _validate_amount(self, key, value):
        return non_negative(key, value)

    @validates("name")
    def _validate_name(self, key, value):
        return not_blank(key, value)

    def __repr__(self) -> str:
        return f"<MenuItem {self.id} {self.type.value if self.type else None}:{self.name}>"
