"""Menu catalog service: public grouped menu and admin CRUD."""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.booking import GuestOrder
from app.models.menu import CourseType, MenuItem
from app.schemas.menu import MenuItemBase

logger = logging.getLogger(__name__)

# Left untouched by an update that omits them
OPTIONAL_ON_UPDATE = ("surcharge", "subcategory")


class MenuValidationError(ValueError):
    """Bad menu item payload."""


class MenuItemInUseError(Exception):
    """Menu item is referenced by existing guest orders."""


def parse_course_type(value: Optional[str]) -> CourseType:
    try:
        return CourseType(value)
    except ValueError:
        raise MenuValidationError("Invalid menu item type")


class MenuService:
    """Read and maintain the set menu."""

    def __init__(self, db: Session):
        self.db = db

    def grouped_available(self) -> Dict[str, List[MenuItem]]:
        """Available dishes grouped by course, each group sorted by name."""
        stmt = (
            select(MenuItem)
            .where(MenuItem.available.is_(True))
            .order_by(MenuItem.type, MenuItem.name)
        )
        grouped: Dict[str, List[MenuItem]] = {course.value: [] for course in CourseType}
        for item in self.db.execute(stmt).scalars():
            grouped[item.type.value].append(item)
        return grouped

    def list_all(self) -> List[MenuItem]:
        stmt = select(MenuItem).order_by(MenuItem.type, MenuItem.name)
        return list(self.db.execute(stmt).scalars().all())

    def get(self, item_id: int) -> Optional[MenuItem]:
        return self.db.get(MenuItem, item_id)

    @staticmethod
    def _clean(data: MenuItemBase) -> dict:
        name = (data.name or "").strip()
        if not name or not data.type or data.price is None:
            raise MenuValidationError("Missing required fields")
        return {
            "name": name,
            "type": parse_course_type(data.type),
            "description": data.description or None,
            "price": Decimal(str(data.price)),
            "surcharge": Decimal(str(data.surcharge or 0)),
            "subcategory": data.subcategory or None,
            "available": data.available is not False,
        }

    def create(self, data: MenuItemBase) -> MenuItem:
        item = MenuItem(**self._clean(data))
        try:
            self.db.add(item)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(item)
        logger.info(f"Menu item created: {item.id} {item.name}")
        return item

    def update(self, item_id: int, data: MenuItemBase) -> Optional[MenuItem]:
        values = self._clean(data)
        for key in OPTIONAL_ON_UPDATE:
            if key not in data.model_fields_set:
                del values[key]
        item = self.get(item_id)
        if item is None:
            return None
        try:
            for key, value in values.items():
                setattr(item, key, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(item)
        return item

    def order_count(self, item_id: int) -> int:
        stmt = select(func.count(GuestOrder.id)).where(GuestOrder.menu_item_id == item_id)
        return self.db.execute(stmt).scalar_one()

    def delete(self, item_id: int) -> Optional[int]:
        """Delete a dish nobody has ordered. Returns the id, or None if missing."""
        item = self.get(item_id)
        if item is None:
            return None
        if self.order_count(item_id):
            raise MenuItemInUseError(
                "Menu item is part of existing bookings; mark it unavailable instead"
            )
        try:
            self.db.delete(item)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Menu item deleted: {item_id}")
        return item_id
