"""Menu catalog schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.menu import CourseType


class MenuItemBase(BaseModel):
    """Fields shared by create and update requests.

    ``type`` stays a plain string so an unknown course is reported with the
    catalog's own message rather than a generic 422.
    """
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    surcharge: float = Field(default=0.0, ge=0)
    subcategory: Optional[str] = Field(default=None, max_length=50)
    available: bool = True


class MenuItemCreate(MenuItemBase):
    """Create menu item schema."""
    pass


class MenuItemUpdate(MenuItemBase):
    """Update menu item schema.

    Core fields are replaced as on create; ``surcharge`` and ``subcategory``
    are only changed when the request includes them.
    """
    surcharge: Optional[float] = Field(default=None, ge=0)


class MenuItemSummary(BaseModel):
    """Dish detail embedded in guest orders."""
    id: int
    name: str
    type: CourseType
    description: Optional[str] = None
    price: float
    surcharge: float

    model_config = {"from_attributes": True}


class MenuItemResponse(MenuItemSummary):
    """Full menu item."""
    subcategory: Optional[str] = None
    available: bool
    created_at: datetime
    updated_at: datetime


class GroupedMenuResponse(BaseModel):
    starter: List[MenuItemResponse] = []
    main: List[MenuItemResponse] = []
    dessert: List[MenuItemResponse] = []
