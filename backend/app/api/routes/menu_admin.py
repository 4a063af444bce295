"""Menu Admin API routes - CRUD operations for menu items."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from app.core.security import RequireAdmin
from app.core.validators import PositiveIntId
from app.db.session import DbSession
from app.schemas.menu import MenuItemCreate, MenuItemResponse, MenuItemUpdate
from app.services.menu_service import MenuItemInUseError, MenuService, MenuValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[MenuItemResponse])
def list_menu_items(db: DbSession, admin: RequireAdmin):
    """Every menu item, including unavailable ones."""
    try:
        return MenuService(db).list_all()
    except Exception as e:
        logger.error(f"Error fetching menu items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch menu items")


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(data: MenuItemCreate, db: DbSession, admin: RequireAdmin):
    """Add a dish."""
    try:
        return MenuService(db).create(data)
    except MenuValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating menu item: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create menu item")


@router.put("/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: PositiveIntId, data: MenuItemUpdate, db: DbSession, admin: RequireAdmin):
    """Replace a dish's details."""
    try:
        item = MenuService(db).update(item_id, data)
    except MenuValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating menu item {item_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update menu item")

    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.delete("/{item_id}")
def delete_menu_item(item_id: PositiveIntId, db: DbSession, admin: RequireAdmin):
    """Remove a dish that no booking uses."""
    try:
        deleted = MenuService(db).delete(item_id)
    except MenuItemInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting menu item {item_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete menu item")

    if deleted is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return {"success": True}
