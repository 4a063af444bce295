"""Public menu routes."""

import logging

from fastapi import APIRouter, HTTPException, Request

from app.core.rate_limit import limiter
from app.db.session import DbSession
from app.schemas.menu import GroupedMenuResponse
from app.services.menu_service import MenuService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=GroupedMenuResponse)
@limiter.limit("120/minute")
def get_menu(request: Request, db: DbSession):
    """Available dishes grouped by course."""
    try:
        return MenuService(db).grouped_available()
    except Exception as e:
        logger.error(f"Error fetching menu items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch menu items")
