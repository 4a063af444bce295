"""API routes."""

from fastapi import APIRouter

from app.api.routes import admin, bookings, menu, menu_admin

api_router = APIRouter()

# Public booking flow
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])

# Admin (shared-secret Bearer)
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(menu_admin.router, prefix="/admin/menu", tags=["admin", "menu"])
