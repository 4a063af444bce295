"""Delete every booking (guests and orders go with them).

Usage:
    cd backend
    python clear_bookings.py --yes
"""

import argparse
import logging
import os
import sys

# Ensure the backend app is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.config import settings
from app.core.security import AdminSession
from app.db.session import SessionLocal
from app.services.booking_service import BookingService

logger = logging.getLogger("clear_bookings")


def clear() -> int:
    db = SessionLocal()
    try:
        return BookingService(db, settings).delete_all(AdminSession(client_ip="cli"))
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    parser = argparse.ArgumentParser(description="Delete all bookings")
    parser.add_argument("--yes", action="store_true", help="confirm deletion")
    args = parser.parse_args()
    if not args.yes:
        parser.error("refusing to delete bookings without --yes")
    try:
        removed = clear()
    except Exception as e:
        logger.error(f"Clearing bookings failed: {e}")
        sys.exit(1)
    logger.info(f"Deleted {removed} booking(s) with their guests and orders")
