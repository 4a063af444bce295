"""Seed the Christmas set menu.

Replaces the current menu with the dishes below. Existing bookings
reference menu items, so they are removed first unless --keep-bookings is
given (in which case the seed aborts if any booking exists).

Usage:
    cd backend
    python seed_menu.py [--keep-bookings]
"""

import argparse
import logging
import os
import sys
from decimal import Decimal

# Ensure the backend app is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import func, select

from app.core.security import AdminSession
from app.core.config import settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.booking import Booking
from app.models.menu import CourseType, MenuItem
from app.services.booking_service import BookingService

logger = logging.getLogger("seed_menu")

# (name, course, description, surcharge, subcategory)
CHRISTMAS_MENU = [
    ("Crispy Satay Chicken", CourseType.STARTER, "Napa Salad, Hot Honey", "0.00", None),
    ("Brie & Chestnut Arancini", CourseType.STARTER, "Cranberry Jam, Caramelised Onions, Parmesan", "0.00", None),
    ("Strangford Lough Steamed Mussels", CourseType.STARTER, "Thai Coconut Broth, Crusty Bread", "0.00", None),
    ("Lobster, Prawn & Clam Seafood Stew", CourseType.STARTER, "Pickled Fennel", "0.00", None),
    ("Smoked Salmon & Crab Terrine", CourseType.STARTER, "Celeriac Remoulade, Sourdough Toast", "0.00", None),
    ("Pan Seared Scallops", CourseType.STARTER,
     "Black Pudding Crumb, Brioche Crouton, Mushroom Duxelle, Truffle Cream", "5.00", None),

    ("Turkey & Ham Roulade", CourseType.MAIN,
     "Chipolatas, Mash, Duck Fat Roasties, Honey Roast Veg, Cranberry Gel, Turkey Gravy", "0.00", "regular"),
    ("Roast Cod", CourseType.MAIN,
     "Champagne & Tarragon Beurre Blanc, Parsnip Puree, Crab & Prawn Bon Bon, Winter Greens", "0.00", "regular"),
    ("Pan Fried Seabass", CourseType.MAIN,
     "Saffron Potato, Creamed Leeks, Confit Cherry Tomato, Crispy Sage", "0.00", "regular"),
    ("Chestnut Crusted Salmon", CourseType.MAIN, "Fennel, Dill & Mascarpone Risotto, Crispy Kale", "0.00", "regular"),
    ("8oz Flat Iron", CourseType.MAIN,
     "Triple cooked chips, rocket & parmesan salad, peppercorn sauce", "0.00", "steak"),
    ("12oz Ribeye", CourseType.MAIN,
     "Triple cooked chips, rocket & parmesan salad, peppercorn sauce", "8.00", "steak"),
    ("10oz Salt Aged Sirloin", CourseType.MAIN,
     "Triple cooked chips, rocket & parmesan salad, peppercorn sauce", "8.00", "steak"),
    ("8oz Fillet", CourseType.MAIN,
     "Triple cooked chips, rocket & parmesan salad, peppercorn sauce", "10.00", "steak"),

    ("Christmas Pudding", CourseType.DESSERT, "Brandy Cream, Redcurrant Compote", "0.00", None),
    ("Dark Chocolate & Hazelnut Tart", CourseType.DESSERT, "Raspberry Popcorn, Marshmallow", "0.00", None),
    ("Lemon Posset", CourseType.DESSERT, "Blackberry Sauce, Palmier", "0.00", None),
    ("Sticky Toffee Pudding", CourseType.DESSERT, "Salted Caramel Sauce, Honeycomb Ice Cream", "0.00", None),
    ("Cashel Blue & Camembert", CourseType.DESSERT, "Crackers, Fig Chutney", "0.00", None),
]


def seed(keep_bookings: bool = False) -> int:
    """Replace the menu. Returns the number of dishes inserted."""
    if settings.database_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        booking_count = db.execute(select(func.count(Booking.id))).scalar_one()
        if booking_count:
            if keep_bookings:
                raise RuntimeError(
                    f"{booking_count} booking(s) reference the current menu; "
                    "rerun without --keep-bookings to clear them"
                )
            removed = BookingService(db, settings).delete_all(AdminSession(client_ip="cli"))
            logger.info(f"Cleared {removed} existing booking(s)")

        for item in db.execute(select(MenuItem)).scalars().all():
            db.delete(item)

        for name, course, description, surcharge, subcategory in CHRISTMAS_MENU:
            db.add(MenuItem(
                name=name,
                type=course,
                description=description,
                price=Decimal("0.00"),
                surcharge=Decimal(surcharge),
                subcategory=subcategory,
                available=True,
            ))
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info(f"Inserted {len(CHRISTMAS_MENU)} menu items")
    return len(CHRISTMAS_MENU)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    parser = argparse.ArgumentParser(description="Seed the Christmas dinner menu")
    parser.add_argument("--keep-bookings", action="store_true", help="abort instead of clearing bookings")
    args = parser.parse_args()
    try:
        seed(keep_bookings=args.keep_bookings)
    except Exception as e:
        logger.error(f"Menu seed failed: {e}")
        sys.exit(1)
