"""Pytest configuration and fixtures."""

import os

# Must be set before the app (and its cached settings) is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ADMIN_PASSWORD"] = "s3cret-xmas"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "true"

import pytest
from decimal import Decimal
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.security import AdminSession
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app
# Import all models to ensure they're registered with Base.metadata
from app.models import *
from app.models.menu import CourseType, MenuItem

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_ADMIN_PASSWORD = "s3cret-xmas"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings() -> Settings:
    """Settings with a known admin secret and payment link."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        admin_password=TEST_ADMIN_PASSWORD,
        payment_link_base_url="https://pay.example.com/xmas/",
        payment_link_hash="testhash",
        rate_limit_enabled=False,
    )


@pytest.fixture
def admin() -> AdminSession:
    return AdminSession(client_ip="testclient")


@pytest.fixture(scope="function")
def client(db_session: Session, settings: Settings) -> Generator[TestClient, None, None]:
    """Create a test client with database and settings overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    # Disable rate limiter during tests to avoid flaky failures
    from app.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    """Get admin authentication headers."""
    return {"Authorization": f"Bearer {TEST_ADMIN_PASSWORD}"}


def _dish(name: str, course: CourseType, surcharge: str = "0.00", **kwargs) -> MenuItem:
    kwargs.setdefault("available", True)
    return MenuItem(name=name, type=course, price=Decimal("0.00"), surcharge=Decimal(surcharge), **kwargs)


@pytest.fixture
def menu_items(db_session: Session) -> dict:
    """A small Christmas menu keyed by short name."""
    items = {
        "satay": _dish("Crispy Satay Chicken", CourseType.STARTER, description="Napa Salad, Hot Honey"),
        "scallops": _dish("Pan Seared Scallops", CourseType.STARTER, "5.00"),
        "turkey": _dish("Turkey & Ham Roulade", CourseType.MAIN, subcategory="regular"),
        "ribeye": _dish("12oz Ribeye", CourseType.MAIN, "8.00", subcategory="steak"),
        "pudding": _dish("Christmas Pudding", CourseType.DESSERT),
        "tart": _dish("Dark Chocolate & Hazelnut Tart", CourseType.DESSERT),
        "posset": _dish("Lemon Posset", CourseType.DESSERT, available=False),
    }
    db_session.add_all(items.values())
    db_session.commit()
    for item in items.values():
        db_session.refresh(item)
    return items


@pytest.fixture
def booking_payload(menu_items):
    """Factory for a booking form: Alice 3-course, Bob 2-course with scallops.

    Priced at deposits 10 + 5, surcharge 5, tip 2, total 22.00.
    """
    def build(**overrides) -> dict:
        payload = {
            "organizer_name": "Jane Organizer",
            "organizer_email": "jane@example.com",
            "organizer_phone": "07700 900123",
            "guests": [
                {
                    "guest_name": "Alice",
                    "courseOption": "3-course",
                    "dietary_requirements": "No nuts",
                    "orders": {
                        "starter": menu_items["satay"].id,
                        "main": menu_items["turkey"].id,
                        "dessert": menu_items["pudding"].id,
                    },
                },
                {
                    "guest_name": "Bob",
                    "courseOption": "2-course",
                    "orders": {
                        "starter": menu_items["scallops"].id,
                        "main": menu_items["turkey"].id,
                    },
                },
            ],
        }
        payload.update(overrides)
        return payload

    return build
