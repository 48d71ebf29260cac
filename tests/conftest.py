"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite schema; the app and the tests share
the same single connection.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["KNOWN_BRANCHES"] = ""
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.main import app
from models.menu_management import MenuItem, SeasonalMenu
from utils.database import Base, SessionLocal, engine


@pytest.fixture(scope='function')
def db():
    """A database session on a freshly created schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """A test client for the app, sharing the test database."""
    return TestClient(app)


def make_item(item_id, name, category="Mains", price=10.0, base_price=None, seasonal_menu_id=None,
              is_available=True, description=""):
    return MenuItem(
        id=item_id,
        name=name,
        description=description,
        category=category,
        price=price,
        base_price=base_price if base_price is not None else price,
        seasonal_menu_id=seasonal_menu_id,
        is_available=is_available,
    )


def make_menu(menu_id, name="Seasonal", start_date="2024-06-01", end_date="2024-08-31",
              start_time="11:00", end_time="21:00", is_active=True):
    return SeasonalMenu(
        id=menu_id,
        name=name,
        description="",
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        is_active=is_active,
    )


def at(value: str) -> datetime:
    return datetime.fromisoformat(value)


@pytest.fixture
def summer_menu():
    return make_menu(1, name="Summer Special Menu")
