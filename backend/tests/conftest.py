"""
Test fixtures for the Owner Occupancy Forecast backend tests.

Creates a temporary SQLite database with seed data and points the
settings at it so tests never touch production data.
"""
import os
import sqlite3
import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest

# Set test database path BEFORE importing the app
TEST_DB_PATH = Path(tempfile.gettempdir()) / "occupancy_forecast_test.db"
os.environ["DATABASE_PATH"] = str(TEST_DB_PATH)

from httpx import AsyncClient, ASGITransport
from occupancy_forecast.config import get_settings
from occupancy_forecast.db.schema import init_db
from occupancy_forecast.main import app
from occupancy_forecast.models import Booking, Property


# ── Seed data ──────────────────────────────────────────────────────────

TEST_OWNER_ID = "owner_1"
OTHER_OWNER_ID = "owner_2"
EMPTY_OWNER_ID = "owner_without_properties"
AS_OF = "2024-03-15"

SEED_PROPERTIES = [
    # id, owner_id, title, city, status, listing_type
    ("p1", TEST_OWNER_ID, "Villa Sunset", "Denpasar", "active", "rent"),
    ("p2", TEST_OWNER_ID, "City Loft", "Jakarta", "active", "rent"),
    ("p3", OTHER_OWNER_ID, "Hill House", "Bandung", "active", "rent"),
]

SEED_BOOKINGS = [
    # id, property_id, check_in, check_out, amount, status, created_at
    ("b1", "p1", "2024-01-10", "2024-01-20", 1100.0, "confirmed", "2024-01-02 09:00:00"),
    ("b2", "p1", "2024-01-25", "2024-02-05", 1200.0, "completed", "2024-01-15 10:30:00"),
    ("b3", "p2", "2024-03-01", "2024-03-10", 1000.0, "confirmed", "2024-02-20 08:00:00"),
    ("b4", "p2", "2024-02-01", "2024-02-03", 500.0, "cancelled", "2024-01-20 12:00:00"),
    # check-out before check-in: rejected at the repository boundary
    ("b5", "p1", "2024-03-10", "2024-03-05", 300.0, "confirmed", "2024-03-01 11:00:00"),
    ("b6", "p3", "2024-02-10", "2024-02-12", 700.0, "confirmed", "2024-02-01 11:00:00"),
]


def _seed_dashboard(db_path: Path):
    """Populate the dashboard database with minimal test data."""
    if db_path.exists():
        db_path.unlink()
    init_db(db_path)

    conn = sqlite3.connect(str(db_path))
    conn.executemany("""
        INSERT INTO properties (id, owner_id, title, city, status, listing_type)
        VALUES (?, ?, ?, ?, ?, ?)
    """, SEED_PROPERTIES)
    conn.executemany("""
        INSERT INTO rental_bookings
            (id, property_id, check_in_date, check_out_date, total_amount, booking_status, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """, SEED_BOOKINGS)
    conn.commit()
    conn.close()


# ── Fixtures ───────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def test_db():
    """Seeded test database; settings point at it for the whole session."""
    _seed_dashboard(TEST_DB_PATH)
    get_settings.cache_clear()
    assert get_settings().database_path == TEST_DB_PATH

    yield TEST_DB_PATH

    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            pass  # Windows may have file locked


@pytest.fixture
async def client(test_db):
    """Async test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_property():
    """Factory for Property records."""
    def _make(property_id="p1", title="", city=""):
        return Property(id=property_id, title=title, city=city, status="active", listing_type="rent")
    return _make


@pytest.fixture
def make_booking():
    """Factory for Booking records; dates accept ISO strings."""
    counter = {"n": 0}

    def _make(check_in, check_out, property_id="p1", amount=0.0, status="confirmed", created_at=None):
        counter["n"] += 1
        return Booking(
            id=f"bk{counter['n']}",
            property_id=property_id,
            check_in_date=date.fromisoformat(check_in),
            check_out_date=date.fromisoformat(check_out),
            total_amount=amount,
            status=status,
            created_at=datetime.fromisoformat(created_at or check_in),
        )
    return _make
