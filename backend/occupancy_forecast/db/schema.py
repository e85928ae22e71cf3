"""
Database Schema Definitions for the Owner Occupancy Forecast.

SQLite tables mirroring the dashboard's `properties` and `rental_bookings`
records. The forecast only reads them; writes happen in the booking flow.
"""

import sqlite3
from pathlib import Path


# =============================================================================
# DASHBOARD SCHEMA
# Owner properties and their rental bookings (READ-ONLY for the forecast)
# =============================================================================

DASHBOARD_SCHEMA = """
-- Owner properties
CREATE TABLE IF NOT EXISTS properties (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    title TEXT,
    city TEXT,
    status TEXT,
    listing_type TEXT,
    price REAL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_properties_owner ON properties(owner_id);

-- Rental bookings
CREATE TABLE IF NOT EXISTS rental_bookings (
    id TEXT PRIMARY KEY,
    property_id TEXT NOT NULL,
    check_in_date TEXT,          -- YYYY-MM-DD
    check_out_date TEXT,         -- YYYY-MM-DD
    total_amount REAL,
    total_days INTEGER,
    booking_status TEXT,         -- pending | confirmed | checked_in | completed | cancelled
    payment_status TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (property_id) REFERENCES properties(id)
);

CREATE INDEX IF NOT EXISTS idx_rental_bookings_property ON rental_bookings(property_id);
CREATE INDEX IF NOT EXISTS idx_rental_bookings_created ON rental_bookings(created_at);
"""


def init_db(db_path: Path):
    """Create the dashboard tables if they do not exist."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(DASHBOARD_SCHEMA)
        conn.commit()
    finally:
        conn.close()
