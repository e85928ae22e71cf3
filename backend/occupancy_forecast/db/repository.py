"""
Repository readers for properties and rental bookings.

Rows are converted into validated Property/Booking records here, so the
forecast services never see untyped rows. Rows that fail validation are
skipped and counted.
READ-ONLY: Only retrieves data, no modifications.
"""
import logging
import sqlite3
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from occupancy_forecast.models import Booking, Property, InputError

logger = logging.getLogger(__name__)


class _SQLiteReader:
    """Shared connection handling and skip accounting."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.skipped_rows = 0

    def _fetch(self, query: str, params: Sequence = ()) -> List[sqlite3.Row]:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            return conn.execute(query, tuple(params)).fetchall()
        finally:
            conn.close()


class PropertyReader(_SQLiteReader):
    """Reads owner properties from the `properties` table."""

    def list_by_owner(self, owner_id: str) -> List[Property]:
        rows = self._fetch("""
            SELECT id, title, city, status, listing_type
            FROM properties
            WHERE owner_id = ?
            ORDER BY id
        """, (owner_id,))

        properties = []
        for row in rows:
            try:
                properties.append(Property(
                    id=str(row["id"]),
                    title=row["title"] or "",
                    city=row["city"] or "",
                    status=row["status"],
                    listing_type=row["listing_type"],
                ))
            except (ValidationError, InputError) as e:
                self.skipped_rows += 1
                logger.warning(f"[REPOSITORY] Skipping property row {row['id']}: {e}")

        logger.info(f"[REPOSITORY] Got {len(properties)} properties for owner {owner_id}")
        return properties


class BookingReader(_SQLiteReader):
    """Reads rental bookings from the `rental_bookings` table."""

    def list_by_properties(self, property_ids: Sequence[str], limit: int = 1000) -> List[Booking]:
        """
        Bounded batch read of bookings for the given properties, oldest first.

        Cancelled bookings are returned as stored; the forecast filters them.
        """
        if not property_ids:
            return []

        placeholders = ",".join("?" for _ in property_ids)
        rows = self._fetch(f"""
            SELECT id, property_id, check_in_date, check_out_date,
                   total_amount, booking_status, created_at
            FROM rental_bookings
            WHERE property_id IN ({placeholders})
            ORDER BY created_at ASC
            LIMIT ?
        """, [*property_ids, limit])

        bookings = []
        for row in rows:
            try:
                bookings.append(Booking(
                    id=str(row["id"]),
                    property_id=str(row["property_id"]),
                    check_in_date=row["check_in_date"],
                    check_out_date=row["check_out_date"],
                    total_amount=row["total_amount"],
                    status=row["booking_status"],
                    created_at=row["created_at"],
                ))
            except (ValidationError, InputError) as e:
                self.skipped_rows += 1
                logger.warning(f"[REPOSITORY] Skipping booking row {row['id']}: {e}")

        logger.info(f"[REPOSITORY] Got {len(bookings)} bookings for {len(property_ids)} properties")
        return bookings
