"""Test the SQLite repository readers."""
from datetime import date, datetime

from occupancy_forecast.db.repository import PropertyReader, BookingReader
from tests.conftest import TEST_OWNER_ID, EMPTY_OWNER_ID


def test_list_by_owner(test_db):
    reader = PropertyReader(test_db)
    properties = reader.list_by_owner(TEST_OWNER_ID)
    assert [p.id for p in properties] == ["p1", "p2"]
    assert properties[0].title == "Villa Sunset"
    assert properties[0].city == "Denpasar"
    assert reader.skipped_rows == 0


def test_list_by_owner_without_properties(test_db):
    assert PropertyReader(test_db).list_by_owner(EMPTY_OWNER_ID) == []


def test_list_by_properties_converts_rows(test_db):
    reader = BookingReader(test_db)
    bookings = reader.list_by_properties(["p1", "p2"])

    # b5 has check-out before check-in and is rejected
    assert [b.id for b in bookings] == ["b1", "b2", "b4", "b3"]
    assert reader.skipped_rows == 1

    b1 = bookings[0]
    assert b1.check_in_date == date(2024, 1, 10)
    assert b1.check_out_date == date(2024, 1, 20)
    assert b1.created_at == datetime(2024, 1, 2, 9, 0)
    assert b1.total_amount == 1100.0
    # Cancelled bookings are returned as stored
    assert any(b.is_cancelled for b in bookings)


def test_list_by_properties_is_bounded(test_db):
    bookings = BookingReader(test_db).list_by_properties(["p1", "p2", "p3"], limit=2)
    assert [b.id for b in bookings] == ["b1", "b2"]


def test_list_by_properties_empty_ids(test_db):
    assert BookingReader(test_db).list_by_properties([]) == []
