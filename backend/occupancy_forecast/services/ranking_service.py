"""
Per-property occupancy ranking.
Booked days over a 365-day year, independent of the monthly window.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from occupancy_forecast.models import Booking, PropertyOccupancy, DataQualityWarning
from occupancy_forecast.services.dates import stay_days, round_half_up
from occupancy_forecast.services.occupancy_service import (
    BookingLike, PropertyLike, screen_bookings, screen_properties, build_data_quality,
)

DAYS_PER_YEAR = 365


def rank_properties(
    properties: Iterable[PropertyLike],
    bookings: Iterable[BookingLike],
) -> List[PropertyOccupancy]:
    """Ranking only; see rank_properties_with_quality."""
    ranking, _ = rank_properties_with_quality(properties, bookings)
    return ranking


def rank_properties_with_quality(
    properties: Iterable[PropertyLike],
    bookings: Iterable[BookingLike],
) -> Tuple[List[PropertyOccupancy], DataQualityWarning]:
    """
    Rank properties by booked days, highest occupancy first.

    Ties keep the input order of the properties (stable sort). Skipped
    records are reported in the returned DataQualityWarning.
    """
    props, skipped_properties = screen_properties(properties)
    active, skipped_bookings = screen_bookings(bookings)

    by_property: Dict[str, List[Booking]] = defaultdict(list)
    for booking in active:
        by_property[booking.property_id].append(booking)

    rows = []
    for prop in props:
        prop_bookings = by_property.get(prop.id, [])
        total_days = sum(stay_days(b.check_in_date, b.check_out_date) for b in prop_bookings)
        rows.append(PropertyOccupancy(
            property_id=prop.id,
            title=prop.title,
            city=prop.city,
            occupancy=min(100, round_half_up(total_days / DAYS_PER_YEAR * 100)),
            total_days=total_days,
            revenue=sum(b.total_amount for b in prop_bookings),
            booking_count=len(prop_bookings),
        ))

    ranking = sorted(rows, key=lambda r: r.occupancy, reverse=True)
    return ranking, build_data_quality(skipped_bookings, skipped_properties)
